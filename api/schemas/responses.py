from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from domain.models.currency import ExchangeRate


class ExchangeRateResponse(BaseModel):
	source_currency: str = Field(..., description='Currency the rate is quoted for')
	target_currency: str = Field(..., description='Currency the rate is quoted in')
	value: Decimal = Field(..., description='Price of one unit of the source currency')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {'source_currency': 'EUR', 'target_currency': 'CZK', 'value': 24.50}
		}
	)

	@classmethod
	def from_domain(cls, rate: ExchangeRate) -> 'ExchangeRateResponse':
		return cls(
			source_currency=rate.source_currency.code,
			target_currency=rate.target_currency.code,
			value=rate.value,
		)


class ExchangeRatesResponse(BaseModel):
	rates: list[ExchangeRateResponse] = Field(description='Rates published by the source')
	count: int = Field(description='Number of rates returned')

	model_config = ConfigDict(
		json_schema_extra={
			'examples': [
				{
					'rates': [{'source_currency': 'EUR', 'target_currency': 'CZK', 'value': 24.50}],
					'count': 1,
				}
			]
		}
	)


class HealthResponse(BaseModel):
	status: str
