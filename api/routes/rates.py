from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_exchange_rate_provider
from api.schemas import ExchangeRateResponse, ExchangeRatesResponse
from application.services import ExchangeRateProvider
from domain.models.currency import Currency

router = APIRouter(prefix='/api', tags=['rates'])

CURRENCY_CODE_LENGTH = 3


def _is_currency_code(code: str) -> bool:
	return len(code) == CURRENCY_CODE_LENGTH and code.isascii() and code.isalpha()


def _parse_currencies(raw_codes: list[str]) -> list[Currency]:
	codes = [code.strip().upper() for raw in raw_codes for code in raw.split(',')]
	invalid = [code for code in codes if not _is_currency_code(code)]
	if invalid:
		raise HTTPException(
			status_code=422,
			detail=f'Invalid currency codes: {", ".join(repr(code) for code in invalid)}',
		)
	return [Currency(code) for code in codes]


@router.get(
	'/rates',
	response_model=ExchangeRatesResponse,
	status_code=status.HTTP_200_OK,
	summary='Get exchange rates published by the source for the given currencies',
)
async def get_exchange_rates(
	currencies: Annotated[
		list[str],
		Query(description='Currency codes, repeated or comma separated'),
	],
	provider: Annotated[ExchangeRateProvider, Depends(get_exchange_rate_provider)],
) -> ExchangeRatesResponse:
	rates = await provider.get_exchange_rates(_parse_currencies(currencies))
	return ExchangeRatesResponse(
		rates=[ExchangeRateResponse.from_domain(rate) for rate in rates],
		count=len(rates),
	)
