from .responses import ExchangeRateResponse, ExchangeRatesResponse, HealthResponse

__all__ = [
	'ExchangeRateResponse',
	'ExchangeRatesResponse',
	'HealthResponse',
]
