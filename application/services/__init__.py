from .exchange_rate_provider import ExchangeRateProvider
from .rate_matcher import match_exchange_rates

__all__ = ['ExchangeRateProvider', 'match_exchange_rates']
