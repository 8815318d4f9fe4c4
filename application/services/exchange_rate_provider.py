import logging
from collections.abc import Iterable

from config.settings import Settings
from domain.exceptions.currency import AppError, FetchError
from domain.models.currency import Currency, ExchangeRate
from infrastructure.cache.rate_cache import RateCache
from infrastructure.providers.cnb import CnbClient

from .rate_matcher import match_exchange_rates

logger = logging.getLogger(__name__)


class ExchangeRateProvider:
	def __init__(self, cache: RateCache):
		self.cache = cache

	@classmethod
	def from_settings(cls, settings: Settings) -> 'ExchangeRateProvider':
		client = CnbClient(
			base_url=settings.CNB_BASE_URL,
			timeout=settings.REQUEST_TIMEOUT,
			max_attempts=settings.FETCH_MAX_ATTEMPTS,
		)
		return cls(RateCache(client, settings.cache_ttl))

	async def get_exchange_rates(self, currencies: Iterable[Currency]) -> list[ExchangeRate]:
		"""
		Return the exchange rates the source defines for the given currencies.

		Only rates the source publishes are returned; an inverse such as
		CZK/USD is never derived from USD/CZK. Currencies the source does not
		provide are ignored.
		"""
		try:
			snapshot = await self.cache.get_rates()
		except FetchError as e:
			logger.error(f'Exchange rates unavailable: {e}')
			raise AppError('Failed to fetch exchange rates') from e

		return match_exchange_rates(currencies, snapshot, logger)

	async def close(self) -> None:
		await self.cache.close()
