import logging
from datetime import UTC, date, datetime
from decimal import Decimal

import httpx
from tenacity import (
	AsyncRetrying,
	before_sleep_log,
	retry_if_exception,
	stop_after_attempt,
	wait_exponential,
)
from tenacity.wait import wait_base

from domain.exceptions.currency import FetchError
from domain.models.currency import RateSnapshot, SourceRate
from infrastructure.providers.base import ExchangeRateSource

logger = logging.getLogger(__name__)


def _is_transient(exc: BaseException) -> bool:
	if isinstance(exc, httpx.TransportError):
		return True
	return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code >= 500


class CnbClient(ExchangeRateSource):
	"""Czech National Bank daily exchange rate fixing."""

	BASE_URL = 'https://api.cnb.cz/cnbapi'
	DAILY_RATES_ENDPOINT = 'exrates/daily'

	def __init__(
		self,
		base_url: str = BASE_URL,
		client: httpx.AsyncClient | None = None,
		timeout: int = 10,
		max_attempts: int = 3,
		retry_wait: wait_base | None = None,
	):
		self.base_url = base_url.rstrip('/')
		self.max_attempts = max_attempts
		self._client = client or httpx.AsyncClient(timeout=timeout)
		self._retry_wait = retry_wait or wait_exponential(multiplier=0.5, max=5)

	@property
	def name(self) -> str:
		return 'cnb'

	async def fetch_rates(self) -> RateSnapshot:
		data = await self._request(self.DAILY_RATES_ENDPOINT, {'lang': 'EN'})
		snapshot = self._parse_snapshot(data)
		logger.info(f'Fetched {len(snapshot)} rates from CNB valid for {snapshot.valid_for}')
		return snapshot

	async def _request(self, endpoint: str, params: dict) -> dict:
		url = f'{self.base_url}/{endpoint}'

		try:
			async for attempt in AsyncRetrying(
				stop=stop_after_attempt(self.max_attempts),
				wait=self._retry_wait,
				retry=retry_if_exception(_is_transient),
				before_sleep=before_sleep_log(logger, logging.WARNING),
				reraise=True,
			):
				with attempt:
					response = await self._client.get(url, params=params)
					response.raise_for_status()

		except httpx.HTTPStatusError as e:
			raise FetchError(
				f'CNB HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise FetchError(f'CNB request failed: {e.__class__.__name__}') from e

		try:
			return response.json()
		except ValueError as e:
			raise FetchError('CNB response is not valid JSON') from e

	def _parse_snapshot(self, data: dict) -> RateSnapshot:
		try:
			items = data['rates']
			rates = tuple(self._parse_rate(item) for item in items)
			raw_valid_for = items[0].get('validFor') if items else None
			valid_for = date.fromisoformat(raw_valid_for) if raw_valid_for else None
		except (KeyError, IndexError, TypeError, ValueError, ArithmeticError) as e:
			raise FetchError(f'CNB response parsing error: {e!r}') from e

		return RateSnapshot(rates=rates, captured_at=datetime.now(UTC), valid_for=valid_for)

	@staticmethod
	def _parse_rate(item: dict) -> SourceRate:
		raw_amount = item['amount']
		if isinstance(raw_amount, bool) or int(raw_amount) != raw_amount:
			raise ValueError(f"amount for {item['currencyCode']} is not a whole number: {raw_amount!r}")
		amount = int(raw_amount)
		rate = Decimal(str(item['rate']))
		if not rate.is_finite():
			raise ValueError(f"rate for {item['currencyCode']} is not finite: {rate}")
		if amount <= 0 or rate <= 0:
			raise ValueError(f"non-positive amount or rate for {item['currencyCode']}")

		return SourceRate(
			currency_code=str(item['currencyCode']),
			amount=amount,
			rate=rate,
			country=item.get('country'),
			currency=item.get('currency'),
		)

	async def close(self) -> None:
		await self._client.aclose()
