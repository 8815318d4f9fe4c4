import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta

from domain.exceptions.currency import FetchError
from domain.models.currency import RateSnapshot
from infrastructure.providers.base import ExchangeRateSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    snapshot: RateSnapshot
    expires_at: float

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at


class RateCache:
    """
    Holds the latest rate snapshot for `ttl` and refreshes it lazily.

    Concurrent callers that find the snapshot missing or expired share a
    single upstream fetch (one "flight"). Each caller awaits the flight
    through `asyncio.shield`, so cancelling a caller never cancels the fetch
    the other callers are waiting on. Failures are handed to every waiter
    of the flight and are never cached.
    """

    def __init__(
        self,
        source: ExchangeRateSource,
        ttl: timedelta,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl <= timedelta(0):
            raise ValueError(f"Cache TTL must be positive, got {ttl}")

        self.source = source
        self.ttl = ttl
        self._clock = clock
        self._entry: CacheEntry | None = None
        self._flight: asyncio.Task[RateSnapshot] | None = None
        self._closed = False

    @property
    def entry(self) -> CacheEntry | None:
        return self._entry

    @property
    def is_refreshing(self) -> bool:
        return self._flight is not None

    async def get_rates(self) -> RateSnapshot:
        if self._closed:
            raise RuntimeError("Rate cache is closed")

        entry = self._entry
        if entry is not None and entry.is_fresh(self._clock()):
            logger.debug(f"Rate cache hit for {self.source.name}")
            return entry.snapshot

        flight = self._flight
        if flight is None:
            flight = self._start_flight()
        else:
            logger.debug(f"Joining in-flight refresh from {self.source.name}")

        return await asyncio.shield(flight)

    def invalidate(self) -> None:
        """Drop the cached snapshot so the next call refreshes it."""
        self._entry = None

    async def close(self) -> None:
        """
        Release the source. An in-flight fetch is neither awaited nor
        cancelled; its waiters still get its outcome but nothing is stored.
        """
        if self._closed:
            return
        self._closed = True
        self._entry = None
        await self.source.close()
        logger.info(f"Rate cache for {self.source.name} closed")

    def _start_flight(self) -> asyncio.Task[RateSnapshot]:
        logger.info(f"Refreshing exchange rates from {self.source.name}")
        flight = asyncio.create_task(self._refresh())
        flight.add_done_callback(self._on_flight_done)
        self._flight = flight
        return flight

    def _on_flight_done(self, flight: asyncio.Task) -> None:
        # A flight cancelled before it ever ran never reaches _refresh's cleanup
        if self._flight is flight:
            self._flight = None
        # Every waiter may have been cancelled; keep asyncio from reporting
        # the failure as never retrieved.
        if not flight.cancelled():
            flight.exception()

    async def _refresh(self) -> RateSnapshot:
        try:
            snapshot = await self.source.fetch_rates()
        except FetchError as e:
            logger.warning(f"Refreshing rates from {self.source.name} failed: {e}")
            raise
        except Exception as e:
            logger.warning(f"Refreshing rates from {self.source.name} failed unexpectedly: {e!r}")
            raise FetchError(f"Unexpected error fetching rates from {self.source.name}") from e
        finally:
            self._flight = None

        # Stored before the task completes, so every waiter resumes with the
        # new entry already visible.
        if not self._closed:
            self._entry = CacheEntry(snapshot, self._clock() + self.ttl.total_seconds())
            logger.info(
                f"Cached {len(snapshot)} rates from {self.source.name} for {self.ttl.total_seconds():.0f}s"
            )
        return snapshot
