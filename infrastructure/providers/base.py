from abc import ABC, abstractmethod

from domain.models.currency import RateSnapshot


class ExchangeRateSource(ABC):
    """Upstream that publishes the full set of rates in one call."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    async def fetch_rates(self) -> RateSnapshot:
        """Fetch every rate the source currently publishes.

        Raises FetchError when the rates cannot be retrieved or parsed.
        """
        ...

    async def close(self) -> None:
        """Release transport resources."""
