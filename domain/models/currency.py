from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class Currency:
    code: str

    def __str__(self) -> str:
        return self.code


# CNB quotes every rate against the koruna
DEFAULT_TARGET_CURRENCY = Currency("CZK")


@dataclass(frozen=True)
class SourceRate:
    """A single rate as published by the source, quoted per `amount` units."""
    currency_code: str
    amount: int
    rate: Decimal
    country: str | None = None
    currency: str | None = None


@dataclass(frozen=True)
class RateSnapshot:
    rates: tuple[SourceRate, ...]
    captured_at: datetime
    valid_for: date | None = None

    def __len__(self) -> int:
        return len(self.rates)


@dataclass(frozen=True)
class ExchangeRate:
    source_currency: Currency
    target_currency: Currency
    value: Decimal

    def __str__(self) -> str:
        return f"{self.source_currency}/{self.target_currency}={self.value}"
