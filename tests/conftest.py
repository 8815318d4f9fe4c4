"""
Shared fixtures: sample CNB snapshots and an in-memory rate source.
"""

import asyncio
from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from domain.models.currency import RateSnapshot, SourceRate
from infrastructure.providers.base import ExchangeRateSource


def build_snapshot(*rates: tuple[str, int, str]) -> RateSnapshot:
    return RateSnapshot(
        rates=tuple(
            SourceRate(currency_code=code, amount=amount, rate=Decimal(rate))
            for code, amount, rate in rates
        ),
        captured_at=datetime(2025, 11, 5, 14, 30, tzinfo=UTC),
        valid_for=date(2025, 11, 5),
    )


class FakeRateSource(ExchangeRateSource):
    """
    Serves queued outcomes (snapshots or exceptions) in order and falls back
    to `default` once the queue is empty. `gate` holds every fetch until set.
    """

    def __init__(self, default: RateSnapshot):
        self.default = default
        self.outcomes: list = []
        self.calls = 0
        self.closed = False
        self.gate = asyncio.Event()
        self.gate.set()

    @property
    def name(self) -> str:
        return 'fake'

    async def fetch_rates(self) -> RateSnapshot:
        self.calls += 1
        await self.gate.wait()
        outcome = self.outcomes.pop(0) if self.outcomes else self.default
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def eur_usd_snapshot():
    return build_snapshot(('EUR', 1, '24.50'), ('USD', 1, '22.10'))


@pytest.fixture
def cnb_snapshot():
    return build_snapshot(
        ('USD', 1, '22.10'),
        ('AUD', 1, '14.35'),
        ('JPY', 100, '14.618'),
        ('EUR', 1, '24.50'),
        ('HUF', 100, '6.285'),
        ('GBP', 1, '28.05'),
    )


@pytest.fixture
def fake_source(eur_usd_snapshot):
    return FakeRateSource(eur_usd_snapshot)


@pytest.fixture
def snapshot_factory():
    return build_snapshot
