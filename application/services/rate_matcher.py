import logging
from collections.abc import Iterable
from operator import attrgetter

from domain.models.currency import (
	DEFAULT_TARGET_CURRENCY,
	Currency,
	ExchangeRate,
	RateSnapshot,
	SourceRate,
)


def match_exchange_rates(
	currencies: Iterable[Currency],
	snapshot: RateSnapshot,
	logger: logging.Logger,
) -> list[ExchangeRate]:
	"""
	Return the snapshot rates for the requested currencies, ordered by code.

	Both sides are sorted by currency code and walked together once (a merge
	join), so the cost is O(R log R + S log S) instead of O(R * S). Requested
	currencies the source does not publish are left out of the result.
	"""
	codes = sorted({currency.code for currency in currencies})
	rates = sorted(snapshot.rates, key=attrgetter('currency_code'))

	matched: list[ExchangeRate] = []
	rate_idx = 0
	for code in codes:
		while rate_idx < len(rates) and rates[rate_idx].currency_code < code:
			rate_idx += 1

		if rate_idx == len(rates):
			# nothing left to compare against, remaining codes are misses too
			break

		if rates[rate_idx].currency_code == code:
			matched.append(_to_exchange_rate(rates[rate_idx]))
		else:
			logger.warning(f"Currency '{code}' not found in exchange rates")

	return matched


def _to_exchange_rate(rate: SourceRate) -> ExchangeRate:
	return ExchangeRate(
		source_currency=Currency(rate.currency_code),
		target_currency=DEFAULT_TARGET_CURRENCY,
		value=rate.rate / rate.amount,
	)
