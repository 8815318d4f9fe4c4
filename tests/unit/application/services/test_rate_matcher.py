# nosec B101


import logging
import random
from decimal import Decimal
from unittest.mock import Mock

import pytest

from application.services.rate_matcher import match_exchange_rates
from domain.models.currency import Currency, ExchangeRate


@pytest.fixture
def mock_logger():
    return Mock(spec=logging.Logger)


def currencies(*codes: str) -> list[Currency]:
    return [Currency(code) for code in codes]


def test_match_single_currency(eur_usd_snapshot, mock_logger):
    result = match_exchange_rates(currencies('EUR'), eur_usd_snapshot, mock_logger)

    assert result == [ExchangeRate(Currency('EUR'), Currency('CZK'), Decimal('24.50'))]
    mock_logger.warning.assert_not_called()


def test_unsupported_currency_returns_empty(eur_usd_snapshot, mock_logger):
    # SPL (Seborga Luigino) is not published by the CNB
    result = match_exchange_rates(currencies('SPL'), eur_usd_snapshot, mock_logger)

    assert result == []


def test_unknown_currency_omitted_and_logged_once(eur_usd_snapshot, mock_logger):
    result = match_exchange_rates(currencies('EUR', 'USD', 'SPL'), eur_usd_snapshot, mock_logger)

    assert [rate.source_currency.code for rate in result] == ['EUR', 'USD']
    mock_logger.warning.assert_called_once()
    assert "'SPL'" in mock_logger.warning.call_args[0][0]


def test_unknown_currency_warning_reaches_log_records(eur_usd_snapshot, caplog):
    logger = logging.getLogger('tests.rate_matcher')

    with caplog.at_level(logging.WARNING, logger='tests.rate_matcher'):
        match_exchange_rates(currencies('EUR', 'USD', 'SPL'), eur_usd_snapshot, logger)

    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert 'not found in exchange rates' in warnings[0].getMessage()


def test_miss_past_last_rate_is_silent(eur_usd_snapshot, mock_logger):
    # ZAR sorts after every published code, so the walk runs out of rates
    result = match_exchange_rates(currencies('EUR', 'ZAR'), eur_usd_snapshot, mock_logger)

    assert [rate.source_currency.code for rate in result] == ['EUR']
    mock_logger.warning.assert_not_called()


def test_value_is_normalized_by_amount(cnb_snapshot, mock_logger):
    result = match_exchange_rates(currencies('JPY', 'HUF'), cnb_snapshot, mock_logger)

    values = {rate.source_currency.code: rate.value for rate in result}
    assert values == {'HUF': Decimal('0.06285'), 'JPY': Decimal('0.14618')}


def test_target_currency_is_always_czk(cnb_snapshot, mock_logger):
    result = match_exchange_rates(
        currencies('USD', 'EUR', 'GBP', 'AUD'), cnb_snapshot, mock_logger
    )

    assert len(result) == 4
    assert {rate.target_currency for rate in result} == {Currency('CZK')}


def test_no_inverse_rate_for_target_currency(cnb_snapshot, mock_logger):
    result = match_exchange_rates(currencies('CZK', 'USD'), cnb_snapshot, mock_logger)

    assert [rate.source_currency.code for rate in result] == ['USD']


def test_output_sorted_by_code(cnb_snapshot, mock_logger):
    result = match_exchange_rates(
        currencies('USD', 'GBP', 'AUD', 'EUR'), cnb_snapshot, mock_logger
    )

    assert [rate.source_currency.code for rate in result] == ['AUD', 'EUR', 'GBP', 'USD']


def test_duplicate_requests_yield_one_rate(eur_usd_snapshot, mock_logger):
    result = match_exchange_rates(currencies('EUR', 'EUR', 'USD', 'EUR'), eur_usd_snapshot, mock_logger)

    assert [rate.source_currency.code for rate in result] == ['EUR', 'USD']


def test_codes_compared_case_sensitively(eur_usd_snapshot, mock_logger):
    result = match_exchange_rates(currencies('eur'), eur_usd_snapshot, mock_logger)

    assert result == []


def test_empty_request_and_empty_snapshot(snapshot_factory, eur_usd_snapshot, mock_logger):
    assert match_exchange_rates([], eur_usd_snapshot, mock_logger) == []
    assert match_exchange_rates(currencies('EUR'), snapshot_factory(), mock_logger) == []
    mock_logger.warning.assert_not_called()


def test_match_is_idempotent(cnb_snapshot, mock_logger):
    requested = currencies('GBP', 'XYZ', 'EUR', 'JPY')

    first = match_exchange_rates(requested, cnb_snapshot, mock_logger)
    second = match_exchange_rates(requested, cnb_snapshot, mock_logger)

    assert first == second


def test_match_independent_of_input_order(snapshot_factory, cnb_snapshot, mock_logger):
    requested = currencies('GBP', 'XYZ', 'EUR', 'JPY', 'AAA', 'USD')
    expected = match_exchange_rates(requested, cnb_snapshot, mock_logger)

    rng = random.Random(7)
    for _ in range(10):
        shuffled_request = requested[:]
        rng.shuffle(shuffled_request)
        shuffled_rates = list(cnb_snapshot.rates)
        rng.shuffle(shuffled_rates)
        shuffled_snapshot = snapshot_factory(
            *((rate.currency_code, rate.amount, str(rate.rate)) for rate in shuffled_rates)
        )

        assert set(match_exchange_rates(shuffled_request, shuffled_snapshot, mock_logger)) == set(expected)


def test_result_is_subset_of_requested_and_published(cnb_snapshot, mock_logger):
    requested = currencies('AAA', 'EUR', 'GBP', 'CZK', 'JPY', 'ZZZ')

    result = match_exchange_rates(requested, cnb_snapshot, mock_logger)

    published = {rate.currency_code for rate in cnb_snapshot.rates}
    asked = {currency.code for currency in requested}
    assert {rate.source_currency.code for rate in result} <= published & asked
    assert {rate.source_currency.code for rate in result} == {'EUR', 'GBP', 'JPY'}
