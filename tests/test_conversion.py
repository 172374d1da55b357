"""Converter and rounding policy."""

from datetime import datetime, timezone

import pytest

from wander_ledger.models.currency import Money
from wander_ledger.services.money import NO_ROUNDING, RoundingPolicy, apply_rounding
from wander_ledger.services.rates.conversion import Converter

from tests.conftest import SEED_TIME


@pytest.fixture
def converter(service):
    return Converter(service.resolver)


async def test_same_currency_is_untouched(converter):
    result = converter.convert(10.555, "EUR", "EUR", RoundingPolicy("up", 0))
    assert result.converted_amount == 10.555
    assert result.rate == 1.0
    assert result.original_amount == 10.555


async def test_eur_to_usd_uses_stored_rate(converter):
    result = converter.convert(100, "EUR", "USD", RoundingPolicy())
    assert result.converted_amount == 108.0
    assert result.converted_currency == "USD"
    assert result.rate == pytest.approx(1.08)
    assert result.rate_date == SEED_TIME
    assert result.rate_source == "api"


async def test_no_rate_path_returns_none(converter):
    assert converter.convert(10, "EUR", "INR", RoundingPolicy()) is None


def test_rounding_modes():
    assert apply_rounding(1.005, "nearest", 2) == 1.01
    assert apply_rounding(1.004, "nearest", 2) == 1.0
    assert apply_rounding(1.001, "up", 2) == 1.01
    assert apply_rounding(1.009, "down", 2) == 1.0
    assert apply_rounding(1.23456, "none", 2) == 1.23456
    assert apply_rounding(1234.5, "nearest", 0) == 1235.0


def test_up_and_down_follow_ceiling_and_floor_for_negatives():
    assert apply_rounding(-1.005, "up", 2) == -1.0
    assert apply_rounding(-1.001, "down", 2) == -1.01


@pytest.mark.parametrize("mode", ["none", "nearest", "up", "down"])
async def test_rounding_is_monotonic(converter, mode):
    policy = RoundingPolicy(mode, 2)
    amounts = [0.01, 0.5, 1, 1.005, 9.99, 10, 123.456, 1000]
    converted = [converter.convert(a, "EUR", "JPY", policy).converted_amount for a in amounts]
    assert converted == sorted(converted)


def test_negative_precision_rejected():
    with pytest.raises(ValueError):
        RoundingPolicy("nearest", -1)


async def test_convert_to_wraps_converted_money(converter):
    money = converter.convert_to(Money(amount=50, currency="EUR"), "USD", NO_ROUNDING)
    assert money.amount == pytest.approx(54.0)
    assert money.currency == "USD"
    assert money.original_amount == 50
    assert money.original_currency == "EUR"
    assert money.exchange_rate == pytest.approx(1.08)
    assert money.converted_at == SEED_TIME


async def test_convert_identity_stamps_now(converter):
    before = datetime.now(timezone.utc)
    result = converter.convert(5, "USD", "USD", RoundingPolicy())
    assert result.rate_date >= before
    assert result.rate_source == "cached"


def test_nearest_breaks_ties_toward_positive_infinity():
    assert apply_rounding(-0.005, "nearest", 2) == 0
    assert apply_rounding(-1.005, "nearest", 2) == -1.0
    assert apply_rounding(-1.006, "nearest", 2) == -1.01
    assert apply_rounding(0.005, "nearest", 2) == 0.01


@pytest.mark.parametrize("mode", ["nearest", "up", "down"])
def test_rounding_handles_amounts_beyond_default_decimal_precision(mode):
    assert apply_rounding(1e27, mode, 2) == 1e27
    assert apply_rounding(1.5e40, mode, 4) == 1.5e40


async def test_convert_large_amount(converter):
    result = converter.convert(1e27, "EUR", "USD", RoundingPolicy())
    assert result.converted_amount == pytest.approx(1.08e27)
