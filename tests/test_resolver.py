"""Rate resolution: identity, direct, inverse and USD pivot."""

import pytest

from wander_ledger.db.store import JsonStore, MemoryKeyValueStore
from wander_ledger.services.rates.providers import StaticRateSource
from wander_ledger.services.rates.rate_table import RateTable
from wander_ledger.services.rates.resolver import RateResolver

from tests.conftest import SEED_TIME, fixed_rates


@pytest.fixture
async def resolver():
    table = RateTable(
        JsonStore(MemoryKeyValueStore()), StaticRateSource(), seed=fixed_rates()
    )
    await table.load()
    return RateResolver(table)


async def test_identity_rate(resolver):
    rate = resolver.get_rate("THB", "THB")
    assert rate.rate == 1.0
    assert rate.inverse_rate == 1.0
    assert rate.source == "cached"


async def test_direct_rate_is_stored_row(resolver):
    rate = resolver.get_rate("EUR", "USD")
    assert rate.rate == pytest.approx(1.08)
    assert rate.source == "api"
    assert rate.timestamp == SEED_TIME


async def test_inverse_rate_swaps_and_keeps_metadata(resolver):
    rate = resolver.get_rate("USD", "EUR")
    assert rate.rate == pytest.approx(1 / 1.08)
    assert rate.inverse_rate == pytest.approx(1.08)
    assert rate.timestamp == SEED_TIME
    assert rate.source == "api"


async def test_cross_rate_through_usd(resolver):
    rate = resolver.get_rate("EUR", "JPY")
    assert rate.rate == pytest.approx(1.08 * 150.0)
    assert rate.inverse_rate == pytest.approx(1 / (1.08 * 150.0))
    assert rate.source == "cached"


async def test_cross_rate_via_two_inverses(resolver):
    # GBP->USD and USD->EUR are both derived from inverse lookups.
    rate = resolver.get_rate("GBP", "EUR")
    assert rate.rate == pytest.approx((1 / 0.8) * (1 / 1.08))


@pytest.mark.parametrize(
    "a,b", [("EUR", "USD"), ("USD", "JPY"), ("EUR", "JPY"), ("GBP", "THB")]
)
async def test_rate_symmetry(resolver, a, b):
    forward = resolver.get_rate(a, b)
    backward = resolver.get_rate(b, a)
    assert forward.rate * backward.rate == pytest.approx(1.0, abs=1e-9)


async def test_cross_rate_consistency(resolver):
    via = resolver.get_rate("THB", "USD").rate * resolver.get_rate("USD", "JPY").rate
    assert resolver.get_rate("THB", "JPY").rate == pytest.approx(via, rel=1e-12)


async def test_missing_pair_returns_none(resolver):
    assert resolver.get_rate("EUR", "INR") is None
    assert resolver.get_rate("INR", "USD") is None
    assert resolver.get_rate("USD", "INR") is None
