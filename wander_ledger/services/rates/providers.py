from __future__ import annotations

"""Concrete rate sources and factory.

'MockJitterRateSource' stands in for a live FX feed: it perturbs the static
table by a uniform factor within +/- jitter percent on every fetch.
'StaticRateSource' returns the table as-is (deterministic demos, tests).
"""
import random
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from wander_ledger.db.seed import MOCK_RATES, MOCK_RATES_BASE
from wander_ledger.models.currency import ExchangeRate

from .base import RateSource


def seed_rates(
    table: Mapping[str, float] = MOCK_RATES,
    base_currency: str = MOCK_RATES_BASE,
    timestamp: Optional[datetime] = None,
    source: str = "api",
) -> List[ExchangeRate]:
    """Build ExchangeRate rows from a {quote: rate} table based on base_currency."""
    ts = timestamp or datetime.now(timezone.utc)
    return [
        ExchangeRate.build(base_currency, quote, rate, timestamp=ts, source=source)  # type: ignore[arg-type]
        for quote, rate in table.items()
    ]


class StaticRateSource(RateSource):
    name = "static"

    def __init__(
        self, table: Mapping[str, float] = MOCK_RATES, table_base: str = MOCK_RATES_BASE
    ):
        self._table: Dict[str, float] = dict(table)
        self._table_base = table_base

    async def fetch_rates(self, base_currency: str) -> List[ExchangeRate]:
        # The table is always expressed against its own base; the resolver
        # derives other bases through inverse/pivot lookups.
        return seed_rates(self._table, self._table_base)


class MockJitterRateSource(StaticRateSource):
    name = "mock-jitter"

    def __init__(
        self,
        table: Mapping[str, float] = MOCK_RATES,
        table_base: str = MOCK_RATES_BASE,
        jitter_pct: float = 1.0,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(table, table_base)
        self._jitter = jitter_pct / 100.0
        self._rng = rng or random.Random()

    async def fetch_rates(self, base_currency: str) -> List[ExchangeRate]:
        ts = datetime.now(timezone.utc)
        return [
            ExchangeRate.build(
                self._table_base,
                quote,
                rate * self._rng.uniform(1 - self._jitter, 1 + self._jitter),
                timestamp=ts,
                source="api",
            )
            for quote, rate in self._table.items()
        ]


_SOURCE_REGISTRY = {
    "static": StaticRateSource,
    "mock-jitter": MockJitterRateSource,
}


def make_rate_source(kind: str, jitter_pct: float = 1.0) -> RateSource:
    cls = _SOURCE_REGISTRY.get(kind)
    if not cls:
        raise ValueError(f"Unknown rate provider kind '{kind}'")
    if cls is MockJitterRateSource:
        return MockJitterRateSource(jitter_pct=jitter_pct)
    return cls()
