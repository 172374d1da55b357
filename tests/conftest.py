"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timezone

# Keep the module-level app in wander_ledger.main off the local data dir.
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("RATE_PROVIDER", "static")

import pytest
import pytest_asyncio

from wander_ledger.core.config import Settings
from wander_ledger.core.errors import StorageError
from wander_ledger.db.store import JsonStore, KeyValueStore, MemoryKeyValueStore
from wander_ledger.models.currency import ExchangeRate
from wander_ledger.services.currency_service import CurrencyService
from wander_ledger.services.rates.providers import StaticRateSource

SEED_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

# Refresh table used by the static source in tests (USD base).
REFRESH_TABLE = {"EUR": 0.9, "JPY": 140.0, "GBP": 0.75}


def fixed_rates():
    """EUR->USD 1.08, USD->JPY 150, USD->GBP 0.8, USD->THB 36. No INR rows."""
    return [
        ExchangeRate.build("EUR", "USD", 1.08, timestamp=SEED_TIME, source="api"),
        ExchangeRate.build("USD", "JPY", 150.0, timestamp=SEED_TIME, source="api"),
        ExchangeRate.build("USD", "GBP", 0.8, timestamp=SEED_TIME, source="api"),
        ExchangeRate.build("USD", "THB", 36.0, timestamp=SEED_TIME, source="api"),
    ]


class FailingKeyValueStore(KeyValueStore):
    """Backend whose reads and/or writes raise StorageError."""

    def __init__(self, fail_reads: bool = True, fail_writes: bool = True):
        self.inner = MemoryKeyValueStore()
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    async def get(self, key):
        if self.fail_reads:
            raise StorageError(f"read failed for {key}", key=key)
        return await self.inner.get(key)

    async def set(self, key, value):
        if self.fail_writes:
            raise StorageError(f"write failed for {key}", key=key)
        await self.inner.set(key, value)


@pytest.fixture
def settings():
    s = Settings(
        storage_backend="memory",
        rate_provider="static",
        default_home_currency="USD",
        debug=False,
    )
    s.init_post_load()
    return s


@pytest.fixture
def backend():
    return MemoryKeyValueStore()


@pytest.fixture
def store(backend):
    return JsonStore(backend, namespace="wander")


@pytest.fixture
def rate_source():
    return StaticRateSource(REFRESH_TABLE, "USD")


@pytest_asyncio.fixture
async def service(store, settings, rate_source):
    svc = CurrencyService(
        store, settings=settings, seed_rates=fixed_rates(), rate_source=rate_source
    )
    await svc.initialize()
    return svc
