from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from wander_ledger.core.errors import StorageError
from wander_ledger.db.store import JsonStore
from wander_ledger.models.constants import STORAGE_KEYS
from wander_ledger.models.currency import ExchangeRate, rate_key

from .base import RateSource
from .providers import seed_rates

"""In-memory rate table backed by the persisted `rates` document.

Purpose:
    Hold the current best-known rate for each stored (from, to) pair. Only one
    direction per pair needs to be stored; the resolver derives the other.

Lifecycle:
    - `load()` once at start: persisted rows if any, else the seed table.
    - `fetch_latest_rates()` replaces the whole table from the rate source,
      persisting before swapping so a failed write leaves memory untouched.
"""

logger = logging.getLogger("wander_ledger.rates")


class RateTable:
    def __init__(
        self,
        store: JsonStore,
        source: RateSource,
        seed: Optional[Iterable[ExchangeRate]] = None,
    ):
        self._store = store
        self._source = source
        self._seed: Optional[List[ExchangeRate]] = list(seed) if seed is not None else None
        self._rates: Dict[str, ExchangeRate] = {}
        self._last_updated: Optional[datetime] = None

    # Internal --------------------------------------------------
    def _seed_rows(self) -> List[ExchangeRate]:
        if self._seed is not None:
            return list(self._seed)
        return seed_rates()

    def _load_seed(self) -> None:
        self.replace(self._seed_rows(), datetime.now(timezone.utc))

    # Public API -----------------------------------------------
    async def load(self) -> None:
        try:
            stored = await self._store.read(STORAGE_KEYS["rates"])
            timestamp = await self._store.read(STORAGE_KEYS["rates_timestamp"])
        except StorageError:
            logger.exception("failed to load exchange rates; using seed table")
            self._load_seed()
            return
        if not stored:
            self._load_seed()
            return
        try:
            rows = [ExchangeRate.model_validate(r) for r in stored]
        except ValidationError:
            logger.warning("persisted exchange rates unreadable; using seed table")
            self._load_seed()
            return
        self.replace(rows, datetime.fromisoformat(timestamp) if timestamp else None)

    def replace(
        self, rows: Iterable[ExchangeRate], timestamp: Optional[datetime] = None
    ) -> None:
        self._rates = {r.key: r for r in rows}
        self._last_updated = timestamp

    async def fetch_latest_rates(self, base_currency: str = "USD") -> bool:
        try:
            rows = await self._source.fetch_rates(base_currency)
            timestamp = datetime.now(timezone.utc)
            await self._store.replace(
                STORAGE_KEYS["rates"], [r.model_dump(mode="json") for r in rows]
            )
            await self._store.replace(
                STORAGE_KEYS["rates_timestamp"], timestamp.isoformat()
            )
        except StorageError:
            logger.exception("failed to persist refreshed exchange rates")
            return False
        self.replace(rows, timestamp)
        logger.info(
            "exchange rates refreshed from %s (%d pairs)", self._source.name, len(rows)
        )
        return True

    def lookup(self, from_currency: str, to_currency: str) -> Optional[ExchangeRate]:
        return self._rates.get(rate_key(from_currency, to_currency))

    def all_rates(self) -> List[ExchangeRate]:
        return list(self._rates.values())

    @property
    def last_updated(self) -> Optional[datetime]:
        return self._last_updated

    def __len__(self) -> int:
        return len(self._rates)
