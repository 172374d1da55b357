"""Per-trip currency settings (primary/local/budget currencies, locked rates).

Locked rates are stored for display only; conversions always use the live
rate table.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from wander_ledger.core.errors import StorageError
from wander_ledger.db.store import JsonStore
from wander_ledger.models.constants import STORAGE_KEYS
from wander_ledger.models.preferences import TripCurrencySettings

logger = logging.getLogger("wander_ledger.trip_settings")

_KEY = STORAGE_KEYS["trip_settings"]


class TripSettingsService:
    def __init__(self, store: JsonStore):
        self._store = store

    async def get(self, trip_id: str) -> Optional[TripCurrencySettings]:
        try:
            rows = await self._store.read(_KEY, default=[])
        except StorageError:
            logger.exception("failed to load trip settings", extra={"trip_id": trip_id})
            return None
        row = next((r for r in rows if r.get("trip_id") == trip_id), None)
        return TripCurrencySettings.model_validate(row) if row else None

    async def save(self, settings: TripCurrencySettings) -> TripCurrencySettings:
        row = settings.model_dump(mode="json")

        def _upsert(rows: List[Dict[str, Any]]) -> None:
            for idx, existing in enumerate(rows):
                if existing.get("trip_id") == settings.trip_id:
                    rows[idx] = row
                    return
            rows.append(row)

        await self._store.update(_KEY, _upsert, default=[])
        return settings
