"""Most-recently-used currency pairs for one-tap conversion.

Keyed by the ordered (from, to) pair. Re-using a pair only bumps its
`last_used`; a new pair is prepended with the default preset amounts and the
list is capped at MAX_QUICK_CONVERSIONS.
"""

from __future__ import annotations
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from wander_ledger.core.errors import StorageError
from wander_ledger.db.store import JsonStore
from wander_ledger.models.constants import (
    DEFAULT_COMMON_AMOUNTS,
    MAX_QUICK_CONVERSIONS,
    STORAGE_KEYS,
)
from wander_ledger.models.currency import QuickConversion

logger = logging.getLogger("wander_ledger.quick_conversions")

_KEY = STORAGE_KEYS["quick_conversions"]


class QuickConversionService:
    def __init__(self, store: JsonStore):
        self._store = store

    async def list_quick_conversions(self) -> List[QuickConversion]:
        try:
            rows = await self._store.read(_KEY, default=[])
        except StorageError:
            logger.exception("failed to load quick conversions")
            return []
        return [QuickConversion.model_validate(r) for r in rows]

    async def add_quick_conversion(
        self, from_currency: str, to_currency: str
    ) -> QuickConversion:
        now = datetime.now(timezone.utc)

        def _touch(rows: List[Dict[str, Any]]) -> QuickConversion:
            for idx, row in enumerate(rows):
                if row.get("from_currency") == from_currency and row.get("to_currency") == to_currency:
                    existing = QuickConversion.model_validate(row).model_copy(
                        update={"last_used": now}
                    )
                    rows[idx] = existing.model_dump(mode="json")
                    return existing
            created = QuickConversion(
                id=f"qc_{uuid.uuid4().hex[:12]}",
                from_currency=from_currency,
                to_currency=to_currency,
                common_amounts=list(DEFAULT_COMMON_AMOUNTS),
                last_used=now,
            )
            rows.insert(0, created.model_dump(mode="json"))
            del rows[MAX_QUICK_CONVERSIONS:]
            return created

        return await self._store.update(_KEY, _touch, default=[])
