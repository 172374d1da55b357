"""Currency preferences backed by the `preferences` document.

The loaded preferences live in memory and are the source for every
conversion's home currency and rounding policy. Writes go through
`JsonStore.update` so they serialize with any other writer of the key; the
in-memory copy only changes once the write has succeeded.

Loading is resilient: a missing, unreadable or invalid document leaves the
defaults in place (logged), mirroring how the settings metadata accessors
fall back to sensible defaults.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Union

from pydantic import ValidationError

from wander_ledger.core.errors import StorageError
from wander_ledger.db.store import JsonStore
from wander_ledger.models.constants import MAX_RECENT_CURRENCIES, STORAGE_KEYS
from wander_ledger.models.preferences import CurrencyPreferences, PreferencesUpdate

from .money import RoundingPolicy

logger = logging.getLogger("wander_ledger.preferences")

_KEY = STORAGE_KEYS["preferences"]


class PreferencesService:
    def __init__(self, store: JsonStore, default_home_currency: str = "USD"):
        self._store = store
        self._default_home = default_home_currency
        self._prefs = self.defaults()

    def defaults(self) -> CurrencyPreferences:
        return CurrencyPreferences(
            home_currency=self._default_home, display_currency=self._default_home
        )

    @property
    def current(self) -> CurrencyPreferences:
        return self._prefs

    @property
    def home_currency(self) -> str:
        return self._prefs.home_currency

    def rounding_policy(self) -> RoundingPolicy:
        return RoundingPolicy(
            mode=self._prefs.rounding_mode, precision=self._prefs.rounding_precision
        )

    async def load(self) -> CurrencyPreferences:
        try:
            stored = await self._store.read(_KEY)
        except StorageError:
            logger.exception("failed to load currency preferences; keeping defaults")
            return self._prefs
        if not isinstance(stored, dict):
            return self._prefs
        try:
            self._prefs = CurrencyPreferences.model_validate(
                {**self.defaults().model_dump(), **stored}
            )
        except ValidationError:
            logger.warning("stored currency preferences invalid; keeping defaults")
        return self._prefs

    async def save(
        self, changes: Union[PreferencesUpdate, Dict[str, Any]]
    ) -> CurrencyPreferences:
        """Merge `changes` over the current preferences and persist the result."""
        if isinstance(changes, PreferencesUpdate):
            changes = changes.model_dump(exclude_unset=True, exclude_none=True)
        return await self._commit(lambda _prefs: changes)

    async def _commit(
        self, build: Callable[[CurrencyPreferences], Dict[str, Any]]
    ) -> CurrencyPreferences:
        # `build` runs under the key lock against the latest in-memory copy.
        def _merge(doc: Dict[str, Any]) -> CurrencyPreferences:
            merged = CurrencyPreferences.model_validate(
                {**self._prefs.model_dump(), **build(self._prefs)}
            )
            doc.clear()
            doc.update(merged.model_dump(mode="json"))
            return merged

        self._prefs = await self._store.update(_KEY, _merge, default={})
        return self._prefs

    async def set_home_currency(self, code: str) -> CurrencyPreferences:
        return await self.save({"home_currency": code})

    async def add_recent_currency(self, code: str) -> CurrencyPreferences:
        def _recent(prefs: CurrencyPreferences) -> Dict[str, Any]:
            recent = [code] + [c for c in prefs.recent_currencies if c != code]
            return {"recent_currencies": recent[:MAX_RECENT_CURRENCIES]}

        return await self._commit(_recent)

    async def toggle_favorite_currency(self, code: str) -> CurrencyPreferences:
        def _toggle(prefs: CurrencyPreferences) -> Dict[str, Any]:
            favorites = list(prefs.favorite_currencies)
            if code in favorites:
                favorites.remove(code)
            else:
                favorites.append(code)
            return {"favorite_currencies": favorites}

        return await self._commit(_toggle)

    async def reset(self) -> CurrencyPreferences:
        defaults = self.defaults()
        await self._store.replace(_KEY, defaults.model_dump(mode="json"))
        self._prefs = defaults
        logger.info("currency preferences reset to defaults")
        return self._prefs
