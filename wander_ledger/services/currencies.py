"""Currency reference lookups over the static seed rows."""

from __future__ import annotations
from typing import Dict, List, Optional

from wander_ledger.db.seed import CURRENCY_ROWS
from wander_ledger.models.constants import POPULAR_CURRENCY_CODES
from wander_ledger.models.currency import Currency

_CURRENCIES: Dict[str, Currency] = {
    row["code"]: Currency(**row) for row in CURRENCY_ROWS  # type: ignore[arg-type]
}


def get_currency(code: str) -> Optional[Currency]:
    return _CURRENCIES.get((code or "").upper())


def get_all_currencies() -> List[Currency]:
    return list(_CURRENCIES.values())


def search_currencies(query: str) -> List[Currency]:
    """Case-insensitive substring match on code, name or country."""
    q = (query or "").strip().lower()
    if not q:
        return get_all_currencies()
    return [
        c
        for c in _CURRENCIES.values()
        if q in c.code.lower() or q in c.name.lower() or q in c.country.lower()
    ]


def get_popular_currencies() -> List[Currency]:
    return [_CURRENCIES[code] for code in POPULAR_CURRENCY_CODES if code in _CURRENCIES]


__all__ = [
    "get_currency",
    "get_all_currencies",
    "search_currencies",
    "get_popular_currencies",
]
