from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Protocol

from wander_ledger.models.constants import PIVOT_CURRENCY
from wander_ledger.models.currency import ExchangeRate


class SupportsPairLookup(Protocol):
    def lookup(self, from_currency: str, to_currency: str) -> Optional[ExchangeRate]: ...


class RateResolver:
    """Resolve a rate for any pair from the stored table.

    Order: identity, direct pair, inverse of the stored opposite pair, then a
    cross rate through the pivot currency. The pivot step only runs when
    neither endpoint is the pivot, and both of its sub-lookups have the pivot
    as an endpoint, so they never reach the pivot step again.
    """

    def __init__(self, table: SupportsPairLookup, pivot: str = PIVOT_CURRENCY):
        self._table = table
        self._pivot = pivot

    def get_rate(self, from_currency: str, to_currency: str) -> Optional[ExchangeRate]:
        if from_currency == to_currency:
            return ExchangeRate(
                from_currency=from_currency,
                to_currency=to_currency,
                rate=1.0,
                inverse_rate=1.0,
                timestamp=datetime.now(timezone.utc),
                source="cached",
            )

        direct = self._table.lookup(from_currency, to_currency)
        if direct is not None:
            return direct

        stored_inverse = self._table.lookup(to_currency, from_currency)
        if stored_inverse is not None:
            return stored_inverse.inverted()

        if from_currency != self._pivot and to_currency != self._pivot:
            to_pivot = self.get_rate(from_currency, self._pivot)
            from_pivot = self.get_rate(self._pivot, to_currency)
            if to_pivot is not None and from_pivot is not None:
                return ExchangeRate.build(
                    from_currency,
                    to_currency,
                    to_pivot.rate * from_pivot.rate,
                    source="cached",
                )

        return None
