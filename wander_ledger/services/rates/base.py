from __future__ import annotations

"""Rate source abstraction.

A rate source produces a complete rate table for a base currency. The rate
table asks it for a full refresh and never merges partial results, so a real
HTTP-backed source can be dropped in without touching resolution or
conversion.
"""
from abc import ABC, abstractmethod
from typing import List, Protocol

from wander_ledger.models.currency import ExchangeRate


class RateSource(ABC):
    name: str = "base"

    @abstractmethod
    async def fetch_rates(self, base_currency: str) -> List[ExchangeRate]:
        """Return the full table of rates, stamped with the fetch time."""
        raise NotImplementedError


class SupportsRateLookup(Protocol):
    def get_rate(self, from_currency: str, to_currency: str) -> ExchangeRate | None: ...
