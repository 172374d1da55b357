from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from wander_ledger.models.currency import ConversionResult, ConvertedMoney, Money
from wander_ledger.services.money import RoundingPolicy

from .base import SupportsRateLookup

"""Currency conversion utility.

Centralizes logic for converting an amount between two currencies:
    - Resolve the rate via the injected resolver (direct / inverse / pivot).
    - Apply the caller's rounding policy once, in a single place.
    - Return None when no rate path exists; callers treat that as
      "conversion unavailable", never as an error.

The rounding policy is an explicit argument rather than ambient state, so the
converter holds no mutable configuration.
"""


class Converter:
    def __init__(self, resolver: SupportsRateLookup):
        self._resolver = resolver

    def convert(
        self,
        amount: float,
        from_currency: str,
        to_currency: str,
        policy: RoundingPolicy,
    ) -> Optional[ConversionResult]:
        if from_currency == to_currency:
            return ConversionResult(
                original_amount=amount,
                original_currency=from_currency,
                converted_amount=amount,
                converted_currency=to_currency,
                rate=1.0,
                rate_date=datetime.now(timezone.utc),
                rate_source="cached",
            )

        rate = self._resolver.get_rate(from_currency, to_currency)
        if rate is None:
            return None

        return ConversionResult(
            original_amount=amount,
            original_currency=from_currency,
            converted_amount=policy.apply(amount * rate.rate),
            converted_currency=to_currency,
            rate=rate.rate,
            rate_date=rate.timestamp,
            rate_source=rate.source,
        )

    def convert_to(
        self, money: Money, to_currency: str, policy: RoundingPolicy
    ) -> Optional[ConvertedMoney]:
        result = self.convert(money.amount, money.currency, to_currency, policy)
        if result is None:
            return None
        return ConvertedMoney(
            amount=result.converted_amount,
            currency=result.converted_currency,
            original_amount=result.original_amount,
            original_currency=result.original_currency,
            exchange_rate=result.rate,
            converted_at=result.rate_date,
        )
