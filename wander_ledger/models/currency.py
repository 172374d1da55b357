from __future__ import annotations
from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wander_ledger.db.seed import CURRENCY_CODES
from .constants import RateSourceKind


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_currency_code(value: str) -> str:
    code = (value or "").strip().upper()
    if code not in CURRENCY_CODES:
        raise ValueError(f"unsupported currency '{value}'")
    return code


class Currency(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    symbol: str
    symbol_position: Literal["before", "after"]
    decimal_places: int = Field(..., ge=0)
    decimal_separator: Literal[".", ","]
    thousands_separator: str
    flag: str
    country: str


class ExchangeRate(BaseModel):
    """Units of `to_currency` per 1 `from_currency`."""

    model_config = ConfigDict(allow_inf_nan=False)

    from_currency: str
    to_currency: str
    rate: float = Field(..., gt=0)
    inverse_rate: float = Field(..., gt=0)
    timestamp: datetime
    source: RateSourceKind

    @property
    def key(self) -> str:
        return rate_key(self.from_currency, self.to_currency)

    @classmethod
    def build(
        cls,
        from_currency: str,
        to_currency: str,
        rate: float,
        timestamp: Optional[datetime] = None,
        source: RateSourceKind = "cached",
    ) -> "ExchangeRate":
        return cls(
            from_currency=from_currency,
            to_currency=to_currency,
            rate=rate,
            inverse_rate=1 / rate,
            timestamp=timestamp or utcnow(),
            source=source,
        )

    def inverted(self) -> "ExchangeRate":
        return ExchangeRate(
            from_currency=self.to_currency,
            to_currency=self.from_currency,
            rate=self.inverse_rate,
            inverse_rate=self.rate,
            timestamp=self.timestamp,
            source=self.source,
        )


def rate_key(from_currency: str, to_currency: str) -> str:
    return f"{from_currency}_{to_currency}"


class Money(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    amount: float
    currency: str

    @field_validator("currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        return normalize_currency_code(v)


class ConvertedMoney(BaseModel):
    amount: float
    currency: str
    original_amount: float
    original_currency: str
    exchange_rate: float
    converted_at: datetime


class ConversionRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    amount: float
    from_currency: str
    to_currency: str

    @field_validator("from_currency", "to_currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        return normalize_currency_code(v)


class ConversionResult(BaseModel):
    original_amount: float
    original_currency: str
    converted_amount: float
    converted_currency: str
    rate: float
    rate_date: datetime
    rate_source: RateSourceKind


class FormatOptions(BaseModel):
    show_symbol: bool = True
    show_code: bool = False
    show_sign: bool = False
    compact: bool = False
    minimum_fraction_digits: Optional[int] = Field(None, ge=0, le=20)
    maximum_fraction_digits: Optional[int] = Field(None, ge=0, le=20)


class QuickConversion(BaseModel):
    id: str
    from_currency: str
    to_currency: str
    common_amounts: List[float]
    last_used: datetime
