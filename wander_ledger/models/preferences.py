from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import DEFAULT_FAVORITE_CURRENCIES, MAX_RECENT_CURRENCIES, RoundingMode
from .currency import ExchangeRate, normalize_currency_code


def _unique_codes(codes: List[str]) -> List[str]:
    # Remove duplicates while preserving order
    seen = set()
    unique = []
    for cur in codes:
        cur_upper = cur.upper().strip()
        if cur_upper and cur_upper not in seen:
            seen.add(cur_upper)
            unique.append(cur_upper)
    return unique


class CurrencyPreferences(BaseModel):
    home_currency: str = "USD"
    display_currency: str = "USD"
    show_original_amount: bool = True
    show_converted_amount: bool = True
    auto_convert: bool = True
    rounding_mode: RoundingMode = "nearest"
    rounding_precision: int = Field(2, ge=0, le=10)
    recent_currencies: List[str] = Field(default_factory=list)
    favorite_currencies: List[str] = Field(
        default_factory=lambda: list(DEFAULT_FAVORITE_CURRENCIES)
    )

    @field_validator("home_currency", "display_currency")
    @classmethod
    def _valid_currency(cls, v: str) -> str:
        return normalize_currency_code(v)

    @field_validator("recent_currencies")
    @classmethod
    def _cap_recent(cls, v: List[str]) -> List[str]:
        return _unique_codes(v)[:MAX_RECENT_CURRENCIES]

    @field_validator("favorite_currencies")
    @classmethod
    def _dedupe_favorites(cls, v: List[str]) -> List[str]:
        return _unique_codes(v)


class PreferencesUpdate(BaseModel):
    """Partial update; only fields explicitly provided are applied."""

    home_currency: Optional[str] = None
    display_currency: Optional[str] = None
    show_original_amount: Optional[bool] = None
    show_converted_amount: Optional[bool] = None
    auto_convert: Optional[bool] = None
    rounding_mode: Optional[RoundingMode] = None
    rounding_precision: Optional[int] = Field(None, ge=0, le=10)
    recent_currencies: Optional[List[str]] = None
    favorite_currencies: Optional[List[str]] = None

    @field_validator("home_currency", "display_currency")
    @classmethod
    def _valid_currency(cls, v: Optional[str]) -> Optional[str]:
        return normalize_currency_code(v) if v is not None else None

    @field_validator("recent_currencies", "favorite_currencies")
    @classmethod
    def _valid_currency_list(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return None
        return [normalize_currency_code(c) for c in _unique_codes(v)]

    @model_validator(mode="after")
    def _at_least_one(self) -> "PreferencesUpdate":
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided")
        return self


class TripCurrencySettings(BaseModel):
    trip_id: str
    primary_currency: str
    local_currencies: List[str] = Field(default_factory=list)
    budget_currency: str
    locked_rates: List[ExchangeRate] = Field(default_factory=list)

    @field_validator("trip_id")
    @classmethod
    def _trip_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("trip_id cannot be empty")
        return value.strip()

    @field_validator("primary_currency", "budget_currency")
    @classmethod
    def _valid_currency(cls, v: str) -> str:
        return normalize_currency_code(v)

    @field_validator("local_currencies")
    @classmethod
    def _valid_currencies(cls, currencies: List[str]) -> List[str]:
        return [normalize_currency_code(c) for c in _unique_codes(currencies)]
