from __future__ import annotations
from datetime import date as date_type, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import ExpenseCategory, PaymentMethod
from .currency import normalize_currency_code

_NON_NULLABLE = {"amount", "currency", "description", "category", "date", "payment_method", "tags"}


class ExpenseIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    amount: float
    currency: str
    description: str = ""
    category: ExpenseCategory = "other"
    subcategory: Optional[str] = None
    vendor: Optional[str] = None
    location: Optional[str] = None
    date: date_type
    payment_method: PaymentMethod = "card"
    trip_id: Optional[str] = None
    notes: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        return normalize_currency_code(v)


class Expense(ExpenseIn):
    id: str
    converted_amount: Optional[float] = None
    converted_currency: Optional[str] = None
    exchange_rate_used: Optional[float] = None
    created_at: datetime
    updated_at: datetime

    @property
    def has_snapshot(self) -> bool:
        return self.converted_amount is not None and self.converted_currency is not None


class ExpenseUpdateIn(BaseModel):
    """Partial update model.

    All fields optional; at least one must be provided. Conversion snapshot
    fields may be passed explicitly; when they are omitted and amount or
    currency changes, the ledger re-derives the snapshot.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    amount: Optional[float] = None
    currency: Optional[str] = None
    description: Optional[str] = None
    category: Optional[ExpenseCategory] = None
    subcategory: Optional[str] = None
    vendor: Optional[str] = None
    location: Optional[str] = None
    date: Optional[date_type] = None
    payment_method: Optional[PaymentMethod] = None
    trip_id: Optional[str] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    converted_amount: Optional[float] = None
    converted_currency: Optional[str] = None
    exchange_rate_used: Optional[float] = None

    @field_validator("currency", "converted_currency")
    @classmethod
    def valid_currency(cls, v: Optional[str]) -> Optional[str]:
        return normalize_currency_code(v) if v is not None else None

    @model_validator(mode="after")
    def at_least_one(self) -> "ExpenseUpdateIn":
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided for update")
        return self

    def changes(self) -> Dict[str, object]:
        # Explicit nulls only clear optional fields.
        return {
            k: v
            for k, v in self.model_dump(exclude_unset=True).items()
            if v is not None or k not in _NON_NULLABLE
        }


class ExpenseSummary(BaseModel):
    total_in_home_currency: float = 0.0
    home_currency: str
    # Raw original-currency amounts, not converted.
    by_category: Dict[str, float] = Field(default_factory=dict)
    by_currency: Dict[str, float] = Field(default_factory=dict)
    by_date: Dict[str, float] = Field(default_factory=dict)
    count: int = 0
    average_per_day: float = 0.0
