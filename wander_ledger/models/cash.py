from __future__ import annotations
from datetime import date as date_type, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import CashTransactionType
from .currency import normalize_currency_code


class CashBalance(BaseModel):
    currency: str
    amount: float = 0.0
    last_updated: datetime


class CashTransactionIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    type: CashTransactionType
    currency: str
    amount: float
    description: str = ""
    location: Optional[str] = None
    date: date_type
    # Exchange legs
    from_currency: Optional[str] = None
    from_amount: Optional[float] = None
    to_currency: Optional[str] = None
    to_amount: Optional[float] = None
    exchange_rate: Optional[float] = None
    fees: Optional[float] = Field(None, ge=0)
    fees_currency: Optional[str] = None

    @field_validator("currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        return normalize_currency_code(v)

    @field_validator("from_currency", "to_currency", "fees_currency")
    @classmethod
    def valid_optional_currency(cls, v: Optional[str]) -> Optional[str]:
        return normalize_currency_code(v) if v is not None else None

    @model_validator(mode="after")
    def exchange_legs_present(self) -> "CashTransactionIn":
        if self.type == "exchange" and None in (
            self.from_currency,
            self.from_amount,
            self.to_currency,
            self.to_amount,
        ):
            raise ValueError(
                "exchange transactions require from_currency, from_amount, to_currency and to_amount"
            )
        return self


class CashTransaction(CashTransactionIn):
    id: str
    created_at: datetime


class CashWallet(BaseModel):
    home_currency: str
    total_in_home_currency: float = 0.0
    balances: List[CashBalance] = Field(default_factory=list)
    # Newest first.
    transactions: List[CashTransaction] = Field(default_factory=list)

    def balance_for(self, currency: str) -> Optional[CashBalance]:
        return next((b for b in self.balances if b.currency == currency), None)
