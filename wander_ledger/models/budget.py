from __future__ import annotations
from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import BudgetAlertType, ExpenseCategory
from .currency import normalize_currency_code


class BudgetAlert(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    type: BudgetAlertType
    threshold: Optional[float] = Field(None, gt=0)  # percentage
    message: str = ""
    triggered: bool = False
    triggered_at: Optional[datetime] = None


class BudgetIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    id: Optional[str] = None
    trip_id: Optional[str] = None
    name: str
    total_amount: float = Field(..., ge=0)
    currency: str
    category_budgets: Dict[ExpenseCategory, float] = Field(default_factory=dict)
    daily_budget: Optional[float] = Field(None, ge=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    alerts: List[BudgetAlert] = Field(default_factory=list)

    @field_validator("currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        return normalize_currency_code(v)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("name cannot be empty")
        return value.strip()

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "BudgetIn":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class Budget(BudgetIn):
    id: str
    spent: float = 0.0
    remaining: float = 0.0
    percent_used: float = 0.0

    @property
    def display_remaining(self) -> float:
        return max(self.remaining, 0)


class BudgetUpdateIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: Optional[str] = None
    total_amount: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = None
    category_budgets: Optional[Dict[ExpenseCategory, float]] = None
    daily_budget: Optional[float] = Field(None, ge=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    alerts: Optional[List[BudgetAlert]] = None

    @field_validator("currency")
    @classmethod
    def valid_currency(cls, v: Optional[str]) -> Optional[str]:
        return normalize_currency_code(v) if v is not None else None

    @model_validator(mode="after")
    def _at_least_one(self) -> "BudgetUpdateIn":
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided")
        return self
