"""Pydantic domain models for the multi-currency travel ledger."""

from .constants import (
    CATEGORIES,
    PAYMENT_METHODS,
    ROUNDING_MODES,
    CASH_TRANSACTION_TYPES,
    PIVOT_CURRENCY,
)  # re-export
from .currency import (
    Currency,
    ExchangeRate,
    Money,
    ConvertedMoney,
    ConversionRequest,
    ConversionResult,
    FormatOptions,
    QuickConversion,
)
from .preferences import CurrencyPreferences, PreferencesUpdate, TripCurrencySettings
from .expense import ExpenseIn, Expense, ExpenseUpdateIn, ExpenseSummary
from .budget import Budget, BudgetAlert, BudgetIn, BudgetUpdateIn
from .cash import CashBalance, CashTransaction, CashTransactionIn, CashWallet

__all__ = [
    "CATEGORIES",
    "PAYMENT_METHODS",
    "ROUNDING_MODES",
    "CASH_TRANSACTION_TYPES",
    "PIVOT_CURRENCY",
    "Currency",
    "ExchangeRate",
    "Money",
    "ConvertedMoney",
    "ConversionRequest",
    "ConversionResult",
    "FormatOptions",
    "QuickConversion",
    "CurrencyPreferences",
    "PreferencesUpdate",
    "TripCurrencySettings",
    "ExpenseIn",
    "Expense",
    "ExpenseUpdateIn",
    "ExpenseSummary",
    "Budget",
    "BudgetAlert",
    "BudgetIn",
    "BudgetUpdateIn",
    "CashBalance",
    "CashTransaction",
    "CashTransactionIn",
    "CashWallet",
]
