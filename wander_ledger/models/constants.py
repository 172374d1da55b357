"""Domain constants and enumerations for validation.

Literal aliases double as pydantic field types; the tuple/set forms are for
membership checks outside model validation.
"""

from typing import Literal, Set, Tuple, get_args

ExpenseCategory = Literal[
    "accommodation",
    "transportation",
    "food_drink",
    "activities",
    "shopping",
    "entertainment",
    "health",
    "communication",
    "fees",
    "tips",
    "other",
]
PaymentMethod = Literal["cash", "card", "mobile", "other"]
RoundingMode = Literal["none", "nearest", "up", "down"]
RateSourceKind = Literal["api", "manual", "cached"]
CashTransactionType = Literal["withdraw", "exchange", "spend", "receive", "adjustment"]
BudgetAlertType = Literal["threshold", "overspent"]

CATEGORIES: Tuple[str, ...] = get_args(ExpenseCategory)
PAYMENT_METHODS: Set[str] = set(get_args(PaymentMethod))
ROUNDING_MODES: Set[str] = set(get_args(RoundingMode))
CASH_TRANSACTION_TYPES: Set[str] = set(get_args(CashTransactionType))

# Intermediary used to compose cross rates when no direct/inverse pair exists.
PIVOT_CURRENCY = "USD"

POPULAR_CURRENCY_CODES: Tuple[str, ...] = (
    "USD",
    "EUR",
    "GBP",
    "JPY",
    "CNY",
    "AUD",
    "CAD",
    "CHF",
)

MAX_RECENT_CURRENCIES = 10
MAX_QUICK_CONVERSIONS = 10
DEFAULT_COMMON_AMOUNTS: Tuple[float, ...] = (10, 20, 50, 100, 200)
DEFAULT_FAVORITE_CURRENCIES: Tuple[str, ...] = ("USD", "EUR", "GBP", "JPY")

# Logical storage keys; the store prefixes them with the configured namespace.
STORAGE_KEYS = {
    "preferences": "preferences",
    "rates": "rates",
    "rates_timestamp": "rates-timestamp",
    "expenses": "expenses",
    "budgets": "budgets",
    "cash_wallet": "cash-wallet",
    "trip_settings": "trip-settings",
    "quick_conversions": "quick-conversions",
}
