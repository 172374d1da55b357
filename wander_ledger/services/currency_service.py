"""Single entry point over the currency subsystem.

Wires the rate table, resolver and converter to the preference-driven
services (ledger, budgets, cash wallet, quick conversions, trip settings)
around one `JsonStore`. Routers depend on this facade only.

Conversions made through the facade use the rounding policy built from the
current preferences; the lower layers take it as an explicit argument.
"""

from __future__ import annotations
from datetime import datetime
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from wander_ledger.core.config import Settings, get_settings
from wander_ledger.db.store import (
    JsonStore,
    KeyValueStore,
    MemoryKeyValueStore,
    SqliteKeyValueStore,
)
from wander_ledger.models.budget import Budget, BudgetAlert, BudgetIn, BudgetUpdateIn
from wander_ledger.models.cash import CashTransaction, CashTransactionIn, CashWallet
from wander_ledger.models.currency import (
    ConversionResult,
    ConvertedMoney,
    Currency,
    ExchangeRate,
    FormatOptions,
    Money,
    QuickConversion,
)
from wander_ledger.models.expense import (
    Expense,
    ExpenseIn,
    ExpenseSummary,
    ExpenseUpdateIn,
)
from wander_ledger.models.preferences import (
    CurrencyPreferences,
    PreferencesUpdate,
    TripCurrencySettings,
)

from . import currencies, formatting
from .budgets import BudgetEngine
from .cash_wallet import CashWalletService
from .ledger import ExpenseLedger
from .preferences import PreferencesService
from .quick_conversions import QuickConversionService
from .rate_refresher import RateRefresher
from .rates.base import RateSource
from .rates.conversion import Converter
from .rates.providers import make_rate_source
from .rates.rate_table import RateTable
from .rates.resolver import RateResolver
from .trip_settings import TripSettingsService

logger = logging.getLogger("wander_ledger.service")


class CurrencyService:
    def __init__(
        self,
        store: JsonStore,
        settings: Optional[Settings] = None,
        seed_rates: Optional[Iterable[ExchangeRate]] = None,
        rate_source: Optional[RateSource] = None,
    ):
        self.settings = settings or get_settings()
        self.store = store
        source = rate_source or make_rate_source(
            self.settings.rate_provider, self.settings.rate_jitter_pct
        )
        self.rate_table = RateTable(store, source, seed=seed_rates)
        self.resolver = RateResolver(self.rate_table)
        self.converter = Converter(self.resolver)
        self.preferences = PreferencesService(store, self.settings.default_home_currency)
        self.ledger = ExpenseLedger(store, self.preferences, self.converter)
        self.budgets = BudgetEngine(store, self.preferences, self.ledger, self.converter)
        self.cash = CashWalletService(store, self.preferences, self.converter)
        self.quick_conversions = QuickConversionService(store)
        self.trip_settings = TripSettingsService(store)
        self.refresher = RateRefresher(
            self.rate_table, self.settings.rate_refresh_interval_minutes * 60
        )
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        await self.preferences.load()
        await self.rate_table.load()
        self._initialized = True
        logger.info(
            "currency service initialized (%d rate pairs, home %s)",
            len(self.rate_table),
            self.preferences.home_currency,
        )

    # Currency data ----------------------------------------------------
    def get_currency(self, code: str) -> Optional[Currency]:
        return currencies.get_currency(code)

    def get_all_currencies(self) -> List[Currency]:
        return currencies.get_all_currencies()

    def search_currencies(self, query: str) -> List[Currency]:
        return currencies.search_currencies(query)

    def get_popular_currencies(self) -> List[Currency]:
        return currencies.get_popular_currencies()

    # Preferences ------------------------------------------------------
    async def load_preferences(self) -> CurrencyPreferences:
        return await self.preferences.load()

    async def save_preferences(self, changes: PreferencesUpdate) -> CurrencyPreferences:
        return await self.preferences.save(changes)

    def get_preferences(self) -> CurrencyPreferences:
        return self.preferences.current

    async def set_home_currency(self, code: str) -> CurrencyPreferences:
        return await self.preferences.set_home_currency(code)

    async def add_recent_currency(self, code: str) -> CurrencyPreferences:
        return await self.preferences.add_recent_currency(code)

    async def toggle_favorite_currency(self, code: str) -> CurrencyPreferences:
        return await self.preferences.toggle_favorite_currency(code)

    async def reset_preferences(self) -> CurrencyPreferences:
        return await self.preferences.reset()

    # Rates & conversion -----------------------------------------------
    async def fetch_latest_rates(self, base_currency: str = "USD") -> bool:
        return await self.rate_table.fetch_latest_rates(base_currency)

    def get_rate(self, from_currency: str, to_currency: str) -> Optional[ExchangeRate]:
        return self.resolver.get_rate(from_currency, to_currency)

    def get_rates_last_updated(self) -> Optional[datetime]:
        return self.rate_table.last_updated

    def all_rates(self) -> List[ExchangeRate]:
        return self.rate_table.all_rates()

    def convert(
        self, amount: float, from_currency: str, to_currency: str
    ) -> Optional[ConversionResult]:
        return self.converter.convert(
            amount, from_currency, to_currency, self.preferences.rounding_policy()
        )

    def convert_to_home(self, money: Money) -> Optional[ConvertedMoney]:
        return self.converter.convert_to(
            money, self.preferences.home_currency, self.preferences.rounding_policy()
        )

    # Formatting -------------------------------------------------------
    def format(
        self, amount: float, currency_code: str, options: Optional[FormatOptions] = None
    ) -> str:
        return formatting.format_amount(amount, currency_code, options)

    def format_money(self, money: Money, options: Optional[FormatOptions] = None) -> str:
        return formatting.format_money(money, options)

    def format_with_conversion(
        self, money: Money, target_currency: Optional[str] = None
    ) -> str:
        return formatting.format_with_conversion(
            money,
            target_currency or self.preferences.home_currency,
            self.converter,
            self.preferences.rounding_policy(),
        )

    # Expenses ---------------------------------------------------------
    async def get_expenses(self, trip_id: Optional[str] = None) -> List[Expense]:
        return await self.ledger.list_expenses(trip_id)

    async def get_expense(self, expense_id: str) -> Optional[Expense]:
        return await self.ledger.get_expense(expense_id)

    async def add_expense(self, data: ExpenseIn) -> Expense:
        return await self.ledger.add_expense(data)

    async def update_expense(
        self, expense_id: str, changes: ExpenseUpdateIn
    ) -> Optional[Expense]:
        return await self.ledger.update_expense(expense_id, changes)

    async def delete_expense(self, expense_id: str) -> bool:
        return await self.ledger.delete_expense(expense_id)

    async def get_expense_summary(self, trip_id: Optional[str] = None) -> ExpenseSummary:
        return await self.ledger.get_expense_summary(trip_id)

    async def get_expenses_by_category(
        self, category: str, trip_id: Optional[str] = None
    ) -> List[Expense]:
        return await self.ledger.get_expenses_by_category(category, trip_id)

    async def get_expenses_by_currency(
        self, currency: str, trip_id: Optional[str] = None
    ) -> List[Expense]:
        return await self.ledger.get_expenses_by_currency(currency, trip_id)

    # Budgets ----------------------------------------------------------
    async def get_budget(self, trip_id: Optional[str] = None) -> Optional[Budget]:
        return await self.budgets.get_budget(trip_id)

    async def save_budget(self, budget: Budget) -> Budget:
        return await self.budgets.save_budget(budget)

    async def create_budget(self, data: BudgetIn) -> Budget:
        return await self.budgets.create_budget(data)

    async def update_budget(
        self, changes: BudgetUpdateIn, trip_id: Optional[str] = None
    ) -> Optional[Budget]:
        return await self.budgets.update_budget(changes, trip_id)

    async def update_budget_from_expenses(
        self, trip_id: Optional[str] = None
    ) -> Optional[Budget]:
        return await self.budgets.update_budget_from_expenses(trip_id)

    async def get_triggered_alerts(self, trip_id: Optional[str] = None) -> List[BudgetAlert]:
        return await self.budgets.triggered_alerts(trip_id)

    # Cash wallet ------------------------------------------------------
    async def get_cash_wallet(self) -> CashWallet:
        return await self.cash.get_wallet()

    async def add_cash_transaction(self, data: CashTransactionIn) -> CashTransaction:
        return await self.cash.add_transaction(data)

    async def withdraw_cash(
        self,
        currency: str,
        amount: float,
        description: str = "",
        fees: Optional[float] = None,
        location: Optional[str] = None,
    ) -> CashTransaction:
        return await self.cash.withdraw_cash(currency, amount, description, fees, location)

    async def spend_cash(
        self,
        currency: str,
        amount: float,
        description: str = "",
        location: Optional[str] = None,
    ) -> CashTransaction:
        return await self.cash.spend_cash(currency, amount, description, location)

    async def exchange_cash(
        self,
        from_currency: str,
        from_amount: float,
        to_currency: str,
        to_amount: float,
        fees: Optional[float] = None,
        location: Optional[str] = None,
    ) -> CashTransaction:
        return await self.cash.exchange_cash(
            from_currency, from_amount, to_currency, to_amount, fees, location
        )

    async def get_cash_balance(self, currency: str) -> float:
        return await self.cash.get_balance(currency)

    # Quick conversions / trip settings --------------------------------
    async def get_quick_conversions(self) -> List[QuickConversion]:
        return await self.quick_conversions.list_quick_conversions()

    async def add_quick_conversion(self, from_currency: str, to_currency: str) -> QuickConversion:
        return await self.quick_conversions.add_quick_conversion(from_currency, to_currency)

    async def get_trip_currency_settings(self, trip_id: str) -> Optional[TripCurrencySettings]:
        return await self.trip_settings.get(trip_id)

    async def save_trip_currency_settings(
        self, settings: TripCurrencySettings
    ) -> TripCurrencySettings:
        return await self.trip_settings.save(settings)


def make_backend(settings: Settings) -> KeyValueStore:
    if settings.storage_backend == "memory":
        return MemoryKeyValueStore()
    return SqliteKeyValueStore(Path(settings.db_path))  # type: ignore[arg-type]


def build_currency_service(settings: Optional[Settings] = None) -> CurrencyService:
    settings = settings or get_settings()
    store = JsonStore(make_backend(settings), namespace=settings.storage_namespace)
    return CurrencyService(store, settings=settings)
