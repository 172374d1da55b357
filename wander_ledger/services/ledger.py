"""Expense ledger over the `expenses` document.

Responsibilities
----------------
- CRUD on expenses, scoped by an optional trip id (no filter when omitted).
- Freeze a conversion snapshot (converted amount, currency and rate) into a
  new expense when auto-convert is on and the currency is not the home
  currency. Snapshots are never refreshed when rates move.
- Re-derive the snapshot on update when amount or currency change and the
  caller did not supply converted fields of its own.
- Summaries: home-currency total plus raw-amount breakdowns by category,
  currency and date.

Expenses whose currency cannot be converted contribute 0 to the home total.
The breakdown maps sum original amounts across currencies as-is.
"""

from __future__ import annotations
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from wander_ledger.core.errors import StorageError
from wander_ledger.db.store import JsonStore
from wander_ledger.models.constants import STORAGE_KEYS
from wander_ledger.models.expense import (
    Expense,
    ExpenseIn,
    ExpenseSummary,
    ExpenseUpdateIn,
)

from .preferences import PreferencesService
from .rates.conversion import Converter

logger = logging.getLogger("wander_ledger.ledger")

_KEY = STORAGE_KEYS["expenses"]
_SNAPSHOT_FIELDS = ("converted_amount", "converted_currency", "exchange_rate_used")


def _new_expense_id() -> str:
    return f"exp_{uuid.uuid4().hex[:12]}"


class ExpenseLedger:
    def __init__(
        self, store: JsonStore, preferences: PreferencesService, converter: Converter
    ):
        self._store = store
        self._preferences = preferences
        self._converter = converter

    # Internal --------------------------------------------------
    def _snapshot(self, amount: float, currency: str) -> Dict[str, Any]:
        """Conversion snapshot fields for (amount, currency); all None when not applicable."""
        prefs = self._preferences.current
        empty = dict.fromkeys(_SNAPSHOT_FIELDS)
        if not prefs.auto_convert or currency == prefs.home_currency:
            return empty
        result = self._converter.convert(
            amount, currency, prefs.home_currency, self._preferences.rounding_policy()
        )
        if result is None:
            return empty
        return {
            "converted_amount": result.converted_amount,
            "converted_currency": result.converted_currency,
            "exchange_rate_used": result.rate,
        }

    # Queries ---------------------------------------------------
    async def list_expenses(self, trip_id: Optional[str] = None) -> List[Expense]:
        try:
            rows = await self._store.read(_KEY, default=[])
        except StorageError:
            logger.exception("failed to load expenses")
            return []
        expenses = [Expense.model_validate(r) for r in rows]
        if trip_id is None:
            return expenses
        return [e for e in expenses if e.trip_id == trip_id]

    async def get_expense(self, expense_id: str) -> Optional[Expense]:
        return next(
            (e for e in await self.list_expenses() if e.id == expense_id), None
        )

    async def get_expenses_by_category(
        self, category: str, trip_id: Optional[str] = None
    ) -> List[Expense]:
        return [e for e in await self.list_expenses(trip_id) if e.category == category]

    async def get_expenses_by_currency(
        self, currency: str, trip_id: Optional[str] = None
    ) -> List[Expense]:
        return [e for e in await self.list_expenses(trip_id) if e.currency == currency]

    # Mutations -------------------------------------------------
    async def add_expense(self, data: ExpenseIn) -> Expense:
        now = datetime.now(timezone.utc)
        expense = Expense(
            **data.model_dump(),
            id=_new_expense_id(),
            created_at=now,
            updated_at=now,
        )
        expense = expense.model_copy(update=self._snapshot(expense.amount, expense.currency))
        row = expense.model_dump(mode="json")
        await self._store.update(_KEY, lambda rows: rows.append(row), default=[])
        logger.info(
            "expense added",
            extra={"expense_id": expense.id, "currency": expense.currency, "trip_id": expense.trip_id},
        )
        await self._preferences.add_recent_currency(expense.currency)
        return expense

    async def update_expense(
        self, expense_id: str, changes: ExpenseUpdateIn
    ) -> Optional[Expense]:
        patch = changes.changes()

        def _apply(rows: List[Dict[str, Any]]) -> Optional[Expense]:
            for idx, row in enumerate(rows):
                if row.get("id") != expense_id:
                    continue
                merged = {**Expense.model_validate(row).model_dump(), **patch}
                if ("amount" in patch or "currency" in patch) and not any(
                    f in patch for f in _SNAPSHOT_FIELDS
                ):
                    merged.update(self._snapshot(merged["amount"], merged["currency"]))
                merged["updated_at"] = datetime.now(timezone.utc)
                updated = Expense.model_validate(merged)
                rows[idx] = updated.model_dump(mode="json")
                return updated
            return None

        updated = await self._store.update(_KEY, _apply, default=[])
        if updated is not None:
            logger.info("expense updated", extra={"expense_id": expense_id})
        return updated

    async def delete_expense(self, expense_id: str) -> bool:
        def _remove(rows: List[Dict[str, Any]]) -> bool:
            before = len(rows)
            rows[:] = [r for r in rows if r.get("id") != expense_id]
            return len(rows) != before

        removed = await self._store.update(_KEY, _remove, default=[])
        if removed:
            logger.info("expense deleted", extra={"expense_id": expense_id})
        return removed

    # Aggregates ------------------------------------------------
    async def get_expense_summary(self, trip_id: Optional[str] = None) -> ExpenseSummary:
        expenses = await self.list_expenses(trip_id)
        home = self._preferences.home_currency
        policy = self._preferences.rounding_policy()
        summary = ExpenseSummary(home_currency=home, count=len(expenses))

        for expense in expenses:
            if expense.currency == home:
                summary.total_in_home_currency += expense.amount
            elif expense.has_snapshot and expense.converted_currency == home:
                summary.total_in_home_currency += expense.converted_amount  # type: ignore[operator]
            else:
                converted = self._converter.convert(
                    expense.amount, expense.currency, home, policy
                )
                if converted is not None:
                    summary.total_in_home_currency += converted.converted_amount

            summary.by_category[expense.category] = (
                summary.by_category.get(expense.category, 0) + expense.amount
            )
            summary.by_currency[expense.currency] = (
                summary.by_currency.get(expense.currency, 0) + expense.amount
            )
            day = expense.date.isoformat()
            summary.by_date[day] = summary.by_date.get(day, 0) + expense.amount

        days = len(summary.by_date)
        summary.average_per_day = summary.total_in_home_currency / days if days else 0.0
        return summary
