"""Budget engine over the `budgets` document.

Augments stored budgets with derived spend figures and evaluates their
alerts against the scope's expenses:

    spent        = home-currency expense total, converted into the budget
                   currency when it differs (left in home currency when no
                   rate path exists)
    remaining    = total_amount - spent (may go negative)
    percent_used = spent * 100 / total_amount, or 0 when total_amount is 0

Alerts are sticky: once triggered they stay triggered with their first
`triggered_at`, even if spending later drops back under the threshold.
"""

from __future__ import annotations
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from wander_ledger.core.errors import StorageError
from wander_ledger.db.store import JsonStore
from wander_ledger.models.budget import Budget, BudgetAlert, BudgetIn, BudgetUpdateIn
from wander_ledger.models.constants import STORAGE_KEYS

from .ledger import ExpenseLedger
from .preferences import PreferencesService
from .rates.conversion import Converter

logger = logging.getLogger("wander_ledger.budgets")

_KEY = STORAGE_KEYS["budgets"]
_NON_NULLABLE = {"name", "total_amount", "currency", "category_budgets", "alerts"}


def budget_status(budget: Budget, spent: float) -> Budget:
    """Return a copy of `budget` with derived figures and alerts evaluated."""
    remaining = budget.total_amount - spent
    percent_used = 0.0
    if budget.total_amount > 0:
        percent_used = spent * 100 / budget.total_amount
    now = datetime.now(timezone.utc)
    alerts = [_evaluate_alert(a, percent_used, remaining, now) for a in budget.alerts]
    return budget.model_copy(
        update={
            "spent": spent,
            "remaining": remaining,
            "percent_used": percent_used,
            "alerts": alerts,
        }
    )


def _evaluate_alert(
    alert: BudgetAlert, percent_used: float, remaining: float, now: datetime
) -> BudgetAlert:
    if alert.triggered:
        return alert
    if alert.type == "threshold" and alert.threshold:
        fired = percent_used >= alert.threshold
    elif alert.type == "overspent":
        fired = remaining < 0
    else:
        fired = False
    if not fired:
        return alert
    return alert.model_copy(
        update={"triggered": True, "triggered_at": alert.triggered_at or now}
    )


class BudgetEngine:
    def __init__(
        self,
        store: JsonStore,
        preferences: PreferencesService,
        ledger: ExpenseLedger,
        converter: Converter,
    ):
        self._store = store
        self._preferences = preferences
        self._ledger = ledger
        self._converter = converter

    async def list_budgets(self) -> List[Budget]:
        try:
            rows = await self._store.read(_KEY, default=[])
        except StorageError:
            logger.exception("failed to load budgets")
            return []
        return [Budget.model_validate(r) for r in rows]

    async def get_budget(self, trip_id: Optional[str] = None) -> Optional[Budget]:
        """Budget for the trip, else the first stored budget, else None."""
        budgets = await self.list_budgets()
        match = next((b for b in budgets if b.trip_id == trip_id), None)
        if match is not None:
            return match
        return budgets[0] if budgets else None

    async def save_budget(self, budget: Budget) -> Budget:
        row = budget.model_dump(mode="json")

        def _upsert(rows: List[Dict[str, Any]]) -> None:
            for idx, existing in enumerate(rows):
                if existing.get("id") == budget.id:
                    rows[idx] = row
                    return
            rows.append(row)

        await self._store.update(_KEY, _upsert, default=[])
        return budget

    async def create_budget(self, data: BudgetIn) -> Budget:
        budget = Budget(
            **data.model_dump(exclude={"id"}),
            id=data.id or f"budget_{uuid.uuid4().hex[:12]}",
            spent=0.0,
            remaining=data.total_amount,
            percent_used=0.0,
        )
        await self.save_budget(budget)
        logger.info("budget created", extra={"budget_id": budget.id, "trip_id": budget.trip_id})
        refreshed = await self.update_budget_from_expenses(budget.trip_id)
        return refreshed or budget

    async def update_budget(
        self, changes: BudgetUpdateIn, trip_id: Optional[str] = None
    ) -> Optional[Budget]:
        current = await self.get_budget(trip_id)
        if current is None:
            return None
        patch = {
            k: v
            for k, v in changes.model_dump(exclude_unset=True).items()
            if v is not None or k not in _NON_NULLABLE
        }
        updated = Budget.model_validate({**current.model_dump(), **patch})
        await self.save_budget(updated)
        refreshed = await self.update_budget_from_expenses(trip_id)
        return refreshed or updated

    async def update_budget_from_expenses(
        self, trip_id: Optional[str] = None
    ) -> Optional[Budget]:
        budget = await self.get_budget(trip_id)
        if budget is None:
            return None

        summary = await self._ledger.get_expense_summary(trip_id)
        home = self._preferences.home_currency
        spent = summary.total_in_home_currency
        if budget.currency != home:
            converted = self._converter.convert(
                spent, home, budget.currency, self._preferences.rounding_policy()
            )
            if converted is not None:
                spent = converted.converted_amount

        refreshed = budget_status(budget, spent)
        await self.save_budget(refreshed)
        newly = [
            a.id
            for a, before in zip(refreshed.alerts, budget.alerts)
            if a.triggered and not before.triggered
        ]
        if newly:
            logger.warning(
                "budget alerts triggered: %s",
                ", ".join(newly),
                extra={"budget_id": refreshed.id, "trip_id": refreshed.trip_id},
            )
        return refreshed

    async def triggered_alerts(self, trip_id: Optional[str] = None) -> List[BudgetAlert]:
        budget = await self.get_budget(trip_id)
        if budget is None:
            return []
        return [a for a in budget.alerts if a.triggered]
