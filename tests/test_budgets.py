"""Budget engine: derived figures, scope fallback and sticky alerts."""

from datetime import date

import pytest

from wander_ledger.models.budget import BudgetAlert, BudgetIn, BudgetUpdateIn
from wander_ledger.models.expense import ExpenseIn


def _budget(total=1000, currency="USD", trip_id=None, **kw):
    alerts = kw.pop(
        "alerts",
        [
            BudgetAlert(id="half", type="threshold", threshold=50, message="Half spent"),
            BudgetAlert(id="over", type="overspent", message="Over budget"),
        ],
    )
    kw.setdefault("name", "Spring trip")
    return BudgetIn(
        total_amount=total, currency=currency, trip_id=trip_id, alerts=alerts, **kw
    )


async def _spend(service, amount, currency="USD", trip_id=None):
    return await service.add_expense(
        ExpenseIn(amount=amount, currency=currency, date=date(2024, 3, 1), trip_id=trip_id)
    )


async def test_create_budget_initialises_figures(service):
    budget = await service.create_budget(_budget())
    assert budget.id.startswith("budget_")
    assert budget.spent == 0
    assert budget.remaining == 1000
    assert budget.percent_used == 0
    assert (await service.get_budget()).model_dump() == budget.model_dump()


async def test_refresh_from_expenses(service):
    await service.create_budget(_budget())
    expense = await _spend(service, 600)
    budget = await service.update_budget_from_expenses()

    assert budget.spent == 600
    assert budget.remaining == 400
    assert budget.percent_used == pytest.approx(60.0)
    assert budget.remaining == budget.total_amount - budget.spent
    half = next(a for a in budget.alerts if a.id == "half")
    assert half.triggered and half.triggered_at is not None
    assert not next(a for a in budget.alerts if a.id == "over").triggered
    assert [a.id for a in await service.get_triggered_alerts()] == ["half"]

    # Alerts stay triggered after spending drops back.
    await service.delete_expense(expense.id)
    later = await service.update_budget_from_expenses()
    assert later.spent == 0
    later_half = next(a for a in later.alerts if a.id == "half")
    assert later_half.triggered
    assert later_half.triggered_at == half.triggered_at


async def test_overspent_alert(service):
    await service.create_budget(_budget())
    await _spend(service, 1200)
    budget = await service.update_budget_from_expenses()
    assert budget.remaining == -200
    assert budget.display_remaining == 0
    assert next(a for a in budget.alerts if a.id == "over").triggered


async def test_threshold_boundary_triggers(service):
    await service.create_budget(_budget(alerts=[BudgetAlert(id="t29", type="threshold", threshold=29)]))
    await _spend(service, 290)
    budget = await service.update_budget_from_expenses()
    assert budget.alerts[0].triggered


async def test_zero_total_budget_reports_zero_percent(service):
    await service.create_budget(_budget(total=0))
    await _spend(service, 50)
    budget = await service.update_budget_from_expenses()
    assert budget.percent_used == 0
    assert budget.remaining == -50


async def test_spent_converted_into_budget_currency(service):
    await service.create_budget(_budget(currency="EUR"))
    await _spend(service, 108)
    budget = await service.update_budget_from_expenses()
    assert budget.spent == pytest.approx(100.0)


async def test_spent_stays_in_home_currency_without_rate(service):
    await service.create_budget(_budget(currency="INR"))
    await _spend(service, 75)
    budget = await service.update_budget_from_expenses()
    assert budget.spent == 75


async def test_scope_fallback_and_missing(service):
    assert await service.get_budget() is None
    assert await service.update_budget_from_expenses() is None
    assert await service.get_triggered_alerts() == []
    assert await service.update_budget(BudgetUpdateIn(total_amount=5)) is None

    rome = await service.create_budget(_budget(trip_id="rome"))
    paris = await service.create_budget(_budget(trip_id="paris", name="Paris"))
    assert (await service.get_budget("paris")).id == paris.id
    assert (await service.get_budget("lisbon")).id == rome.id


async def test_save_budget_upserts(service):
    budget = await service.create_budget(_budget())
    renamed = budget.model_copy(update={"name": "Renamed"})
    await service.save_budget(renamed)
    budgets = await service.budgets.list_budgets()
    assert [b.name for b in budgets] == ["Renamed"]


async def test_update_budget_recomputes(service):
    await service.create_budget(_budget())
    await _spend(service, 400)
    budget = await service.update_budget(BudgetUpdateIn(total_amount=500))
    assert budget.total_amount == 500
    assert budget.remaining == 100
    assert budget.percent_used == pytest.approx(80.0)


def test_budget_dates_validated():
    with pytest.raises(ValueError):
        _budget(start_date=date(2024, 3, 10), end_date=date(2024, 3, 1))
