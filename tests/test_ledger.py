"""Expense ledger: snapshots, updates, summaries and concurrency."""

import asyncio
from datetime import date

import pytest

from wander_ledger.models.expense import ExpenseIn, ExpenseUpdateIn


def _expense(amount, currency, day=date(2024, 3, 1), **kw):
    return ExpenseIn(amount=amount, currency=currency, date=day, **kw)


async def test_add_expense_freezes_snapshot(service):
    expense = await service.add_expense(_expense(100, "EUR", description="Dinner"))
    assert expense.id.startswith("exp_")
    assert expense.converted_amount == 108.0
    assert expense.converted_currency == "USD"
    assert expense.exchange_rate_used == pytest.approx(1.08)
    assert expense.created_at == expense.updated_at
    assert service.get_preferences().recent_currencies[0] == "EUR"


async def test_snapshot_survives_rate_refresh(service):
    expense = await service.add_expense(_expense(100, "EUR"))
    assert await service.fetch_latest_rates()
    stored = await service.get_expense(expense.id)
    assert stored.converted_amount == 108.0
    assert stored.exchange_rate_used == pytest.approx(1.08)


async def test_home_currency_expense_has_no_snapshot(service):
    expense = await service.add_expense(_expense(20, "USD"))
    assert not expense.has_snapshot
    assert expense.exchange_rate_used is None


async def test_auto_convert_off_skips_snapshot(service):
    await service.preferences.save({"auto_convert": False})
    expense = await service.add_expense(_expense(100, "EUR"))
    assert expense.converted_amount is None


async def test_unconvertible_expense_has_no_snapshot(service):
    expense = await service.add_expense(_expense(500, "INR"))
    assert expense.converted_amount is None


async def test_update_recomputes_snapshot_on_amount_change(service):
    expense = await service.add_expense(_expense(100, "EUR"))
    updated = await service.update_expense(expense.id, ExpenseUpdateIn(amount=50))
    assert updated.amount == 50
    assert updated.converted_amount == 54.0
    assert updated.updated_at >= expense.updated_at


async def test_update_keeps_snapshot_for_other_fields(service):
    expense = await service.add_expense(_expense(100, "EUR"))
    updated = await service.update_expense(
        expense.id, ExpenseUpdateIn(description="Lunch", category="food_drink")
    )
    assert updated.description == "Lunch"
    assert updated.converted_amount == 108.0


async def test_update_with_explicit_snapshot_wins(service):
    expense = await service.add_expense(_expense(100, "EUR"))
    updated = await service.update_expense(
        expense.id,
        ExpenseUpdateIn(amount=200, converted_amount=210.0, exchange_rate_used=1.05),
    )
    assert updated.converted_amount == 210.0
    assert updated.exchange_rate_used == 1.05


async def test_update_to_home_currency_clears_snapshot(service):
    expense = await service.add_expense(_expense(100, "EUR"))
    updated = await service.update_expense(expense.id, ExpenseUpdateIn(currency="USD"))
    assert updated.currency == "USD"
    assert updated.converted_amount is None
    assert updated.converted_currency is None


async def test_update_and_delete_missing(service):
    assert await service.update_expense("exp_missing", ExpenseUpdateIn(amount=1)) is None
    assert await service.delete_expense("exp_missing") is False


async def test_delete_expense(service):
    expense = await service.add_expense(_expense(10, "USD"))
    assert await service.delete_expense(expense.id) is True
    assert await service.get_expense(expense.id) is None
    assert await service.delete_expense(expense.id) is False


async def test_update_requires_a_field():
    with pytest.raises(ValueError):
        ExpenseUpdateIn()


async def test_summary_totals_and_breakdowns(service):
    await service.add_expense(_expense(100, "EUR", category="food_drink"))
    await service.add_expense(_expense(20, "USD", category="food_drink"))
    await service.add_expense(_expense(1500, "JPY", day=date(2024, 3, 2), category="transportation"))

    summary = await service.get_expense_summary()
    # 108 (snapshot) + 20 + 1500 / 150
    assert summary.total_in_home_currency == pytest.approx(138.0)
    assert summary.home_currency == "USD"
    assert summary.count == 3
    assert summary.by_category == {"food_drink": 120, "transportation": 1500}
    assert summary.by_currency == {"EUR": 100, "USD": 20, "JPY": 1500}
    assert summary.by_date == {"2024-03-01": 120, "2024-03-02": 1500}
    assert summary.average_per_day == pytest.approx(69.0)
    assert sum(summary.by_category.values()) == sum(summary.by_currency.values())
    assert sum(summary.by_date.values()) == sum(summary.by_currency.values())


async def test_summary_converts_when_snapshot_missing(service):
    await service.preferences.save({"auto_convert": False})
    await service.add_expense(_expense(100, "EUR"))
    summary = await service.get_expense_summary()
    assert summary.total_in_home_currency == pytest.approx(108.0)


async def test_summary_skips_unconvertible(service):
    await service.add_expense(_expense(10, "USD"))
    await service.add_expense(_expense(1000, "INR"))
    summary = await service.get_expense_summary()
    assert summary.total_in_home_currency == pytest.approx(10.0)
    assert summary.by_currency["INR"] == 1000


async def test_empty_summary(service):
    summary = await service.get_expense_summary()
    assert summary.count == 0
    assert summary.total_in_home_currency == 0
    assert summary.average_per_day == 0


async def test_trip_scope(service):
    await service.add_expense(_expense(10, "USD", trip_id="paris"))
    await service.add_expense(_expense(5, "USD", trip_id="rome"))
    await service.add_expense(_expense(1, "USD"))

    assert len(await service.get_expenses()) == 3
    assert [e.amount for e in await service.get_expenses("paris")] == [10]
    summary = await service.get_expense_summary("rome")
    assert summary.count == 1
    assert summary.total_in_home_currency == 5


async def test_filters_by_category_and_currency(service):
    await service.add_expense(_expense(10, "USD", category="tips"))
    await service.add_expense(_expense(10, "EUR", category="fees"))
    assert len(await service.get_expenses_by_category("tips")) == 1
    assert len(await service.get_expenses_by_currency("EUR")) == 1


async def test_concurrent_adds_are_not_lost(service):
    await asyncio.gather(*(service.add_expense(_expense(i + 1, "USD")) for i in range(20)))
    expenses = await service.get_expenses()
    assert len(expenses) == 20
    assert len({e.id for e in expenses}) == 20
