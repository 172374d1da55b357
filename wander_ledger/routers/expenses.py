from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from wander_ledger.models.constants import CATEGORIES
from wander_ledger.models.expense import (
    Expense,
    ExpenseIn,
    ExpenseSummary,
    ExpenseUpdateIn,
)
from wander_ledger.services.currency_service import CurrencyService

from .deps import currency_or_400, get_service

router = APIRouter(prefix="/expenses", tags=["expenses"])

# Every mutation also refreshes the scope's budget so spent / alerts stay current.


@router.post("/", response_model=Expense, status_code=201, summary="Create an expense")
async def create_expense(payload: ExpenseIn, service: CurrencyService = Depends(get_service)):
    expense = await service.add_expense(payload)
    await service.update_budget_from_expenses(expense.trip_id)
    return expense


@router.get("/", response_model=List[Expense], summary="List expenses with optional filters")
async def list_expenses(
    trip_id: Optional[str] = Query(None, description="Scope to one trip"),
    category: Optional[str] = Query(None, description="Filter by category"),
    currency: Optional[str] = Query(None, description="Filter by original currency"),
    service: CurrencyService = Depends(get_service),
):
    if category is not None and category not in CATEGORIES:
        raise HTTPException(status_code=400, detail="unsupported category")
    expenses = await service.get_expenses(trip_id)
    if category is not None:
        expenses = [e for e in expenses if e.category == category]
    if currency is not None:
        code = currency_or_400(currency)
        expenses = [e for e in expenses if e.currency == code]
    return expenses


@router.get("/summary", response_model=ExpenseSummary, summary="Expense summary")
async def expense_summary(
    trip_id: Optional[str] = Query(None, description="Scope to one trip"),
    service: CurrencyService = Depends(get_service),
):
    return await service.get_expense_summary(trip_id)


@router.get("/{expense_id}", response_model=Expense, summary="Get one expense")
async def get_expense(expense_id: str, service: CurrencyService = Depends(get_service)):
    expense = await service.get_expense(expense_id)
    if expense is None:
        raise HTTPException(status_code=404, detail="expense not found")
    return expense


@router.patch("/{expense_id}", response_model=Expense, summary="Edit an expense (partial)")
async def patch_expense(
    expense_id: str,
    payload: ExpenseUpdateIn,
    service: CurrencyService = Depends(get_service),
):
    before = await service.get_expense(expense_id)
    updated = await service.update_expense(expense_id, payload)
    if updated is None:
        raise HTTPException(status_code=404, detail="expense not found")
    await service.update_budget_from_expenses(updated.trip_id)
    if before is not None and before.trip_id != updated.trip_id:
        await service.update_budget_from_expenses(before.trip_id)
    return updated


@router.delete("/{expense_id}", status_code=204, summary="Delete an expense")
async def delete_expense(expense_id: str, service: CurrencyService = Depends(get_service)):
    existing = await service.get_expense(expense_id)
    if not await service.delete_expense(expense_id):
        raise HTTPException(status_code=404, detail="expense not found")
    await service.update_budget_from_expenses(existing.trip_id if existing else None)
    return Response(status_code=204)
