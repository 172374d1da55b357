from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from wander_ledger.models.budget import Budget, BudgetAlert, BudgetIn, BudgetUpdateIn
from wander_ledger.services.currency_service import CurrencyService

from .deps import get_service

router = APIRouter(prefix="/budgets", tags=["budgets"])

_TRIP_QUERY = Query(None, description="Trip identifier (falls back to the first budget)")


@router.get("/", response_model=Budget, summary="Budget for a trip")
async def get_budget(
    trip_id: Optional[str] = _TRIP_QUERY,
    service: CurrencyService = Depends(get_service),
):
    budget = await service.get_budget(trip_id)
    if budget is None:
        raise HTTPException(status_code=404, detail="budget not found")
    return budget


@router.post("/", response_model=Budget, status_code=201, summary="Create a budget")
async def create_budget(payload: BudgetIn, service: CurrencyService = Depends(get_service)):
    return await service.create_budget(payload)


@router.patch("/", response_model=Budget, summary="Update a budget (partial)")
async def update_budget(
    payload: BudgetUpdateIn,
    trip_id: Optional[str] = _TRIP_QUERY,
    service: CurrencyService = Depends(get_service),
):
    budget = await service.update_budget(payload, trip_id)
    if budget is None:
        raise HTTPException(status_code=404, detail="budget not found")
    return budget


@router.post(
    "/refresh", response_model=Budget, summary="Recompute spend and alerts from expenses"
)
async def refresh_budget(
    trip_id: Optional[str] = _TRIP_QUERY,
    service: CurrencyService = Depends(get_service),
):
    budget = await service.update_budget_from_expenses(trip_id)
    if budget is None:
        raise HTTPException(status_code=404, detail="budget not found")
    return budget


@router.get("/alerts", response_model=List[BudgetAlert], summary="Triggered budget alerts")
async def triggered_alerts(
    trip_id: Optional[str] = _TRIP_QUERY,
    service: CurrencyService = Depends(get_service),
):
    return await service.get_triggered_alerts(trip_id)
