from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from wander_ledger.models.currency import Currency
from wander_ledger.services import currencies

router = APIRouter(prefix="/currencies", tags=["currencies"])


@router.get("/", response_model=List[Currency], summary="List or search currencies")
async def list_currencies(
    q: Optional[str] = Query(
        None, description="Case-insensitive match on code, name or country"
    ),
):
    if q:
        return currencies.search_currencies(q)
    return currencies.get_all_currencies()


@router.get("/popular", response_model=List[Currency], summary="Popular currencies")
async def popular_currencies():
    return currencies.get_popular_currencies()


@router.get("/{code}", response_model=Currency, summary="Get one currency")
async def get_currency(code: str):
    currency = currencies.get_currency(code)
    if currency is None:
        raise HTTPException(status_code=404, detail="currency not found")
    return currency
