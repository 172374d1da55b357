from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from wander_ledger.models.currency import ExchangeRate
from wander_ledger.services.currency_service import CurrencyService

from .deps import currency_or_400, get_service

"""Rates router.

Endpoints:
    - GET  /rates                 -> stored rate table + last refresh time
    - GET  /rates/{from}/{to}     -> resolved rate (direct, inverse or via USD)
    - POST /rates/refresh         -> full table refresh from the rate source
"""

router = APIRouter(prefix="/rates", tags=["rates"])


class RateTableOut(BaseModel):
    last_updated: Optional[datetime]
    rates: List[ExchangeRate]


class RefreshOut(BaseModel):
    status: str
    last_updated: Optional[datetime]
    rate_pairs: int


@router.get("/", response_model=RateTableOut, summary="Stored exchange rates")
async def list_rates(service: CurrencyService = Depends(get_service)):
    return RateTableOut(
        last_updated=service.get_rates_last_updated(), rates=service.all_rates()
    )


@router.post("/refresh", response_model=RefreshOut, summary="Refresh the rate table")
async def refresh_rates(
    base: str = Query("USD", description="Base currency to request from the source"),
    service: CurrencyService = Depends(get_service),
):
    ok = await service.fetch_latest_rates(currency_or_400(base))
    if not ok:
        raise HTTPException(status_code=503, detail="rates could not be refreshed")
    return RefreshOut(
        status="ok",
        last_updated=service.get_rates_last_updated(),
        rate_pairs=len(service.rate_table),
    )


@router.get(
    "/{from_currency}/{to_currency}",
    response_model=ExchangeRate,
    summary="Resolve the rate for a currency pair",
)
async def get_rate(
    from_currency: str,
    to_currency: str,
    service: CurrencyService = Depends(get_service),
):
    rate = service.get_rate(currency_or_400(from_currency), currency_or_400(to_currency))
    if rate is None:
        raise HTTPException(status_code=404, detail="no rate available for pair")
    return rate
