from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator

from wander_ledger.models.currency import ExchangeRate, normalize_currency_code
from wander_ledger.models.preferences import TripCurrencySettings
from wander_ledger.services.currency_service import CurrencyService

from .deps import get_service

router = APIRouter(prefix="/trips", tags=["trips"])


class TripCurrencySettingsIn(BaseModel):
    primary_currency: str
    local_currencies: List[str] = Field(default_factory=list)
    budget_currency: str
    locked_rates: List[ExchangeRate] = Field(default_factory=list)

    @field_validator("primary_currency", "budget_currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        return normalize_currency_code(v)

    @field_validator("local_currencies")
    @classmethod
    def valid_currencies(cls, v: List[str]) -> List[str]:
        return [normalize_currency_code(c) for c in v]


@router.get(
    "/{trip_id}/currency-settings",
    response_model=TripCurrencySettings,
    summary="Currency settings for a trip",
)
async def get_currency_settings(trip_id: str, service: CurrencyService = Depends(get_service)):
    settings = await service.get_trip_currency_settings(trip_id)
    if settings is None:
        raise HTTPException(status_code=404, detail="trip currency settings not found")
    return settings


@router.put(
    "/{trip_id}/currency-settings",
    response_model=TripCurrencySettings,
    summary="Create or replace currency settings for a trip",
)
async def put_currency_settings(
    trip_id: str,
    payload: TripCurrencySettingsIn,
    service: CurrencyService = Depends(get_service),
):
    settings = TripCurrencySettings(trip_id=trip_id, **payload.model_dump())
    return await service.save_trip_currency_settings(settings)
