from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from wander_ledger.models.preferences import CurrencyPreferences, PreferencesUpdate
from wander_ledger.services.currency_service import CurrencyService

from .deps import currency_or_400, get_service

router = APIRouter(prefix="/preferences", tags=["preferences"])


class HomeCurrencyIn(BaseModel):
    currency: str = Field(..., description="ISO code of the new home currency")


@router.get("/", response_model=CurrencyPreferences, summary="Current preferences")
async def get_preferences(service: CurrencyService = Depends(get_service)):
    return service.get_preferences()


@router.patch(
    "/", response_model=CurrencyPreferences, summary="Update preferences (partial)"
)
async def update_preferences(
    payload: PreferencesUpdate, service: CurrencyService = Depends(get_service)
):
    return await service.save_preferences(payload)


@router.put(
    "/home-currency", response_model=CurrencyPreferences, summary="Set home currency"
)
async def set_home_currency(
    payload: HomeCurrencyIn, service: CurrencyService = Depends(get_service)
):
    return await service.set_home_currency(currency_or_400(payload.currency))


@router.post(
    "/recent/{currency}",
    response_model=CurrencyPreferences,
    summary="Record a recently used currency",
)
async def add_recent_currency(
    currency: str, service: CurrencyService = Depends(get_service)
):
    return await service.add_recent_currency(currency_or_400(currency))


@router.post(
    "/favorites/{currency}/toggle",
    response_model=CurrencyPreferences,
    summary="Add or remove a favorite currency",
)
async def toggle_favorite(currency: str, service: CurrencyService = Depends(get_service)):
    return await service.toggle_favorite_currency(currency_or_400(currency))


@router.post(
    "/reset", response_model=CurrencyPreferences, summary="Reset preferences to defaults"
)
async def reset_preferences(service: CurrencyService = Depends(get_service)):
    return await service.reset_preferences()
