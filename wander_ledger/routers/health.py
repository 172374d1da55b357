from fastapi import APIRouter, Depends

from wander_ledger.services.currency_service import CurrencyService

from .deps import get_service

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness and rate table status")
async def health(service: CurrencyService = Depends(get_service)):
    return {
        "status": "ok",
        "version": service.settings.version,
        "rate_pairs": len(service.rate_table),
        "rates_last_updated": service.get_rates_last_updated(),
    }
