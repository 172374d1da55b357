from fastapi import HTTPException, Request

from wander_ledger.models.currency import normalize_currency_code
from wander_ledger.services.currency_service import CurrencyService


async def get_service(request: Request) -> CurrencyService:
    """Return the app's currency service, loading preferences and rates on first use."""
    service: CurrencyService = request.app.state.currency_service
    if not service.initialized:
        await service.initialize()
    return service


def currency_or_400(code: str) -> str:
    try:
        return normalize_currency_code(code)
    except ValueError:
        raise HTTPException(status_code=400, detail="unsupported currency")
