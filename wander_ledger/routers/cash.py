from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator

from wander_ledger.models.cash import CashTransaction, CashTransactionIn, CashWallet
from wander_ledger.models.currency import normalize_currency_code
from wander_ledger.services.currency_service import CurrencyService

from .deps import currency_or_400, get_service

router = APIRouter(prefix="/cash-wallet", tags=["cash"])


class CashAmountIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    currency: str
    amount: float = Field(..., gt=0)
    description: str = ""
    fees: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None

    @field_validator("currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        return normalize_currency_code(v)


class CashExchangeIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    from_currency: str
    from_amount: float = Field(..., gt=0)
    to_currency: str
    to_amount: float = Field(..., gt=0)
    fees: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None

    @field_validator("from_currency", "to_currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        return normalize_currency_code(v)


class BalanceOut(BaseModel):
    currency: str
    amount: float


@router.get("/", response_model=CashWallet, summary="Cash wallet with balances")
async def get_wallet(service: CurrencyService = Depends(get_service)):
    return await service.get_cash_wallet()


@router.get("/balances/{currency}", response_model=BalanceOut, summary="Balance for a currency")
async def get_balance(currency: str, service: CurrencyService = Depends(get_service)):
    code = currency_or_400(currency)
    return BalanceOut(currency=code, amount=await service.get_cash_balance(code))


@router.post(
    "/transactions",
    response_model=CashTransaction,
    status_code=201,
    summary="Record a cash transaction",
)
async def add_transaction(
    payload: CashTransactionIn, service: CurrencyService = Depends(get_service)
):
    return await service.add_cash_transaction(payload)


@router.post("/withdraw", response_model=CashTransaction, status_code=201, summary="Withdraw cash")
async def withdraw(payload: CashAmountIn, service: CurrencyService = Depends(get_service)):
    return await service.withdraw_cash(
        payload.currency,
        payload.amount,
        payload.description,
        payload.fees,
        payload.location,
    )


@router.post("/spend", response_model=CashTransaction, status_code=201, summary="Spend cash")
async def spend(payload: CashAmountIn, service: CurrencyService = Depends(get_service)):
    return await service.spend_cash(
        payload.currency, payload.amount, payload.description, payload.location
    )


@router.post(
    "/exchange", response_model=CashTransaction, status_code=201, summary="Exchange cash"
)
async def exchange(payload: CashExchangeIn, service: CurrencyService = Depends(get_service)):
    return await service.exchange_cash(
        payload.from_currency,
        payload.from_amount,
        payload.to_currency,
        payload.to_amount,
        payload.fees,
        payload.location,
    )
