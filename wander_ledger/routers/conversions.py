from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, field_validator

from wander_ledger.models.currency import (
    ConversionRequest,
    ConversionResult,
    ConvertedMoney,
    FormatOptions,
    Money,
    QuickConversion,
    normalize_currency_code,
)
from wander_ledger.services.currency_service import CurrencyService

from .deps import get_service

router = APIRouter(prefix="/conversions", tags=["conversions"])


class FormatIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    amount: float
    # Unknown codes are allowed here; they render as "<amount> <code>".
    currency: str
    options: FormatOptions = Field(default_factory=FormatOptions)


class FormatWithConversionIn(BaseModel):
    money: Money
    target_currency: Optional[str] = None

    @field_validator("target_currency")
    @classmethod
    def valid_target(cls, v: Optional[str]) -> Optional[str]:
        return normalize_currency_code(v) if v is not None else None


class FormattedOut(BaseModel):
    formatted: str


class QuickConversionIn(BaseModel):
    from_currency: str
    to_currency: str

    @field_validator("from_currency", "to_currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        return normalize_currency_code(v)


@router.post("/", response_model=ConversionResult, summary="Convert an amount")
async def convert(payload: ConversionRequest, service: CurrencyService = Depends(get_service)):
    result = service.convert(payload.amount, payload.from_currency, payload.to_currency)
    if result is None:
        raise HTTPException(status_code=404, detail="no rate available for pair")
    return result


@router.post(
    "/home", response_model=ConvertedMoney, summary="Convert money into the home currency"
)
async def convert_to_home(payload: Money, service: CurrencyService = Depends(get_service)):
    result = service.convert_to_home(payload)
    if result is None:
        raise HTTPException(status_code=404, detail="no rate available for pair")
    return result


@router.post("/format", response_model=FormattedOut, summary="Format an amount for display")
async def format_amount(payload: FormatIn, service: CurrencyService = Depends(get_service)):
    return FormattedOut(
        formatted=service.format(payload.amount, payload.currency.upper(), payload.options)
    )


@router.post(
    "/format-with-conversion",
    response_model=FormattedOut,
    summary="Format money with its converted value in parentheses",
)
async def format_with_conversion(
    payload: FormatWithConversionIn, service: CurrencyService = Depends(get_service)
):
    return FormattedOut(
        formatted=service.format_with_conversion(payload.money, payload.target_currency)
    )


@router.get("/quick", response_model=List[QuickConversion], summary="Quick conversion pairs")
async def list_quick_conversions(service: CurrencyService = Depends(get_service)):
    return await service.get_quick_conversions()


@router.post(
    "/quick", response_model=QuickConversion, summary="Record a quick conversion pair"
)
async def add_quick_conversion(
    payload: QuickConversionIn, service: CurrencyService = Depends(get_service)
):
    return await service.add_quick_conversion(payload.from_currency, payload.to_currency)
