"""Display formatting for money amounts.

Numbers are grouped en-US style first; currencies whose decimal separator is
',' then get '.' and ',' swapped. Compact mode (1.2K / 3.4M / 5.0B) always
renders with one decimal and a '.' separator.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from wander_ledger.models.currency import FormatOptions, Money

from .currencies import get_currency
from .money import RoundingPolicy, quantize
from .rates.conversion import Converter

_COMPACT_STEPS = ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K"))


def _plain_number(amount: float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


def _one_decimal(value: float) -> str:
    # Ties round up (1.25 -> 1.3), not to even.
    return format(quantize(Decimal(str(value)), 1, ROUND_HALF_UP), "f")


def _compact(abs_amount: float) -> str:
    for step, suffix in _COMPACT_STEPS:
        if abs_amount >= step:
            return f"{_one_decimal(abs_amount / step)}{suffix}"
    return _one_decimal(abs_amount)


def _grouped(abs_amount: float, min_digits: int, max_digits: int) -> str:
    value = quantize(Decimal(str(abs_amount)), max_digits, ROUND_HALF_UP)
    text = format(value, f",.{max_digits}f")
    if max_digits > min_digits and "." in text:
        whole, frac = text.split(".")
        frac = frac.rstrip("0")
        if len(frac) < min_digits:
            frac = frac.ljust(min_digits, "0")
        text = f"{whole}.{frac}" if frac else whole
    return text


def format_amount(
    amount: float, currency_code: str, options: Optional[FormatOptions] = None
) -> str:
    currency = get_currency(currency_code)
    if currency is None:
        return f"{_plain_number(amount)} {currency_code}"

    opts = options or FormatOptions()
    max_digits = (
        opts.maximum_fraction_digits
        if opts.maximum_fraction_digits is not None
        else currency.decimal_places
    )
    min_digits = (
        opts.minimum_fraction_digits
        if opts.minimum_fraction_digits is not None
        else currency.decimal_places
    )
    min_digits = min(min_digits, max_digits)

    abs_amount = abs(amount)
    if opts.compact and abs_amount >= 1000:
        number = _compact(abs_amount)
    else:
        number = _grouped(abs_amount, min_digits, max_digits)
        if currency.decimal_separator == ",":
            number = number.replace(",", "\0").replace(".", ",").replace("\0", ".")

    sign = ""
    if opts.show_sign and amount > 0:
        sign = "+"
    elif amount < 0:
        sign = "-"

    if not opts.show_symbol:
        result = sign + number
    elif currency.symbol_position == "before":
        result = f"{sign}{currency.symbol}{number}"
    else:
        result = f"{sign}{number} {currency.symbol}"

    if opts.show_code:
        result += f" {currency.code}"
    return result


def format_money(money: Money, options: Optional[FormatOptions] = None) -> str:
    return format_amount(money.amount, money.currency, options)


def format_with_conversion(
    money: Money, target_currency: str, converter: Converter, policy: RoundingPolicy
) -> str:
    """'<original> (<converted>)', or just the original when no conversion applies."""
    original = format_money(money)
    if money.currency == target_currency:
        return original
    result = converter.convert(money.amount, money.currency, target_currency, policy)
    if result is None:
        return original
    return f"{original} ({format_amount(result.converted_amount, target_currency)})"
