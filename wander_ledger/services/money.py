"""Money / rounding helpers.

Centralized so conversion, budgets and the cash wallet use identical rounding
semantics. Values are quantized through their printed decimal form so
1.005 rounds as written instead of as its binary approximation.

'nearest' resolves ties toward +inf (-0.005 -> -0.00), matching a plain
round-half-up on the scaled value.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import (
    Decimal,
    ROUND_CEILING,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_UP,
    localcontext,
)
import math

from wander_ledger.models.constants import RoundingMode

_DECIMAL_ROUNDING = {
    "up": ROUND_CEILING,
    "down": ROUND_FLOOR,
}


def quantize(value: Decimal, places: int, rounding: str) -> Decimal:
    """Quantize to `places` decimals without hitting the context precision limit."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return value.quantize(Decimal(1).scaleb(-places), rounding=rounding)


def apply_rounding(value: float, mode: RoundingMode, precision: int) -> float:
    if mode == "none" or not math.isfinite(value):
        return value
    if mode == "nearest":
        rounding = ROUND_HALF_UP if value >= 0 else ROUND_HALF_DOWN
    else:
        rounding = _DECIMAL_ROUNDING[mode]
    return float(quantize(Decimal(str(value)), precision, rounding))


@dataclass(frozen=True)
class RoundingPolicy:
    mode: RoundingMode = "nearest"
    precision: int = 2

    def __post_init__(self) -> None:
        if self.precision < 0:
            raise ValueError("rounding precision must be non-negative")

    def apply(self, value: float) -> float:
        return apply_rounding(value, self.mode, self.precision)


NO_ROUNDING = RoundingPolicy(mode="none", precision=0)
