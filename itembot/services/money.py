from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from itembot.config import CURRENCY

_CENT = Decimal("0.01")


def money(value: float | int | str | Decimal) -> float:
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def fmt_money(value: float | int | str | Decimal) -> str:
    return f"{CURRENCY}{money(value):,.2f}"
