from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from pricing_engine.config import Settings, get_settings


Number = Union[Decimal, int, str]


def round_price(value: Number) -> int:
    """Round to the nearest whole currency unit, halves away from zero."""
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def group_thousands(value: int, separator: str = " ") -> str:
    return f"{value:,}".replace(",", separator)


def format_price(value: Number, settings: Optional[Settings] = None) -> str:
    """
    Format a price for display: "66 150 ₽".

    Rounding happens here and only here.
    """
    settings = settings or get_settings()
    grouped = group_thousands(round_price(value), settings.thousands_separator)
    return f"{grouped} {settings.currency_suffix}"


def format_weight(kg: Optional[Decimal]) -> str:
    if kg is None:
        return ""
    return f"{kg.normalize():f} кг"
