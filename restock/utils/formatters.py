"""
Formatting helpers for receipts and JSON views.
Montos en estilo argentino: punto para miles, coma para decimales.
"""
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

Number = Union[int, float, Decimal, str, None]


def money_ar(value: Number) -> str:
    """
    Format an amount with exactly 2 decimals, Argentine style.

    Examples:
        money_ar(1500) -> "1.500,00"
        money_ar(Decimal('20.5')) -> "20,50"
        money_ar(None) -> "-"
    """
    if value is None or value == "":
        return "-"

    try:
        normalized = str(value).replace(",", ".")
        num = Decimal(normalized).quantize(Decimal('0.01'))
    except (InvalidOperation, ValueError, TypeError):
        return "-"

    sign = "-" if num < 0 else ""
    num = abs(num)

    integer_part, decimal_part = f"{num:.2f}".split(".")
    reversed_int = integer_part[::-1]
    groups = [reversed_int[i:i+3] for i in range(0, len(reversed_int), 3)]
    integer_formatted = '.'.join(groups)[::-1]

    return f"{sign}{integer_formatted},{decimal_part}"


def as_float(value: Number) -> Optional[float]:
    """Money column -> JSON number (None stays None)."""
    if value is None:
        return None
    return float(Decimal(str(value)).quantize(Decimal('0.01')))
