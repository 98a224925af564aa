"""Currency arithmetic.

Amounts are persisted as floats with two decimal places; all arithmetic is
done in ``Decimal`` and rounded half-up to the cent before it is stored.
"""

import os
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def store_currency() -> str:
    return os.getenv("STORE_CURRENCY", "MMK")


def to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    # str() avoids binary float artefacts such as 0.1 + 0.2
    return Decimal(str(value))


def quantize(value) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price, quantity: int) -> Decimal:
    return quantize(to_decimal(unit_price) * quantity)


def sum_lines(lines) -> Decimal:
    """Sum ``(unit_price, quantity)`` pairs."""
    total = Decimal("0")
    for unit_price, quantity in lines:
        total += to_decimal(unit_price) * quantity
    return quantize(total)


def as_amount(value) -> float:
    """Round to the cent and convert to the persisted float representation."""
    return float(quantize(value))
