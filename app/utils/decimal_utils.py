"""Decimal arithmetic helpers

Money is always handled as ``Decimal`` at scale 2. Binary floats are never
accepted, and values that carry more precision than a cent are rejected
instead of being rounded or truncated.
"""

from decimal import Decimal, InvalidOperation
from typing import Iterable, Union

from app.core.exceptions import ValidationError

MONEY_SCALE = 2
CENT = Decimal("0.01")
ZERO = Decimal("0.00")

MoneyInput = Union[Decimal, str, int]


def to_money(value: MoneyInput) -> Decimal:
    """
    Convert a value to a scale-2 Decimal without losing precision.

    Args:
        value: Decimal, numeric string or integer

    Returns:
        Decimal quantized to two decimal places

    Raises:
        ValidationError: If the value is a float, not a finite number, or has
            more than two decimal places
    """
    if isinstance(value, (float, bool)):
        raise ValidationError(
            f"Monetary values must be exact decimals, got {type(value).__name__}"
        )

    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid monetary value: {value!r}")

    if not amount.is_finite():
        raise ValidationError(f"Invalid monetary value: {value!r}")

    try:
        quantized = amount.quantize(CENT)
    except InvalidOperation:
        raise ValidationError(f"Monetary value out of range: {value!r}")
    if quantized != amount:
        raise ValidationError(
            f"Monetary values must have at most {MONEY_SCALE} decimal places, got {value}"
        )
    return quantized


def sum_money(values: Iterable[MoneyInput]) -> Decimal:
    """
    Sum monetary values exactly at scale 2.

    Args:
        values: Monetary values

    Returns:
        Sum of all values, ``Decimal("0.00")`` for no values
    """
    total = ZERO
    for value in values:
        total += to_money(value)
    return total


def format_money(value: MoneyInput) -> str:
    """Render a monetary value as a canonical ``"123.45"`` string"""
    return f"{to_money(value):.{MONEY_SCALE}f}"

