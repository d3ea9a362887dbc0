"""
Money Utilities - Safe Decimal operations for monetary values.

Every amount in the cart is a Decimal carrying exactly two fractional digits,
rounded half-up at the points where the pricing pipeline rounds.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional, Union

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

ZERO = Decimal("0.00")

Number = Union[str, int, float, Decimal]


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        # Convert via string to avoid float precision issues
        if isinstance(value, float):
            return Decimal(str(value))
        if isinstance(value, str):
            return Decimal(value.strip())
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_money(value: Optional[str]) -> Optional[Decimal]:
    """
    Parse user or file supplied text into a rounded money value.

    Unlike to_decimal, this reports failure instead of hiding it.

    Returns:
        Rounded Decimal, or None if the text is empty, not a number, or not finite
    """
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return None
    if not parsed.is_finite():
        return None
    return round_money(parsed)


def round_money(value: Number) -> Decimal:
    """Round monetary value to two places, half-up."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def format_money(value: Number, symbol: str = "R") -> str:
    """
    Format monetary value with currency symbol.

    Args:
        value: Value to format
        symbol: Currency symbol placed before the amount

    Returns:
        Formatted string, e.g. "R1,299.00"; negative values as "-R50.00"
    """
    decimal_value = round_money(value)
    sign = "-" if decimal_value < 0 else ""
    return f"{sign}{symbol}{abs(decimal_value):,.2f}"


def add(a: Number, b: Number) -> Decimal:
    """Safe addition of monetary values."""
    return to_decimal(a) + to_decimal(b)


def subtract(a: Number, b: Number) -> Decimal:
    """Safe subtraction of monetary values."""
    return to_decimal(a) - to_decimal(b)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def clamp_non_negative(value: Number) -> Decimal:
    """max(value, 0)."""
    decimal_value = to_decimal(value)
    if decimal_value < 0:
        return ZERO
    return decimal_value
