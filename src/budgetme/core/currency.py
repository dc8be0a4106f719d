#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

All ledger arithmetic is done on integer cents to avoid floating-point drift.

Currency Systems:
- Internal calculations use cents: 100 cents = $1.00
- The persisted ledger document stores dollars as JSON numbers: 12.34
- Display uses dollar strings: "$12.34" / "-$12.34"

Key Principles:
- Never accumulate floating-point values for balances
- Convert floats at the edges only, through Decimal
- Round to the nearest cent with banker's rounding
"""

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Union

CENT = Decimal("0.01")


def to_decimal(value: Union[str, int, float, Decimal]) -> Decimal:
    """
    Convert a dollar value of any supported type to Decimal.

    Floats go through ``str()`` so that 12.34 becomes Decimal("12.34") and not
    the binary expansion of the float.

    Args:
        value: Dollar amount like 12.34, "12.34", "$1,234.56" or 12

    Returns:
        Decimal dollar amount

    Raises:
        ValueError: If the value cannot be parsed as a number
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a currency amount: {value!r}")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))

    clean = str(value).replace("$", "").replace(",", "").strip()
    try:
        return Decimal(clean)
    except InvalidOperation:
        raise ValueError(f"Not a currency amount: {value!r}") from None


def dollars_to_cents(value: Union[str, int, float, Decimal]) -> int:
    """
    Convert dollars to integer cents, rounding to the nearest cent.

    Examples:
        dollars_to_cents("12.34") -> 1234
        dollars_to_cents(4.3000001) -> 430
        dollars_to_cents("-$5") -> -500
    """
    amount = to_decimal(value)
    if not amount.is_finite():
        raise ValueError(f"Not a finite currency amount: {value!r}")
    return int((amount * 100).quantize(Decimal(1), rounding=ROUND_HALF_EVEN))


def cents_to_dollars(cents: int) -> float:
    """Convert cents to a float dollar value for serialization."""
    return float((Decimal(cents) / 100).quantize(CENT))


def cents_to_dollars_str(cents: int) -> str:
    """
    Convert cents to dollar string using pure integer arithmetic.

    Example:
        cents_to_dollars_str(4599) -> "45.99"
        cents_to_dollars_str(-5) -> "-0.05"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{dollars}.{remainder:02d}"
    return f"{dollars}.{remainder:02d}"


def scale_cents(cents: int, factor: Union[int, float, Decimal]) -> int:
    """
    Multiply a cent amount by a factor, rounding to the nearest cent.

    Example:
        scale_cents(500, 1.5) -> 750
        scale_cents(333, 0.5) -> 166  # 166.5 rounds to even
    """
    scaled = Decimal(cents) * to_decimal(factor)
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_EVEN))


def format_cents(cents: int) -> str:
    """Format cents as a dollar string with the sign ahead of the $."""
    if cents < 0:
        return f"-${cents_to_dollars_str(-cents)}"
    return f"${cents_to_dollars_str(cents)}"
