#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors and keeps ledger comparisons exact.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import (
    cents_to_dollars,
    dollars_to_cents,
    format_cents,
    scale_cents,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents (USD).

    Balances may be negative (a loan spend), so the sign is preserved
    throughout.

    Examples:
        >>> balance = Money.from_dollars(10)
        >>> str(balance - Money.from_dollars("12.50"))
        '-$2.50'

        >>> Money.from_dollars(5).scale(1.5)
        Money(cents=750)

        >>> Money.from_cents(25).halve()
        Money(cents=12)
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_dollars(cls, dollars: str | int | float | Decimal) -> "Money":
        """
        Parse from a dollar value like '$123.45', 123.45 or 12.

        Args:
            dollars: Dollar amount in any supported representation

        Returns:
            Money rounded to the nearest cent

        Raises:
            ValueError: If the value is not a finite number
        """
        return cls(cents=dollars_to_cents(dollars))

    @classmethod
    def zero(cls) -> "Money":
        return cls(cents=0)

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_dollars(self) -> float:
        """Get value in dollars, for the persisted document."""
        return cents_to_dollars(self.cents)

    def scale(self, factor: int | float | Decimal) -> "Money":
        """Multiply by a (possibly fractional) factor, rounding to the cent."""
        return Money(cents=scale_cents(self.cents, factor))

    def halve(self) -> "Money":
        """Half of this amount, rounding to the cent."""
        return self.scale(Decimal("0.5"))

    def is_negative(self) -> bool:
        return self.cents < 0

    def is_positive(self) -> bool:
        return self.cents > 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __neg__(self) -> "Money":
        return Money(cents=-self.cents)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.cents == other.cents

    def __lt__(self, other: "Money") -> bool:
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as dollar string."""
        return format_cents(self.cents)

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(cents={self.cents})"
