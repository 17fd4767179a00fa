#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors in transaction sums and goal balances.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from .currency import (
    cents_to_dollars_str,
    decimal_to_cents,
    format_cents,
    parse_dollars_to_cents,
    to_cents,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents.

    Transaction amounts are always non-negative; the transaction type says
    whether the money came in or went out. Balances and deltas may be negative.

    Examples:
        >>> income = Money.from_dollars("1234.56")
        >>> str(income)
        '$1,234.56'

        >>> expense = Money.from_cents(4599)
        >>> (income - expense).to_cents()
        118857

        >>> Money.from_decimal(Decimal("10.005"))
        Money(cents=1001)
    """

    cents: int

    @classmethod
    def zero(cls) -> "Money":
        """Zero amount."""
        return cls(cents=0)

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_dollars(cls, dollars: str | int) -> "Money":
        """
        Parse from dollar string like '$123.45' or integer dollars.

        Args:
            dollars: String like "$12.34" or integer like 12

        Returns:
            Money object
        """
        if isinstance(dollars, int):
            return cls(cents=dollars * 100)
        return cls(cents=parse_dollars_to_cents(dollars))

    @classmethod
    def from_decimal(cls, amount: Decimal) -> "Money":
        """Create Money from a Decimal dollar amount, rounding half up to the cent."""
        return cls(cents=decimal_to_cents(amount))

    @classmethod
    def parse(cls, value: Union["Money", str, int, float, Decimal]) -> "Money":
        """
        Coerce any supported amount representation to Money.

        Raises:
            ValueError: If the value is not numeric
        """
        if isinstance(value, Money):
            return value
        return cls(cents=to_cents(value))

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_decimal(self) -> Decimal:
        """Get value in dollars as an exact Decimal."""
        return Decimal(self.cents) / 100

    def to_dollars(self) -> str:
        """Get plain dollar string without symbol, e.g. '12.34'."""
        return cents_to_dollars_str(self.cents)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def is_zero(self) -> bool:
        """True when the amount is exactly zero."""
        return self.cents == 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar)

    def __neg__(self) -> "Money":
        return Money(cents=-self.cents)

    def __bool__(self) -> bool:
        return self.cents != 0

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.cents == other.cents

    def __hash__(self) -> int:
        return hash(self.cents)

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as dollar string."""
        return format_cents(self.cents)

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(cents={self.cents})"


def sum_money(amounts) -> Money:
    """Sum an iterable of Money values; empty input yields zero."""
    total = 0
    for amount in amounts:
        total += amount.cents
    return Money(cents=total)
