#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

All money math in finboard runs on integer cents to avoid floating-point
drift while summing transactions and goal contributions.

Currency Systems:
- Stored records carry decimal text: "1234.56"
- Internal calculations use cents: 100 cents = 1.00
- Display uses formatted strings: "$1,234.56"

Key Principles:
- Never sum floats; parse once, add integers
- Round only when producing a ratio, a percentage or a pacing amount
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

CENT = Decimal("0.01")
TENTH = Decimal("0.1")


def cents_to_dollars_str(cents: int) -> str:
    """
    Convert cents to a plain dollar string using pure integer arithmetic.

    Args:
        cents: Amount in cents

    Returns:
        Formatted dollar string

    Example:
        cents_to_dollars_str(4599) -> "45.99"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{dollars}.{remainder:02d}"
    return f"{dollars}.{remainder:02d}"


def parse_dollars_to_cents(dollars_str: str) -> int:
    """
    Parse a dollar string to cents.

    Digits beyond the cent are rounded half up, the same as Decimal and
    float amounts passed to to_cents.

    Args:
        dollars_str: String representation of dollar amount

    Returns:
        Amount in cents

    Raises:
        ValueError: If the string is not a number

    Examples:
        parse_dollars_to_cents("12.34") -> 1234
        parse_dollars_to_cents("$12.34") -> 1234
        parse_dollars_to_cents("1,234.56") -> 123456
        parse_dollars_to_cents("12.5") -> 1250
        parse_dollars_to_cents("10.999") -> 1100
    """
    clean = dollars_str.replace("$", "").replace(",", "").strip()

    if not clean:
        raise ValueError("Empty currency string")

    is_negative = clean.startswith("-")
    if is_negative:
        clean = clean[1:]

    if "." in clean:
        whole, _, fraction = clean.partition(".")
        if (whole and not whole.isdigit()) or (fraction and not fraction.isdigit()) or not (whole or fraction):
            raise ValueError(f"Invalid currency string: {dollars_str!r}")
        total = decimal_to_cents(Decimal(f"{whole or 0}.{fraction or 0}"))
    else:
        if not clean.isdigit():
            raise ValueError(f"Invalid currency string: {dollars_str!r}")
        total = int(clean) * 100

    return -total if is_negative else total


def decimal_to_cents(amount: Decimal) -> int:
    """Round a Decimal dollar amount to whole cents (half up)."""
    return int((amount / CENT).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_cents(value: Union[str, int, float, Decimal]) -> int:
    """
    Convert a user or storage supplied amount to cents.

    Strings, Decimals and floats are rounded half up to the cent, ints
    are whole dollars.

    Raises:
        ValueError: If the value is not numeric
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a currency amount: {value!r}")
    if isinstance(value, int):
        return value * 100
    if isinstance(value, float):
        return decimal_to_cents(Decimal(str(value)))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Not a currency amount: {value!r}")
        return decimal_to_cents(value)
    if isinstance(value, str):
        return parse_dollars_to_cents(value)
    raise ValueError(f"Not a currency amount: {value!r}")


def safe_currency_to_cents(currency_str: Union[str, int, float, Decimal, None]) -> int:
    """
    Convert to cents, returning 0 for anything that does not parse.

    Examples:
        safe_currency_to_cents('$45.99') -> 4599
        safe_currency_to_cents('FREE') -> 0
        safe_currency_to_cents('') -> 0
    """
    if currency_str is None:
        return 0
    try:
        return to_cents(currency_str)
    except (ValueError, TypeError, OverflowError, InvalidOperation):
        return 0


def percentage(numerator: int, denominator: int, places: Decimal = TENTH) -> float:
    """
    Percentage of two cent amounts, rounded half up (1 decimal by default).

    Returns 0.0 when the denominator is zero.
    """
    if denominator == 0:
        return 0.0
    ratio = Decimal(numerator) * 100 / Decimal(denominator)
    return float(ratio.quantize(places, rounding=ROUND_HALF_UP))


def format_cents(cents: int) -> str:
    """Format cents as dollar string with $ prefix and thousands separators."""
    sign = "-" if cents < 0 else ""
    dollars, remainder = divmod(abs(int(cents)), 100)
    return f"{sign}${dollars:,}.{remainder:02d}"
