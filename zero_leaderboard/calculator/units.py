"""Conversion between base units and common (human) units.

Token amounts arrive from the explorer as integer strings in base units.
Supplies routinely exceed 2**53, so conversion goes through Decimal built
from the digit string and never through float.
"""

from decimal import Decimal

from ..core.exceptions import ValidationError


def parse_base_units(amount: int | str) -> int:
    """Parse a base-unit amount into a non-negative int."""
    if isinstance(amount, bool):
        raise ValidationError("amount", str(amount), "expected an integer amount")
    if isinstance(amount, int):
        value = amount
    else:
        text = str(amount).strip()
        if not (text.isascii() and text.isdigit()):
            raise ValidationError("amount", text, "expected a non-negative integer string")
        value = int(text)
    if value < 0:
        raise ValidationError("amount", str(amount), "must not be negative")
    return value


def base_to_common(amount: int | str, decimals: int) -> Decimal:
    """
    Convert a base-unit amount into common units.

    The result equals amount / 10**decimals exactly.

    Args:
        amount: Integer amount in base units (int or digit string)
        decimals: Token decimals exponent

    Returns:
        Decimal amount in common units

    Raises:
        ValidationError: If amount is not a non-negative integer or decimals is negative
    """
    if decimals < 0:
        raise ValidationError("decimals", str(decimals), "must not be negative")
    # Building from (sign, digits, exponent) skips context rounding.
    digits = tuple(int(d) for d in str(parse_base_units(amount)))
    return Decimal((0, digits, -decimals))

