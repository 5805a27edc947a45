"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
from typing import Optional
import re

_NUMBER_PATTERN = re.compile(r"^[+-]?(\d[\d,]*(\.\d*)?|\.\d+)$")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "₹123.45"
    - "1,234.56"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is not finite
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove currency symbols, commas and whitespace
    cleaned = re.sub(r"[$€£¥₹]", "", amount_str.strip())
    cleaned = cleaned.replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")
    if not amount.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a finite number")
    return amount


def parse_number(token: str) -> Optional[Decimal]:
    """Read a whitespace-free token as a plain decimal number.

    Returns None for anything that is not a number: words, bill references
    such as "SV2029", bracketed names, and dates containing "/".
    """
    if "/" in token or not _NUMBER_PATTERN.match(token):
        return None
    return Decimal(token.replace(",", ""))


def is_whole_cents(amount: Decimal) -> bool:
    """Check that an amount has at most two decimal places.

    Trailing zeros do not count, so "100.500" is whole cents.
    """
    return amount.normalize().as_tuple().exponent >= -2
