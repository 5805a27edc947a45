"""GST helpers.

Posted amounts already include GST at a fixed rate; these helpers only
split an amount for display.
"""

from decimal import Decimal, ROUND_HALF_UP

GST_RATE = Decimal("0.03")
_CENTS = Decimal("0.01")


def split_gst(amount: Decimal) -> tuple[Decimal, Decimal]:
    """Split a GST-inclusive amount into (base, gst), each rounded to cents."""
    base = (amount / (1 + GST_RATE)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    gst = (amount - base).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return base, gst
