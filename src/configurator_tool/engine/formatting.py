"""
Display formatting for prices and answer values.

Prices are stored in cents and displayed as whole euros in the nl-BE style
("€ 1.234"), with a no-break space after the euro sign.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

EURO_PREFIX = "€\u00a0"


def number_to_text(value) -> str:
    """Render a number the way it was typed: 4.0 -> "4", 2.5 -> "2.5"."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_price(cents: float) -> str:
    """Format a price in euros (from cents), rounded to whole euros."""
    euros = (Decimal(str(cents)) / 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    amount = f"{abs(int(euros)):,}".replace(",", ".")
    sign = "-" if euros < 0 else ""
    return f"{EURO_PREFIX}{sign}{amount}"


def format_price_range(min_cents: float, max_cents: Optional[float] = None) -> str:
    """Format a price as "Vanaf" (starting from); the max bound is not shown."""
    return f"Vanaf {format_price(min_cents)}"


def format_decimal(value: float, places: int = 1) -> str:
    """Fixed decimals, ties rounded away from zero: 6.25 -> "6.3"."""
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
