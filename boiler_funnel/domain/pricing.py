"""Currency parsing, formatting and unit conversion for GBP amounts"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP

from boiler_funnel.domain.exceptions import InvalidPriceError

CURRENCY_SYMBOL = "£"
PLAIN_AMOUNT = re.compile(r"\d+(\.\d+)?")


def extract_price(display: str) -> float:
    """
    Parse a display price such as "£2,340" or "£26.90".

    Strips the currency symbol and thousands separators. Returns NaN when the
    remainder is not a plain decimal amount (no signs, exponents, underscores
    or inf/nan); use parse_price() where a bad price must stop the calculation.
    """
    cleaned = display.strip().replace(CURRENCY_SYMBOL, "").replace(",", "")
    if not PLAIN_AMOUNT.fullmatch(cleaned):
        return math.nan
    return float(cleaned)


def parse_price(display: str | float | int) -> float:
    """
    Resolve a price given as a number or a display string.

    Raises:
        InvalidPriceError: If the value is malformed, negative or not finite
    """
    if isinstance(display, str):
        amount = extract_price(display)
    else:
        amount = float(display)

    if not math.isfinite(amount) or amount < 0:
        raise InvalidPriceError(f"Invalid price: {display!r}")
    return amount


def format_currency(amount: float) -> str:
    """Format as whole pounds with grouping, e.g. 2600 -> "£2,600" """
    pounds = int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if pounds < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(pounds):,}"


def percentage_of(amount: float, percentage: float) -> float:
    """Portion of amount for a percentage expressed as 0-100"""
    return amount * (percentage / 100)


def to_minor_units(amount: float) -> int:
    """
    Convert pounds to integer pence for the payment gateway.

    Rounds half up: 26.905 -> 2691.
    """
    pence = Decimal(str(amount)) * 100
    return int(pence.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(pence: int) -> float:
    """Convert integer pence back to pounds"""
    return pence / 100
