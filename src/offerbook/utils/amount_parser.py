"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "250"
    - "123.45"
    - "1,234.56"
    - " 1,000 "

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If the string is empty, not a number, not finite,
            or negative
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    # Remove whitespace and grouping separators
    cleaned = str(amount_str).strip().replace(",", "")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a finite number")
    if amount < 0:
        raise ValueError(f"Amount '{amount_str}' must not be negative")
    return amount


def coerce_amount(amount_str: str) -> Decimal:
    """Leniently parse an amount, returning 0 when it cannot be read.

    Every character except digits and the decimal point is dropped, so
    "1,250.50abc" becomes 1250.50. Used while editing pending entries,
    where a typo must never interrupt entry.
    """
    cleaned = re.sub(r"[^0-9.]", "", str(amount_str or ""))
    if not cleaned:
        return Decimal("0")
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return Decimal("0")
