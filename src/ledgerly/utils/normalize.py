"""Name and number normalization shared by ingestion, loading and the CLI."""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

CENTS = Decimal("0.01")

_WHITESPACE = re.compile(r"\s+")
_CURRENCY_SYMBOLS = re.compile(r"[$€£¥]")


def normalize_name(text: object) -> str:
    """Normalize a category, group or tag name.

    Trims, lowercases, turns underscores into spaces and collapses runs of
    whitespace. Anything that is not a string normalizes to ``""``.

    Examples:
        >>> normalize_name("  Gas_and   Fuel ")
        'gas and fuel'
    """
    if not isinstance(text, str):
        return ""
    return _WHITESPACE.sub(" ", text.strip().lower().replace("_", " ")).strip()


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount, quantized to cents

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not isinstance(amount_str, str) or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = _CURRENCY_SYMBOLS.sub("", amount_str).replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if is_negative:
        amount = -amount
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def normalize_amount(value: object, default: Optional[Decimal] = Decimal("0.00")) -> Optional[Decimal]:
    """Coerce a source value into a cents Decimal, degrading to ``default``.

    Unlike :func:`parse_amount` this never raises: a malformed historical row
    must not abort a bulk import.
    """
    if isinstance(value, Decimal):
        return value.quantize(CENTS, rounding=ROUND_HALF_UP) if value.is_finite() else default
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return normalize_amount(str(value), default)
    try:
        return parse_amount(value)  # type: ignore[arg-type]
    except ValueError:
        return default


def normalize_quantity(value: object, default: Optional[int] = None) -> Optional[int]:
    """Coerce a quantity into a positive integer, or return ``default``."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    if not isinstance(value, str) or not value.strip():
        return default
    try:
        number = Decimal(value.strip())
    except InvalidOperation:
        return default
    if not number.is_finite() or number != number.to_integral_value() or number <= 0:
        return default
    return int(number)
