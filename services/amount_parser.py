# services/amount_parser.py
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

_NON_NUMERIC_RE = re.compile(r"[^0-9.\-]+")

# Longest leading number, as a float parser reads it ("12.5-3" -> 12.5)
_LEADING_NUMBER_RE = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)")

CENT = Decimal("0.01")


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parse a user-typed amount such as "S$12.50" or "1,200".

    Every character outside digits, "." and "-" is dropped, then the leading
    number is read. Returns the value rounded to cents, or None when there is
    no number or the rounded value is not strictly positive.
    """
    if not text:
        return None

    cleaned = _NON_NUMERIC_RE.sub("", text)
    match = _LEADING_NUMBER_RE.match(cleaned)
    if not match:
        return None

    try:
        value = Decimal(match.group(0))
    except InvalidOperation:
        return None

    if not value.is_finite():
        return None

    value = value.quantize(CENT, rounding=ROUND_HALF_UP)
    if value <= 0:
        return None
    return value
