"""Amount parsing utilities."""

import math
import re

_CURRENCY = re.compile(r"^(rp\.?|idr)\s*", re.IGNORECASE)


def _is_grouping(separator: str, text: str) -> bool:
    """True if every occurrence of ``separator`` in ``text`` groups thousands."""
    head, *groups = text.split(separator)
    return bool(head) and all(len(group) == 3 and group.isdigit() for group in groups)


def parse_amount(amount_str: str) -> float:
    """Parse a Rupiah amount string into a float.

    Handles both Indonesian and English digit grouping:
    - "150000", "Rp150.000", "IDR 1.500.000"
    - "Rp12.345,50" (comma decimal) and "12,345.50" (dot decimal)
    - "12.5" and "12,5" (a single separator not followed by three digits is decimal)

    Args:
        amount_str: Amount string

    Returns:
        Amount as a float

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()
    is_negative = text.startswith("-")
    if is_negative:
        text = text[1:]
    text = _CURRENCY.sub("", text.strip()).replace(" ", "")

    if "." in text and "," in text:
        # Whichever separator comes last is the decimal point.
        decimal_sep = "," if text.rfind(",") > text.rfind(".") else "."
        group_sep = "." if decimal_sep == "," else ","
        text = text.replace(group_sep, "").replace(decimal_sep, ".")
    elif "." in text:
        if _is_grouping(".", text):
            text = text.replace(".", "")
    elif "," in text:
        text = text.replace(",", "") if _is_grouping(",", text) else text.replace(",", ".")

    try:
        amount = float(text)
    except ValueError:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not math.isfinite(amount):
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount
