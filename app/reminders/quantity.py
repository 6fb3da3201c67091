import re
from typing import Any

# Leading decimal number, the way a browser's parseFloat reads "2 tablets"
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def _parse_leading_float(text: str) -> float | None:
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    return float(match.group(0))


def parse_quantity(quantity: Any) -> float:
    """Parse a dose quantity string into a number of units.

    Supports plain numbers ("2", "1.5") and simple fractions ("1/2").
    A fraction with a zero denominator falls back to its leading number;
    anything that cannot be read yields 0.
    """
    if not isinstance(quantity, str):
        return 0
    if "/" in quantity:
        parts = quantity.split("/")
        if len(parts) == 2:
            numerator = _parse_leading_float(parts[0])
            denominator = _parse_leading_float(parts[1])
            if numerator is not None and denominator is not None and denominator != 0:
                return numerator / denominator
    value = _parse_leading_float(quantity)
    return value if value is not None else 0
