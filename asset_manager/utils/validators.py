"""
Input validation utilities
"""
import math
from typing import Any


def blank_to_none(value: Any) -> Any:
    """Empty strings from forms are stored as NULL"""
    if isinstance(value, str) and value == "":
        return None
    return value


def parse_int_id(raw: str) -> int:
    """Parse a numeric path id; integral floats such as "3.0" are accepted"""
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        raise ValueError(f"Invalid id: {raw!r}")
    if math.isfinite(number) and number.is_integer():
        return int(number)
    raise ValueError(f"Invalid id: {raw!r}")
