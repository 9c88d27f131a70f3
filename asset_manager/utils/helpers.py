"""
General helper utilities
"""
from typing import Any, Optional


def format_currency(amount: float) -> str:
    """Format amount as Indian Rupees, no decimals"""
    return f"₹{amount:,.0f}"


def as_number(value: Any, default: float = 0) -> float:
    """Coerce a possibly missing numeric field for arithmetic"""
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def lower_text(value: Optional[Any]) -> str:
    """Case-insensitive comparison key, missing values become empty string"""
    if value is None:
        return ""
    return str(value).lower()
