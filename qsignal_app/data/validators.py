"""Input validation for bars and position requests."""

import math
from numbers import Real
from typing import Any

from ..errors import MalformedDataError
from .models import Bar


def validate_price(value: Any, field: str) -> float:
    """
    Check that a price is a finite, strictly positive number.

    Returns:
        The price as float

    Raises:
        MalformedDataError: If the value cannot be used as a price
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise MalformedDataError(
            f"{field} must be a number, got {type(value).__name__}",
            field=field,
            value=value
        )

    price = float(value)
    if not math.isfinite(price) or price <= 0:
        raise MalformedDataError(
            f"{field} must be a finite positive number, got {price}",
            field=field,
            value=value
        )
    return price


def validate_quantity(value: Any) -> float:
    """Check that a position quantity is a finite number (sign gives direction)."""
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise MalformedDataError(
            f"quantity must be a finite number, got {value!r}",
            field="quantity",
            value=value
        )
    return float(value)


def build_bar(open_: float, high: float, low: float, close: float,
              volume: float, bar_index: int) -> Bar:
    """
    Build a Bar from host arguments.

    Only the close is validated; the other fields are carried through
    unscored so that bar-oriented callers keep a stable surface.
    """
    return Bar(
        open=open_,
        high=high,
        low=low,
        close=validate_price(close, "close"),
        volume=volume,
        index=bar_index,
    )
