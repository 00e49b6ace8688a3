from __future__ import annotations

import math
import time
from decimal import Decimal
from typing import Any


def clamp(v: int, lo: int, hi: int) -> int:
    return min(hi, max(lo, v))


def is_finite(*values: Any) -> bool:
    """True if every value converts to a finite float."""
    try:
        return all(math.isfinite(float(v)) for v in values)
    except (TypeError, ValueError):
        return False


def shortest_decimal(x: float) -> Decimal:
    """
    Exact decimal for the shortest repr of a float (the digits Python prints).

    shortest_decimal(0.1) -> Decimal('0.1'), not the binary expansion
    0.1000000000000000055511151231257827...
    """
    return Decimal(repr(float(x))).normalize()


def fraction_digits(x: float) -> int:
    """Number of fractional digits in the shortest decimal form of x (0 for integers)."""
    exponent = shortest_decimal(x).as_tuple().exponent
    return max(0, -int(exponent))


def timer_ms(func):
    """
    Decorator that returns (result, elapsed_ms) for benchmarking small functions.
    """
    def wrapper(*args, **kwargs):
        t0 = time.perf_counter()
        out = func(*args, **kwargs)
        dt_ms = (time.perf_counter() - t0) * 1e3
        return out, dt_ms
    return wrapper
