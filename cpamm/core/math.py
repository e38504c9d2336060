"""Checked integer arithmetic for the pool engine.

Every function is stateless and operates on plain Python ints. Python ints do
not wrap, so "checked" here means bounded: reserves, LP supply and user
amounts live in u64, intermediate products in u128, and leaving either domain
raises ``ArithmeticOverflow`` instead of producing a value the ledger could not
hold.

Rounding is explicit: ``//`` floors, ``ceil_div`` rounds up. Callers pick the
direction that favors the pool.
"""

from __future__ import annotations

from .errors import ArithmeticOverflow

BPS_SCALE: int = 10_000
U64_MAX: int = (1 << 64) - 1
U128_MAX: int = (1 << 128) - 1


def require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_non_negative(name: str, value: int) -> int:
    require_int(name, value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")
    return int(value)


def require_u64(name: str, value: int) -> int:
    """Validate a caller-supplied amount: int, non-negative, fits u64."""
    require_non_negative(name, value)
    if value > U64_MAX:
        raise ArithmeticOverflow(f"{name} exceeds u64: {value}")
    return int(value)


def _bounded(value: int, bound: int, op: str) -> int:
    if value < 0:
        raise ArithmeticOverflow(f"underflow in {op}: {value}")
    if value > bound:
        raise ArithmeticOverflow(f"overflow in {op}: {value}")
    return value


def checked_add(a: int, b: int, *, bound: int = U64_MAX) -> int:
    return _bounded(a + b, bound, "add")


def checked_sub(a: int, b: int, *, bound: int = U64_MAX) -> int:
    return _bounded(a - b, bound, "sub")


def checked_mul(a: int, b: int, *, bound: int = U128_MAX) -> int:
    return _bounded(a * b, bound, "mul")


def floor_div(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        raise ArithmeticOverflow("division by zero")
    if numerator < 0:
        raise ArithmeticOverflow(f"negative numerator: {numerator}")
    return numerator // denominator


def ceil_div(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        raise ArithmeticOverflow("division by zero")
    if numerator < 0:
        raise ArithmeticOverflow(f"negative numerator: {numerator}")
    return (numerator + denominator - 1) // denominator


def mul_div_floor(a: int, b: int, denominator: int) -> int:
    """``floor(a * b / denominator)`` with a u128-bounded product."""
    return floor_div(checked_mul(a, b), denominator)


def mul_div_ceil(a: int, b: int, denominator: int) -> int:
    """``ceil(a * b / denominator)`` with a u128-bounded product."""
    return ceil_div(checked_mul(a, b), denominator)


def to_u64(name: str, value: int) -> int:
    """Narrow a computed value back into u64."""
    if value < 0 or value > U64_MAX:
        raise ArithmeticOverflow(f"{name} does not fit u64: {value}")
    return value
