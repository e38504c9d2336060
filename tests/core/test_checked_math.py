# [TESTER] v1

from __future__ import annotations

import pytest

from cpamm.core.errors import AmmError, ArithmeticOverflow, InvalidAuthority, NoAuthoritySet
from cpamm.core.math import (
    U64_MAX,
    U128_MAX,
    ceil_div,
    checked_add,
    checked_mul,
    checked_sub,
    floor_div,
    mul_div_ceil,
    mul_div_floor,
    require_u64,
    to_u64,
)


def test_checked_add_bounds() -> None:
    assert checked_add(U64_MAX - 1, 1) == U64_MAX
    with pytest.raises(ArithmeticOverflow):
        checked_add(U64_MAX, 1)


def test_checked_sub_underflow() -> None:
    assert checked_sub(5, 5) == 0
    with pytest.raises(ArithmeticOverflow):
        checked_sub(4, 5)


def test_checked_mul_uses_u128() -> None:
    assert checked_mul(U64_MAX, U64_MAX) == U64_MAX * U64_MAX
    with pytest.raises(ArithmeticOverflow):
        checked_mul(U128_MAX, 2)


def test_division_rounding() -> None:
    assert floor_div(7, 2) == 3
    assert ceil_div(7, 2) == 4
    assert ceil_div(8, 2) == 4
    assert ceil_div(0, 3) == 0
    assert mul_div_floor(10, 10, 3) == 33
    assert mul_div_ceil(10, 10, 3) == 34


@pytest.mark.parametrize("fn", [floor_div, ceil_div])
def test_division_by_zero(fn) -> None:
    with pytest.raises(ArithmeticOverflow):
        fn(1, 0)


def test_require_u64() -> None:
    assert require_u64("x", 0) == 0
    assert require_u64("x", U64_MAX) == U64_MAX
    with pytest.raises(ArithmeticOverflow):
        require_u64("x", U64_MAX + 1)
    with pytest.raises(ValueError):
        require_u64("x", -1)
    with pytest.raises(TypeError):
        require_u64("x", False)
    with pytest.raises(TypeError):
        require_u64("x", "1")  # type: ignore[arg-type]


def test_to_u64() -> None:
    assert to_u64("x", 3) == 3
    with pytest.raises(ArithmeticOverflow):
        to_u64("x", U64_MAX + 1)


def test_error_codes_are_stable() -> None:
    assert ArithmeticOverflow.code == "arithmetic_overflow"
    assert issubclass(NoAuthoritySet, InvalidAuthority)
    assert issubclass(InvalidAuthority, AmmError)
    assert NoAuthoritySet("x").code == "no_authority_set"
