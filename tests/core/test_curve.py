# [TESTER] v1

from __future__ import annotations

import pytest

from cpamm.core.curve import invariant, quote_deposit, quote_swap, quote_withdraw, spot_price
from cpamm.core.errors import (
    ArithmeticOverflow,
    InsufficientLiquidity,
    InsufficientShares,
    InvalidFee,
    SlippageExceeded,
    ZeroAmount,
)
from cpamm.core.math import U64_MAX


# ---------------------------------------------------------------------------
# swap
# ---------------------------------------------------------------------------


def test_swap_concrete_scenario_rounds_output_down() -> None:
    reserve = 1_000_000_000
    amount_in = 1_000_000

    q = quote_swap(reserve_in=reserve, reserve_out=reserve, amount_in=amount_in, fee_bps=0)

    # floor(1e9 * 1e6 / 1_001_000_000) = floor(999000.999...) = 999000
    assert q.amount_out == 999_000
    # Same value via the "new reserve" form with the new reserve rounded up.
    k = reserve * reserve
    new_out_ceil = -(-k // (reserve + amount_in))
    assert q.amount_out == reserve - new_out_ceil

    assert q.fee == 0
    assert q.new_reserve_in == 1_001_000_000
    assert q.new_reserve_out == 999_001_000
    assert q.k_after >= q.k_before
    assert q.new_reserve_in * q.new_reserve_out == q.k_after


def test_swap_sequence_preserves_k_without_fee() -> None:
    q1 = quote_swap(reserve_in=20, reserve_out=30, amount_in=5, fee_bps=0)
    assert q1.amount_out == 6
    assert (q1.new_reserve_in, q1.new_reserve_out) == (25, 24)
    assert q1.k_after == 600

    q2 = quote_swap(reserve_in=25, reserve_out=24, amount_in=5, fee_bps=0)
    assert q2.amount_out == 4
    assert (q2.new_reserve_in, q2.new_reserve_out) == (30, 20)
    assert q2.k_after == 600


def test_swap_fee_stays_in_pool() -> None:
    q = quote_swap(reserve_in=1000, reserve_out=1000, amount_in=1000, fee_bps=30)
    assert q.fee == 3
    assert q.net_in == 997
    assert q.amount_out == 499
    # The full gross input (fee included) is added to the in-reserve.
    assert q.new_reserve_in == 2000
    assert q.new_reserve_out == 501
    assert q.k_after > q.k_before


def test_swap_fee_truncates() -> None:
    # 5 * 100 / 10_000 = 0.05 -> 0
    q = quote_swap(reserve_in=20, reserve_out=30, amount_in=5, fee_bps=100)
    assert q.fee == 0
    assert q.amount_out == 6


def test_swap_zero_amount_in_fails() -> None:
    with pytest.raises(ZeroAmount):
        quote_swap(reserve_in=100, reserve_out=100, amount_in=0, fee_bps=0)


def test_swap_zero_amount_in_fails_even_on_empty_pool() -> None:
    with pytest.raises(ZeroAmount):
        quote_swap(reserve_in=0, reserve_out=0, amount_in=0, fee_bps=0)


def test_swap_against_empty_reserve_fails() -> None:
    with pytest.raises(InsufficientLiquidity):
        quote_swap(reserve_in=0, reserve_out=0, amount_in=10, fee_bps=0)


def test_swap_too_small_to_output_anything_fails() -> None:
    with pytest.raises(ZeroAmount):
        quote_swap(reserve_in=1_000_000, reserve_out=10, amount_in=1, fee_bps=0)


def test_swap_slippage_bound() -> None:
    q = quote_swap(reserve_in=20, reserve_out=30, amount_in=5, fee_bps=0, min_amount_out=6)
    assert q.amount_out == 6
    with pytest.raises(SlippageExceeded):
        quote_swap(reserve_in=20, reserve_out=30, amount_in=5, fee_bps=0, min_amount_out=7)


@pytest.mark.parametrize("fee_bps", [10_000, 10_001, -1])
def test_swap_rejects_invalid_fee(fee_bps: int) -> None:
    with pytest.raises(InvalidFee):
        quote_swap(reserve_in=100, reserve_out=100, amount_in=10, fee_bps=fee_bps)


def test_swap_max_valid_fee() -> None:
    q = quote_swap(reserve_in=1_000_000, reserve_out=1_000_000, amount_in=100_000, fee_bps=9_999)
    assert q.fee == 99_990
    assert q.net_in == 10


def test_swap_overflowing_reserve_fails() -> None:
    with pytest.raises(ArithmeticOverflow):
        quote_swap(reserve_in=U64_MAX - 5, reserve_out=U64_MAX, amount_in=10, fee_bps=0)


def test_swap_amount_above_u64_fails() -> None:
    with pytest.raises(ArithmeticOverflow):
        quote_swap(reserve_in=100, reserve_out=100, amount_in=U64_MAX + 1, fee_bps=0)


def test_swap_rejects_non_int_inputs() -> None:
    with pytest.raises(TypeError):
        quote_swap(reserve_in=100, reserve_out=100, amount_in=True, fee_bps=0)
    with pytest.raises(TypeError):
        quote_swap(reserve_in=100, reserve_out=100, amount_in=1.5, fee_bps=0)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# deposit
# ---------------------------------------------------------------------------


def test_deposit_genesis_takes_max_amounts_and_mints_requested() -> None:
    q = quote_deposit(
        reserve_x=0,
        reserve_y=0,
        lp_supply=0,
        lp_amount=1_000_000,
        max_x=1_000_000_000,
        max_y=1_000_000_000,
    )
    assert q.genesis is True
    assert (q.amount_x, q.amount_y, q.lp_minted) == (1_000_000_000, 1_000_000_000, 1_000_000)


def test_deposit_proportional_exact() -> None:
    q = quote_deposit(reserve_x=1000, reserve_y=2000, lp_supply=100, lp_amount=10, max_x=10**6, max_y=10**6)
    assert q.genesis is False
    assert (q.amount_x, q.amount_y, q.lp_minted) == (100, 200, 10)


def test_deposit_rounds_required_amounts_up() -> None:
    q = quote_deposit(reserve_x=1001, reserve_y=2003, lp_supply=100, lp_amount=10, max_x=10**6, max_y=10**6)
    assert (q.amount_x, q.amount_y) == (101, 201)


def test_deposit_equal_reserves_full_supply() -> None:
    q = quote_deposit(reserve_x=30, reserve_y=30, lp_supply=30, lp_amount=30, max_x=10_000_000, max_y=10_000_000)
    assert (q.amount_x, q.amount_y, q.lp_minted) == (30, 30, 30)


def test_deposit_slippage_when_caps_too_low() -> None:
    with pytest.raises(SlippageExceeded):
        quote_deposit(reserve_x=1001, reserve_y=2003, lp_supply=100, lp_amount=10, max_x=100, max_y=10**6)
    with pytest.raises(SlippageExceeded):
        quote_deposit(reserve_x=1001, reserve_y=2003, lp_supply=100, lp_amount=10, max_x=10**6, max_y=200)


@pytest.mark.parametrize(
    "lp_amount,max_x,max_y",
    [(0, 10, 10), (10, 0, 10), (10, 10, 0)],
)
def test_deposit_zero_amounts_fail(lp_amount: int, max_x: int, max_y: int) -> None:
    with pytest.raises(ZeroAmount):
        quote_deposit(reserve_x=0, reserve_y=0, lp_supply=0, lp_amount=lp_amount, max_x=max_x, max_y=max_y)


def test_deposit_overflowing_reserve_fails() -> None:
    with pytest.raises(ArithmeticOverflow):
        quote_deposit(
            reserve_x=U64_MAX - 10,
            reserve_y=10,
            lp_supply=10,
            lp_amount=10,
            max_x=U64_MAX,
            max_y=U64_MAX,
        )


# ---------------------------------------------------------------------------
# withdraw
# ---------------------------------------------------------------------------


def test_withdraw_proportional() -> None:
    q = quote_withdraw(reserve_x=1000, reserve_y=2000, lp_supply=100, lp_amount=10, holder_balance=50)
    assert (q.amount_x, q.amount_y, q.lp_burned) == (100, 200, 10)


def test_withdraw_rounds_down() -> None:
    q = quote_withdraw(reserve_x=1001, reserve_y=2003, lp_supply=100, lp_amount=10, holder_balance=10)
    assert (q.amount_x, q.amount_y) == (100, 200)


def test_withdraw_entire_supply_returns_all_reserves() -> None:
    q = quote_withdraw(reserve_x=1001, reserve_y=2003, lp_supply=100, lp_amount=100, holder_balance=100)
    assert (q.amount_x, q.amount_y) == (1001, 2003)


def test_withdraw_insufficient_shares() -> None:
    with pytest.raises(InsufficientShares):
        quote_withdraw(reserve_x=1000, reserve_y=2000, lp_supply=100, lp_amount=10, holder_balance=9)


def test_withdraw_more_than_supply() -> None:
    with pytest.raises(InsufficientShares):
        quote_withdraw(reserve_x=1000, reserve_y=2000, lp_supply=100, lp_amount=101, holder_balance=101)


def test_withdraw_slippage_floor() -> None:
    with pytest.raises(SlippageExceeded):
        quote_withdraw(
            reserve_x=1000, reserve_y=2000, lp_supply=100, lp_amount=10, holder_balance=10, min_x=101
        )
    with pytest.raises(SlippageExceeded):
        quote_withdraw(
            reserve_x=1000, reserve_y=2000, lp_supply=100, lp_amount=10, holder_balance=10, min_y=201
        )


def test_withdraw_zero_fails() -> None:
    with pytest.raises(ZeroAmount):
        quote_withdraw(reserve_x=1000, reserve_y=2000, lp_supply=100, lp_amount=0, holder_balance=10)


# ---------------------------------------------------------------------------
# read-only helpers
# ---------------------------------------------------------------------------


def test_invariant_is_product() -> None:
    assert invariant(20, 30) == 600
    assert invariant(U64_MAX, U64_MAX) == U64_MAX * U64_MAX


def test_spot_price_scaled() -> None:
    p = spot_price(2000, 1000)
    assert p.precision == 1_000_000
    assert p.amount == 2_000_000
    assert spot_price(1, 3, precision=1000).amount == 333


def test_spot_price_empty_reserve() -> None:
    with pytest.raises(InsufficientLiquidity):
        spot_price(0, 1000)
