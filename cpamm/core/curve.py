"""
Constant-product curve math.

Algorithm Design:
- Type: Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per operation
- Invariant: after each swap, x' * y' >= x * y

Rounding always favors the pool:
- swap output rounds down,
- non-genesis deposit amounts round up,
- withdrawal payouts round down.

Functions here are pure: they take reserves and amounts, return a result
dataclass, and raise a typed ``AmmError`` on failure. Guards (lock, deadline,
zero amounts) run before these are called; see ``guards.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import (
    InsufficientLiquidity,
    InsufficientShares,
    InvalidFee,
    InvariantViolation,
    SlippageExceeded,
    ZeroAmount,
)
from .math import (
    BPS_SCALE,
    U128_MAX,
    checked_add,
    checked_mul,
    checked_sub,
    mul_div_ceil,
    mul_div_floor,
    require_u64,
    to_u64,
)

DEFAULT_PRICE_PRECISION = 1_000_000


@dataclass(frozen=True)
class DepositQuote:
    amount_x: int
    amount_y: int
    lp_minted: int
    genesis: bool


@dataclass(frozen=True)
class SwapQuote:
    amount_in: int
    fee: int
    net_in: int
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


@dataclass(frozen=True)
class WithdrawQuote:
    amount_x: int
    amount_y: int
    lp_burned: int


@dataclass(frozen=True)
class SpotPrice:
    amount: int  # price scaled by `precision`
    precision: int


def validate_fee_bps(fee_bps: int) -> int:
    if not isinstance(fee_bps, int) or isinstance(fee_bps, bool):
        raise TypeError("fee_bps must be an int")
    if not (0 <= fee_bps < BPS_SCALE):
        raise InvalidFee(f"fee_bps must be in [0, {BPS_SCALE}): {fee_bps}")
    return fee_bps


def invariant(reserve_x: int, reserve_y: int) -> int:
    """k = reserve_x * reserve_y, bounded by u128."""
    return checked_mul(reserve_x, reserve_y, bound=U128_MAX)


def compute_fee(amount_in: int, fee_bps: int) -> int:
    """fee = floor(amount_in * fee_bps / 10_000)."""
    validate_fee_bps(fee_bps)
    return mul_div_floor(amount_in, fee_bps, BPS_SCALE)


def quote_deposit(
    *,
    reserve_x: int,
    reserve_y: int,
    lp_supply: int,
    lp_amount: int,
    max_x: int,
    max_y: int,
) -> DepositQuote:
    """
    Compute the token amounts a deposit must pay to mint ``lp_amount`` shares.

    Genesis (lp_supply == 0):
        the depositor supplies exactly (max_x, max_y), which fixes the initial
        price, and receives exactly lp_amount.

    Otherwise:
        amount_x = ceil(reserve_x * lp_amount / lp_supply)
        amount_y = ceil(reserve_y * lp_amount / lp_supply)

    Raises:
        ZeroAmount: lp_amount, max_x or max_y is zero
        SlippageExceeded: the required amounts exceed (max_x, max_y)
        ArithmeticOverflow: post-deposit reserves or supply leave u64
    """
    for name, v in (
        ("reserve_x", reserve_x),
        ("reserve_y", reserve_y),
        ("lp_supply", lp_supply),
        ("lp_amount", lp_amount),
        ("max_x", max_x),
        ("max_y", max_y),
    ):
        require_u64(name, v)
    if lp_amount == 0 or max_x == 0 or max_y == 0:
        raise ZeroAmount("lp_amount, max_x and max_y must be positive")

    if lp_supply == 0:
        amount_x, amount_y, genesis = max_x, max_y, True
    else:
        if reserve_x == 0 or reserve_y == 0:
            raise InsufficientLiquidity("pool has LP supply but an empty reserve")
        amount_x = mul_div_ceil(reserve_x, lp_amount, lp_supply)
        amount_y = mul_div_ceil(reserve_y, lp_amount, lp_supply)
        genesis = False
        if amount_x > max_x or amount_y > max_y:
            raise SlippageExceeded(
                f"deposit requires ({amount_x}, {amount_y}) > max ({max_x}, {max_y})"
            )

    # Post-state must stay representable.
    checked_add(reserve_x, amount_x)
    checked_add(reserve_y, amount_y)
    checked_add(lp_supply, lp_amount)

    return DepositQuote(amount_x=amount_x, amount_y=amount_y, lp_minted=lp_amount, genesis=genesis)


def quote_swap(
    *,
    reserve_in: int,
    reserve_out: int,
    amount_in: int,
    fee_bps: int,
    min_amount_out: int = 0,
) -> SwapQuote:
    """
    Exact-in swap quote + post-state.

        fee = floor(amount_in * fee_bps / 10_000)
        net_in = amount_in - fee
        amount_out = floor(reserve_out * net_in / (reserve_in + net_in))

    which equals ``reserve_out - ceil(k / (reserve_in + net_in))``: the new
    out-reserve is rounded up, so k never decreases. The whole amount_in
    (fee included) stays in the pool.

    Raises:
        ZeroAmount: amount_in is zero, or the trade is too small to output anything
        InsufficientLiquidity: empty reserve, or output would drain reserve_out
        SlippageExceeded: amount_out < min_amount_out
    """
    for name, v in (
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
        ("amount_in", amount_in),
        ("min_amount_out", min_amount_out),
    ):
        require_u64(name, v)
    validate_fee_bps(fee_bps)

    if amount_in == 0:
        raise ZeroAmount("amount_in must be positive")
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientLiquidity("cannot swap against an empty reserve")

    k_before = invariant(reserve_in, reserve_out)

    fee = compute_fee(amount_in, fee_bps)
    net_in = checked_sub(amount_in, fee)
    if net_in == 0:
        raise ZeroAmount("net_in is zero after fees")

    denominator = checked_add(reserve_in, net_in, bound=U128_MAX)
    amount_out = to_u64("amount_out", mul_div_floor(reserve_out, net_in, denominator))

    if amount_out >= reserve_out:
        raise InsufficientLiquidity(
            f"amount_out ({amount_out}) would drain reserve_out ({reserve_out})"
        )
    if amount_out == 0:
        raise ZeroAmount("amount_out is zero (trade too small)")
    if amount_out < min_amount_out:
        raise SlippageExceeded(f"amount_out ({amount_out}) < min_amount_out ({min_amount_out})")

    new_reserve_in = checked_add(reserve_in, amount_in)
    new_reserve_out = checked_sub(reserve_out, amount_out)
    k_after = invariant(new_reserve_in, new_reserve_out)
    if k_after < k_before:
        raise InvariantViolation([f"k_non_decreasing:{k_after}<{k_before}"])

    return SwapQuote(
        amount_in=amount_in,
        fee=fee,
        net_in=net_in,
        amount_out=amount_out,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
        k_after=k_after,
    )


def quote_withdraw(
    *,
    reserve_x: int,
    reserve_y: int,
    lp_supply: int,
    lp_amount: int,
    holder_balance: int,
    min_x: int = 0,
    min_y: int = 0,
) -> WithdrawQuote:
    """
    Compute the payout for burning ``lp_amount`` shares.

        amount_x = floor(reserve_x * lp_amount / lp_supply)
        amount_y = floor(reserve_y * lp_amount / lp_supply)

    Raises:
        ZeroAmount: lp_amount is zero
        InsufficientShares: holder_balance < lp_amount (or lp_amount > lp_supply)
        SlippageExceeded: payout below (min_x, min_y)
    """
    for name, v in (
        ("reserve_x", reserve_x),
        ("reserve_y", reserve_y),
        ("lp_supply", lp_supply),
        ("lp_amount", lp_amount),
        ("holder_balance", holder_balance),
        ("min_x", min_x),
        ("min_y", min_y),
    ):
        require_u64(name, v)
    if lp_amount == 0:
        raise ZeroAmount("lp_amount must be positive")
    if holder_balance < lp_amount:
        raise InsufficientShares(f"LP balance {holder_balance} < {lp_amount}")
    if lp_amount > lp_supply:
        raise InsufficientShares(f"cannot burn more LP than supply: {lp_amount} > {lp_supply}")

    amount_x = mul_div_floor(reserve_x, lp_amount, lp_supply)
    amount_y = mul_div_floor(reserve_y, lp_amount, lp_supply)
    if amount_x < min_x or amount_y < min_y:
        raise SlippageExceeded(
            f"withdraw yields ({amount_x}, {amount_y}) < min ({min_x}, {min_y})"
        )

    return WithdrawQuote(amount_x=amount_x, amount_y=amount_y, lp_burned=lp_amount)


def spot_price(reserve_base: int, reserve_quote: int, precision: int = DEFAULT_PRICE_PRECISION) -> SpotPrice:
    """
    Price of one unit of the quote token in base-token units, scaled by ``precision``:
    ``floor(reserve_base * precision / reserve_quote)``.
    """
    require_u64("reserve_base", reserve_base)
    require_u64("reserve_quote", reserve_quote)
    require_u64("precision", precision)
    if precision == 0:
        raise ValueError("precision must be positive")
    if reserve_base == 0 or reserve_quote == 0:
        raise InsufficientLiquidity("spot price is undefined for an empty reserve")
    return SpotPrice(amount=mul_div_floor(reserve_base, precision, reserve_quote), precision=precision)
