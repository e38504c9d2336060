"""Constant-product pool engine: curve math, guards and the step function.

Deterministic, integer-only transitions over immutable ``PoolState`` values,
with fail-closed guards and post-state invariant checks.

Public API:
- `initialize_pool(seed, fee_bps, authority) -> PoolState`
- `step(state, params, now=...) -> StepResult`
- `step_or_raise(state, params, now=...) -> StepResult` (raises on rejection)
"""

from .curve import (
    DepositQuote,
    SpotPrice,
    SwapQuote,
    WithdrawQuote,
    invariant,
    quote_deposit,
    quote_swap,
    quote_withdraw,
    spot_price,
)
from .engine import initialize_pool, step, step_or_raise
from .errors import (
    AmmError,
    ArithmeticOverflow,
    Expired,
    InsufficientLiquidity,
    InsufficientShares,
    InvalidAuthority,
    InvalidFee,
    InvariantViolation,
    NoAuthoritySet,
    PoolExists,
    PoolLocked,
    PoolNotFound,
    SlippageExceeded,
    ZeroAmount,
)
from .types import Action, ActionParams, Effect, Event, StepResult

__all__ = [
    "initialize_pool",
    "step",
    "step_or_raise",
    "invariant",
    "quote_deposit",
    "quote_swap",
    "quote_withdraw",
    "spot_price",
    "DepositQuote",
    "SpotPrice",
    "SwapQuote",
    "WithdrawQuote",
    "Action",
    "ActionParams",
    "Effect",
    "Event",
    "StepResult",
    "AmmError",
    "ArithmeticOverflow",
    "Expired",
    "InsufficientLiquidity",
    "InsufficientShares",
    "InvalidAuthority",
    "InvalidFee",
    "InvariantViolation",
    "NoAuthoritySet",
    "PoolExists",
    "PoolLocked",
    "PoolNotFound",
    "SlippageExceeded",
    "ZeroAmount",
]
