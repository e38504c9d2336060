"""Dispatch-table engine for constant-product pools.

``step(state, params, now=...)`` is the single entry point for mutating
operations. It:

1. Validates parameter shapes (types, signs, required caller).
2. Runs the action's guard against the PRE-state.
3. Runs the action's update (u64 bounds, curve math, new state).
4. Checks all invariants on the post-state.
5. Returns a ``StepResult`` (accepted, or rejected with a typed error).

``initialize_pool()`` creates the genesis state and is not a step: there is no
pre-state to guard.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..state.config import PoolConfig
from ..state.pool import PoolState
from ..state.vaults import Direction
from .curve import validate_fee_bps
from .errors import AmmError, InvariantViolation
from .guards import guard_deposit, guard_lock, guard_swap, guard_unlock, guard_withdraw
from .invariants import check_all
from .math import require_int, require_non_negative
from .types import Action, ActionParams, StepResult
from .updates import Transition, apply_deposit, apply_lock, apply_swap, apply_unlock, apply_withdraw

GuardFn = Callable[[PoolConfig, ActionParams, int], Optional[AmmError]]
UpdateFn = Callable[[PoolState, ActionParams], Transition]

_DISPATCH: dict[Action, tuple[GuardFn, UpdateFn]] = {
    Action.LOCK: (guard_lock, apply_lock),
    Action.UNLOCK: (guard_unlock, apply_unlock),
    Action.DEPOSIT: (guard_deposit, apply_deposit),
    Action.SWAP: (guard_swap, apply_swap),
    Action.WITHDRAW: (guard_withdraw, apply_withdraw),
}

# Per-action amount fields (non-negative ints; the curve enforces u64).
_AMOUNT_FIELDS: dict[Action, tuple[str, ...]] = {
    Action.LOCK: (),
    Action.UNLOCK: (),
    Action.DEPOSIT: ("lp_amount", "max_x", "max_y"),
    Action.SWAP: ("amount_in", "min_amount_out"),
    Action.WITHDRAW: ("lp_amount", "min_x", "min_y"),
}

_OWNER_ACTIONS = frozenset({Action.DEPOSIT, Action.WITHDRAW})


def initialize_pool(
    seed: int,
    fee_bps: int,
    authority: Optional[str] = None,
    *,
    mint_x: Optional[str] = None,
    mint_y: Optional[str] = None,
) -> PoolState:
    """
    Create a new, empty, unlocked pool.

    Raises:
        InvalidFee: fee_bps outside [0, 10000)
    """
    require_int("seed", seed)
    validate_fee_bps(fee_bps)
    config = PoolConfig(
        seed=seed,
        fee_bps=fee_bps,
        authority=authority,
        mint_x=mint_x,
        mint_y=mint_y,
        locked=False,
    )
    return PoolState(config=config)


def _validate_params(params: ActionParams) -> None:
    """Reject malformed inputs (TypeError/ValueError) before any pool rule runs."""
    if not isinstance(params.action, Action):
        raise TypeError(f"unknown action: {params.action!r}")
    for field in _AMOUNT_FIELDS[params.action]:
        require_non_negative(field, getattr(params, field))
    if params.action in _OWNER_ACTIONS:
        if not isinstance(params.caller, str) or not params.caller:
            raise ValueError(f"{params.action.value} requires a caller identity")
    if params.action is Action.SWAP and not isinstance(params.direction, Direction):
        raise TypeError("direction must be a Direction")
    if params.deadline is not None:
        require_int("deadline", params.deadline)


def step(state: PoolState, params: ActionParams, *, now: int) -> StepResult:
    """Execute one action against the given state.

    Returns ``StepResult`` with ``accepted=True`` and the post-state on
    success, or ``accepted=False`` with the typed ``error``.
    """
    require_int("now", now)
    _validate_params(params)

    guard_fn, update_fn = _DISPATCH[params.action]

    failure = guard_fn(state.config, params, now)
    if failure is not None:
        return StepResult(accepted=False, error=failure)

    try:
        new_state, effect = update_fn(state, params)
    except AmmError as exc:
        return StepResult(accepted=False, error=exc)

    violations = check_all(new_state)
    if violations:
        return StepResult(accepted=False, error=InvariantViolation(violations))

    return StepResult(accepted=True, state=new_state, effect=effect)


def step_or_raise(state: PoolState, params: ActionParams, *, now: int) -> StepResult:
    """Like ``step()`` but raises the typed ``AmmError`` on rejection."""
    result = step(state, params, now=now)
    if not result.accepted:
        raise result.error
    return result
