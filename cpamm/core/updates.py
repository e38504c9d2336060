"""State transition functions for the pool engine.

One pure function per action. Each runs the curve math against the PRE-state
and returns the complete POST-state together with its ``Effect``. Nothing is
mutated; a raised ``AmmError`` leaves the caller's state untouched.
"""

from __future__ import annotations

from typing import Tuple

from ..state.pool import PoolState
from ..state.vaults import Direction, VaultPair
from .curve import invariant, quote_deposit, quote_swap, quote_withdraw
from .types import ActionParams, Effect, Event

Transition = Tuple[PoolState, Effect]


def _effect(event: Event, state: PoolState, **fields: int) -> Effect:
    return Effect(
        event=event,
        reserve_x_after=state.vaults.reserve_x,
        reserve_y_after=state.vaults.reserve_y,
        lp_supply_after=state.lp.supply,
        **fields,
    )


def apply_lock(state: PoolState, params: ActionParams) -> Transition:
    new_state = state.evolve(config=state.config.with_locked(True))
    return new_state, _effect(Event.POOL_LOCKED, new_state)


def apply_unlock(state: PoolState, params: ActionParams) -> Transition:
    new_state = state.evolve(config=state.config.with_locked(False))
    return new_state, _effect(Event.POOL_UNLOCKED, new_state)


def apply_deposit(state: PoolState, params: ActionParams) -> Transition:
    q = quote_deposit(
        reserve_x=state.vaults.reserve_x,
        reserve_y=state.vaults.reserve_y,
        lp_supply=state.lp.supply,
        lp_amount=params.lp_amount,
        max_x=params.max_x,
        max_y=params.max_y,
    )
    new_state = state.evolve(
        vaults=VaultPair(
            reserve_x=state.vaults.reserve_x + q.amount_x,
            reserve_y=state.vaults.reserve_y + q.amount_y,
        ),
        lp=state.lp.mint(params.caller, q.lp_minted),
    )
    return new_state, _effect(
        Event.LIQUIDITY_DEPOSITED,
        new_state,
        amount_x_in=q.amount_x,
        amount_y_in=q.amount_y,
        lp_minted=q.lp_minted,
    )


def apply_swap(state: PoolState, params: ActionParams) -> Transition:
    reserve_in, reserve_out = state.vaults.oriented(params.direction)
    q = quote_swap(
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        amount_in=params.amount_in,
        fee_bps=state.config.fee_bps,
        min_amount_out=params.min_amount_out,
    )
    new_state = state.evolve(
        vaults=state.vaults.from_oriented(params.direction, q.new_reserve_in, q.new_reserve_out),
    )
    if params.direction is Direction.X_TO_Y:
        flows = dict(amount_x_in=q.amount_in, amount_y_out=q.amount_out)
    else:
        flows = dict(amount_y_in=q.amount_in, amount_x_out=q.amount_out)
    return new_state, _effect(
        Event.SWAPPED,
        new_state,
        fee=q.fee,
        k_before=q.k_before,
        k_after=q.k_after,
        **flows,
    )


def apply_withdraw(state: PoolState, params: ActionParams) -> Transition:
    q = quote_withdraw(
        reserve_x=state.vaults.reserve_x,
        reserve_y=state.vaults.reserve_y,
        lp_supply=state.lp.supply,
        lp_amount=params.lp_amount,
        holder_balance=state.lp.balance_of(params.caller),
        min_x=params.min_x,
        min_y=params.min_y,
    )
    new_state = state.evolve(
        vaults=VaultPair(
            reserve_x=state.vaults.reserve_x - q.amount_x,
            reserve_y=state.vaults.reserve_y - q.amount_y,
        ),
        lp=state.lp.burn(params.caller, q.lp_burned),
    )
    return new_state, _effect(
        Event.LIQUIDITY_WITHDRAWN,
        new_state,
        amount_x_out=q.amount_x,
        amount_y_out=q.amount_y,
        lp_burned=q.lp_burned,
        k_before=invariant(state.vaults.reserve_x, state.vaults.reserve_y),
        k_after=invariant(new_state.vaults.reserve_x, new_state.vaults.reserve_y),
    )
