"""Data types for the pool engine.

All types are frozen dataclasses (immutable).

Units/conventions:
- amounts are integer token units (u64),
- ``*_bps`` rates are basis points (1/10_000),
- ``deadline`` and ``now`` are unix timestamps in seconds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional

from ..state.pool import PoolState
from ..state.vaults import Direction
from .errors import AmmError


@unique
class Action(Enum):
    """One member per mutating pool operation."""
    LOCK = "lock"
    UNLOCK = "unlock"
    DEPOSIT = "deposit"
    SWAP = "swap"
    WITHDRAW = "withdraw"


@unique
class Event(Enum):
    POOL_LOCKED = "PoolLocked"
    POOL_UNLOCKED = "PoolUnlocked"
    LIQUIDITY_DEPOSITED = "LiquidityDeposited"
    SWAPPED = "Swapped"
    LIQUIDITY_WITHDRAWN = "LiquidityWithdrawn"


@dataclass(frozen=True)
class ActionParams:
    """Parameters for an action. Unused fields default to 0/None."""

    action: Action
    caller: Optional[str] = None        # lock/unlock: signer; deposit/withdraw: LP owner
    lp_amount: int = 0                  # deposit (requested) / withdraw (burned)
    max_x: int = 0                      # deposit
    max_y: int = 0                      # deposit
    min_x: int = 0                      # withdraw
    min_y: int = 0                      # withdraw
    amount_in: int = 0                  # swap
    min_amount_out: int = 0             # swap
    direction: Direction = Direction.X_TO_Y  # swap
    deadline: Optional[int] = None      # deposit / swap / withdraw


@dataclass(frozen=True)
class Effect:
    """Observables emitted after a successful step."""

    event: Event
    amount_x_in: int = 0
    amount_y_in: int = 0
    amount_x_out: int = 0
    amount_y_out: int = 0
    fee: int = 0
    lp_minted: int = 0
    lp_burned: int = 0
    reserve_x_after: int = 0
    reserve_y_after: int = 0
    lp_supply_after: int = 0
    k_before: int = 0
    k_after: int = 0


@dataclass(frozen=True)
class StepResult:
    """Result of a single engine step."""

    accepted: bool
    state: Optional[PoolState] = None
    effect: Optional[Effect] = None
    error: Optional[AmmError] = None

    @property
    def rejection(self) -> Optional[str]:
        return None if self.error is None else self.error.code
