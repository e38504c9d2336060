"""Guard functions for the pool engine.

Each guard is a pure function of the PRE-state and the action parameters and
returns ``None`` when the action may proceed, or the typed failure otherwise.
Guards never raise for rule violations and never mutate anything.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..state.config import PoolConfig
from .errors import AmmError, Expired, InvalidAuthority, NoAuthoritySet, PoolLocked, ZeroAmount
from .types import ActionParams


def check_authority(config: PoolConfig, caller: Optional[str]) -> Optional[AmmError]:
    """Only the configured authority may change a pool's config."""
    if config.authority is None:
        return NoAuthoritySet(f"pool {config.seed} has no update authority")
    if caller != config.authority:
        return InvalidAuthority(f"caller {caller!r} is not the authority of pool {config.seed}")
    return None


def check_lifecycle(
    config: PoolConfig,
    *,
    deadline: Optional[int],
    now: int,
    amounts: Iterable[int],
) -> Optional[AmmError]:
    """Lock, then deadline, then zero amounts; first failure wins."""
    if config.locked:
        return PoolLocked(f"pool {config.seed} is locked")
    if deadline is not None and deadline <= now:
        return Expired(f"deadline {deadline} <= now {now}")
    if any(a == 0 for a in amounts):
        return ZeroAmount("requested amounts must be non-zero")
    return None


def guard_lock(config: PoolConfig, params: ActionParams, now: int) -> Optional[AmmError]:
    return check_authority(config, params.caller)


def guard_unlock(config: PoolConfig, params: ActionParams, now: int) -> Optional[AmmError]:
    return check_authority(config, params.caller)


def guard_deposit(config: PoolConfig, params: ActionParams, now: int) -> Optional[AmmError]:
    return check_lifecycle(
        config,
        deadline=params.deadline,
        now=now,
        amounts=(params.lp_amount, params.max_x, params.max_y),
    )


def guard_swap(config: PoolConfig, params: ActionParams, now: int) -> Optional[AmmError]:
    return check_lifecycle(config, deadline=params.deadline, now=now, amounts=(params.amount_in,))


def guard_withdraw(config: PoolConfig, params: ActionParams, now: int) -> Optional[AmmError]:
    return check_lifecycle(config, deadline=params.deadline, now=now, amounts=(params.lp_amount,))
