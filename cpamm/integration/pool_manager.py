"""
Pool registry: the imperative shell around the functional core.

- Keeps one ``PoolState`` per seed.
- Serializes operations per pool with an exclusive lock held for the whole
  validate -> compute -> apply sequence; distinct pools run concurrently.
- Publishes each accepted post-state with a single reference swap, so readers
  see either the old pool or the new pool, never a mix.
- Raises the typed ``AmmError`` on rejection, leaving the pool untouched.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from ..core.curve import (
    DepositQuote,
    SpotPrice,
    SwapQuote,
    WithdrawQuote,
    quote_deposit,
    quote_swap,
    quote_withdraw,
    spot_price,
)
from ..core.engine import initialize_pool, step
from ..core.errors import InvalidAuthority, PoolExists, PoolNotFound
from ..core.types import Action, ActionParams, Effect, StepResult
from ..state.pool import PoolState
from ..state.vaults import Direction
from .settings import AmmSettings, load_pool_file
from .snapshot import PoolSnapshot, pool_from_snapshot, snapshot_from_pool

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def _unix_now() -> int:
    return int(time.time())


@dataclass
class _PoolSlot:
    state: PoolState
    lock: threading.Lock = field(default_factory=threading.Lock)


class PoolManager:
    """
    Registry of constant-product pools keyed by seed.

    Args:
        settings: Runtime settings (defaults to ``AmmSettings()``)
        clock: Returns the current unix time; injected for deadline checks
    """

    def __init__(self, settings: Optional[AmmSettings] = None, *, clock: Optional[Clock] = None) -> None:
        self._settings = settings or AmmSettings()
        self._clock = clock or _unix_now
        self._pools: Dict[int, _PoolSlot] = {}
        self._registry_lock = threading.Lock()

    @classmethod
    def from_pool_file(cls, path: Path | str, *, clock: Optional[Clock] = None) -> "PoolManager":
        """Build a manager and initialize every pool listed in a YAML pool file."""
        settings, defs = load_pool_file(path)
        manager = cls(settings, clock=clock)
        for d in defs:
            manager.initialize(d.seed, d.fee_bps, d.authority, mint_x=d.mint_x, mint_y=d.mint_y)
        return manager

    @property
    def settings(self) -> AmmSettings:
        return self._settings

    # -- registry ------------------------------------------------------------

    def _slot(self, seed: int) -> _PoolSlot:
        with self._registry_lock:
            slot = self._pools.get(seed)
        if slot is None:
            raise PoolNotFound(f"no pool with seed {seed}")
        return slot

    def _insert(self, pool: PoolState) -> None:
        with self._registry_lock:
            if pool.seed in self._pools:
                raise PoolExists(f"pool with seed {pool.seed} already exists")
            if len(self._pools) >= self._settings.max_pools:
                raise ValueError(f"pool registry full ({self._settings.max_pools})")
            self._pools[pool.seed] = _PoolSlot(state=pool)

    def seeds(self) -> List[int]:
        with self._registry_lock:
            return sorted(self._pools)

    def get_pool(self, seed: int) -> PoolState:
        """Current state of a pool (an immutable value)."""
        slot = self._slot(seed)
        with slot.lock:
            return slot.state

    def __contains__(self, seed: object) -> bool:
        with self._registry_lock:
            return seed in self._pools

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._pools)

    # -- operations ----------------------------------------------------------

    def initialize(
        self,
        seed: int,
        fee_bps: int,
        authority: Optional[str] = None,
        *,
        mint_x: Optional[str] = None,
        mint_y: Optional[str] = None,
    ) -> PoolState:
        if authority is None and not self._settings.allow_authorityless_pools:
            raise InvalidAuthority("pools without an authority are disabled")
        pool = initialize_pool(seed, fee_bps, authority, mint_x=mint_x, mint_y=mint_y)
        self._insert(pool)
        logger.info(
            "pool initialized seed=%d fee_bps=%d authority=%s pool_id=%s",
            seed, fee_bps, authority, pool.config.pool_id,
        )
        return pool

    def lock(self, seed: int, caller: str) -> PoolState:
        state = self._execute(seed, ActionParams(action=Action.LOCK, caller=caller)).state
        logger.info("pool %d locked by %s", seed, caller)
        return state

    def unlock(self, seed: int, caller: str) -> PoolState:
        state = self._execute(seed, ActionParams(action=Action.UNLOCK, caller=caller)).state
        logger.info("pool %d unlocked by %s", seed, caller)
        return state

    def deposit(
        self,
        seed: int,
        owner: str,
        lp_amount: int,
        max_x: int,
        max_y: int,
        *,
        deadline: int,
    ) -> Effect:
        params = ActionParams(
            action=Action.DEPOSIT,
            caller=owner,
            lp_amount=lp_amount,
            max_x=max_x,
            max_y=max_y,
            deadline=deadline,
        )
        return self._execute(seed, params).effect

    def swap(
        self,
        seed: int,
        amount_in: int,
        min_amount_out: int,
        direction: Direction,
        *,
        deadline: int,
    ) -> Effect:
        params = ActionParams(
            action=Action.SWAP,
            amount_in=amount_in,
            min_amount_out=min_amount_out,
            direction=direction,
            deadline=deadline,
        )
        return self._execute(seed, params).effect

    def withdraw(
        self,
        seed: int,
        owner: str,
        lp_amount: int,
        *,
        deadline: int,
        min_x: int = 0,
        min_y: int = 0,
    ) -> Effect:
        params = ActionParams(
            action=Action.WITHDRAW,
            caller=owner,
            lp_amount=lp_amount,
            min_x=min_x,
            min_y=min_y,
            deadline=deadline,
        )
        return self._execute(seed, params).effect

    def _execute(self, seed: int, params: ActionParams) -> StepResult:
        slot = self._slot(seed)
        with slot.lock:
            result = step(slot.state, params, now=self._clock())
            if result.accepted:
                slot.state = result.state
        if not result.accepted:
            logger.info("pool %d: %s rejected (%s): %s", seed, params.action.value, result.rejection, result.error)
            raise result.error
        effect = result.effect
        logger.debug(
            "pool %d: %s reserves=(%d, %d) lp_supply=%d",
            seed, effect.event.value, effect.reserve_x_after, effect.reserve_y_after, effect.lp_supply_after,
        )
        return result

    # -- read-only quotes ----------------------------------------------------

    def quote_swap(self, seed: int, amount_in: int, direction: Direction, min_amount_out: int = 0) -> SwapQuote:
        pool = self.get_pool(seed)
        reserve_in, reserve_out = pool.vaults.oriented(direction)
        return quote_swap(
            reserve_in=reserve_in,
            reserve_out=reserve_out,
            amount_in=amount_in,
            fee_bps=pool.config.fee_bps,
            min_amount_out=min_amount_out,
        )

    def quote_deposit(self, seed: int, lp_amount: int, max_x: int, max_y: int) -> DepositQuote:
        pool = self.get_pool(seed)
        return quote_deposit(
            reserve_x=pool.vaults.reserve_x,
            reserve_y=pool.vaults.reserve_y,
            lp_supply=pool.lp.supply,
            lp_amount=lp_amount,
            max_x=max_x,
            max_y=max_y,
        )

    def quote_withdraw(self, seed: int, owner: str, lp_amount: int) -> WithdrawQuote:
        pool = self.get_pool(seed)
        return quote_withdraw(
            reserve_x=pool.vaults.reserve_x,
            reserve_y=pool.vaults.reserve_y,
            lp_supply=pool.lp.supply,
            lp_amount=lp_amount,
            holder_balance=pool.lp.balance_of(owner),
        )

    def spot_price(self, seed: int, *, of_x: bool = True) -> SpotPrice:
        """Price of one X in Y units (or one Y in X units when ``of_x`` is False)."""
        pool = self.get_pool(seed)
        rx, ry = pool.vaults.reserve_x, pool.vaults.reserve_y
        base, quote = (ry, rx) if of_x else (rx, ry)
        return spot_price(base, quote, self._settings.price_precision)

    # -- persistence ---------------------------------------------------------

    def export_snapshots(self) -> List[PoolSnapshot]:
        return [snapshot_from_pool(self.get_pool(seed)) for seed in self.seeds()]

    def restore(self, snapshots: Iterable[Mapping]) -> None:
        """Insert pools decoded from snapshot data; all-or-nothing."""
        pools = [pool_from_snapshot(s) for s in snapshots]
        if not self._settings.allow_authorityless_pools:
            orphaned = sorted(p.seed for p in pools if p.config.authority is None)
            if orphaned:
                raise InvalidAuthority(f"pools without an authority are disabled: {orphaned}")
        seeds = [p.seed for p in pools]
        if len(seeds) != len(set(seeds)):
            raise ValueError("duplicate seeds in snapshots")
        with self._registry_lock:
            clash = [s for s in seeds if s in self._pools]
            if clash:
                raise PoolExists(f"pools already exist: {sorted(clash)}")
            if len(self._pools) + len(pools) > self._settings.max_pools:
                raise ValueError(f"pool registry full ({self._settings.max_pools})")
            for p in pools:
                self._pools[p.seed] = _PoolSlot(state=p)
        logger.info("restored %d pools from snapshots", len(pools))
