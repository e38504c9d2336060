"""
Pool aggregate: the three facets of one pool under a single value.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .config import PoolConfig
from .lp import LPAccountant
from .vaults import VaultPair


@dataclass(frozen=True)
class PoolState:
    """
    Complete state of one pool.

    Attributes:
        config: Identity, authority, fee and lock flag
        vaults: Token reserves
        lp: LP supply and holder balances

    A pool is only ever replaced as a whole, so readers never observe a
    vault update without the matching LP update.
    """

    config: PoolConfig
    vaults: VaultPair = field(default_factory=VaultPair)
    lp: LPAccountant = field(default_factory=LPAccountant)

    @property
    def seed(self) -> int:
        return self.config.seed

    @property
    def reserve_x(self) -> int:
        return self.vaults.reserve_x

    @property
    def reserve_y(self) -> int:
        return self.vaults.reserve_y

    @property
    def lp_supply(self) -> int:
        return self.lp.supply

    def evolve(self, **changes) -> "PoolState":
        return replace(self, **changes)

    def __repr__(self) -> str:
        return (
            f"PoolState(seed={self.config.seed}, "
            f"reserves=({self.vaults.reserve_x}, {self.vaults.reserve_y}), "
            f"lp_supply={self.lp.supply}, locked={self.config.locked})"
        )
