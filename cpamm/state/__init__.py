"""
Pool state records: config, vaults, LP accounting.
"""

from .config import PoolConfig, compute_pool_id
from .lp import LPAccountant
from .pool import PoolState
from .vaults import Direction, VaultPair

__all__ = [
    "PoolConfig",
    "compute_pool_id",
    "LPAccountant",
    "PoolState",
    "Direction",
    "VaultPair",
]
