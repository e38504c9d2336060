"""
Imperative shell: pool registry, settings, snapshots.
"""

from .pool_manager import PoolManager
from .settings import AmmSettings, PoolDefinition, load_pool_file
from .snapshot import PoolSnapshot, pool_from_snapshot, snapshot_from_pool

__all__ = [
    "PoolManager",
    "AmmSettings",
    "PoolDefinition",
    "load_pool_file",
    "PoolSnapshot",
    "pool_from_snapshot",
    "snapshot_from_pool",
]
