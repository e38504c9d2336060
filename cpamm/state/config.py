"""
Pool configuration record.

One ``PoolConfig`` exists per pool, keyed by ``seed``. It is created at
genesis and afterwards only the ``locked`` flag may change.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, replace
from typing import Optional

# Type aliases
Identity = str  # opaque caller identity (pubkey, account name, ...)
MintId = str

SEED_MAX = (1 << 64) - 1


def compute_pool_id(seed: int, mint_x: Optional[MintId] = None, mint_y: Optional[MintId] = None) -> str:
    """
    Deterministically compute a display/pool identifier.

        pool_id = H("CpammPool" || seed_le_u64 || mint_x || mint_y)

    The seed alone keys the registry; the id only makes pools with the same
    seed but different mints distinguishable in logs and snapshots.
    """
    if not isinstance(seed, int) or isinstance(seed, bool) or not (0 <= seed <= SEED_MAX):
        raise ValueError(f"seed must be a u64: {seed!r}")
    data = (
        b"CpammPool"
        + int(seed).to_bytes(8, "little")
        + (mint_x or "").encode("utf-8")
        + b"\x00"
        + (mint_y or "").encode("utf-8")
    )
    return "0x" + hashlib.sha256(data).hexdigest()


@dataclass(frozen=True)
class PoolConfig:
    """
    Configuration of a single pool.

    Attributes:
        seed: Opaque 64-bit pool discriminator (immutable)
        fee_bps: Swap fee in basis points, 0 <= fee_bps < 10000
        authority: Identity allowed to lock/unlock, or None for an immutable pool
        mint_x: Optional identifier of token X
        mint_y: Optional identifier of token Y
        locked: When True, deposit/swap/withdraw are rejected
    """

    seed: int
    fee_bps: int
    authority: Optional[Identity] = None
    mint_x: Optional[MintId] = None
    mint_y: Optional[MintId] = None
    locked: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.seed, int) or isinstance(self.seed, bool):
            raise TypeError("seed must be an int")
        if not (0 <= self.seed <= SEED_MAX):
            raise ValueError(f"seed must be a u64: {self.seed}")
        if not isinstance(self.fee_bps, int) or isinstance(self.fee_bps, bool):
            raise TypeError("fee_bps must be an int")
        if self.authority is not None and (not isinstance(self.authority, str) or not self.authority):
            raise ValueError("authority must be a non-empty string or None")
        for name in ("mint_x", "mint_y"):
            v = getattr(self, name)
            if v is not None and (not isinstance(v, str) or not v):
                raise ValueError(f"{name} must be a non-empty string or None")
        if self.mint_x is not None and self.mint_x == self.mint_y:
            raise ValueError(f"mint_x and mint_y must differ: {self.mint_x}")
        if not isinstance(self.locked, bool):
            raise TypeError("locked must be a bool")

    @property
    def pool_id(self) -> str:
        return compute_pool_id(self.seed, self.mint_x, self.mint_y)

    def with_locked(self, locked: bool) -> "PoolConfig":
        return replace(self, locked=bool(locked))

    def __repr__(self) -> str:
        return (
            f"PoolConfig(seed={self.seed}, fee_bps={self.fee_bps}, "
            f"authority={self.authority!r}, locked={self.locked})"
        )
