"""
Token reserves custodied by a pool.

The engine records intended reserve deltas here; moving the actual tokens in
and out of vault accounts belongs to the surrounding ledger layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Tuple

# Type alias
Amount = int  # Non-negative integer token units


@unique
class Direction(Enum):
    """Swap direction: which reserve receives the input."""

    X_TO_Y = "x_to_y"
    Y_TO_X = "y_to_x"


@dataclass(frozen=True)
class VaultPair:
    """Reserves of token X and token Y."""

    reserve_x: Amount = 0
    reserve_y: Amount = 0

    def __post_init__(self) -> None:
        for name in ("reserve_x", "reserve_y"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0:
                raise ValueError(f"{name} must be non-negative: {v}")

    @property
    def is_empty(self) -> bool:
        return self.reserve_x == 0 and self.reserve_y == 0

    def oriented(self, direction: Direction) -> Tuple[Amount, Amount]:
        """Return ``(reserve_in, reserve_out)`` for a swap direction."""
        if direction is Direction.X_TO_Y:
            return self.reserve_x, self.reserve_y
        return self.reserve_y, self.reserve_x

    def from_oriented(self, direction: Direction, reserve_in: Amount, reserve_out: Amount) -> "VaultPair":
        """Inverse of ``oriented()``: build the pair from in/out reserves."""
        if direction is Direction.X_TO_Y:
            return VaultPair(reserve_x=reserve_in, reserve_y=reserve_out)
        return VaultPair(reserve_x=reserve_out, reserve_y=reserve_in)

    def constant_product(self) -> int:
        """k = reserve_x * reserve_y."""
        return self.reserve_x * self.reserve_y
