"""Invariant checkers for pool state.

Each function returns True when the invariant holds, and ``check_all()``
returns the list of violated invariant IDs (empty = all pass). The engine runs
``check_all()`` on every post-state before publishing it.
"""

from __future__ import annotations

from typing import Callable

from ..state.pool import PoolState
from .math import BPS_SCALE, U64_MAX


def inv_fee_in_range(s: PoolState) -> bool:
    return 0 <= s.config.fee_bps < BPS_SCALE


def inv_reserves_u64(s: PoolState) -> bool:
    return 0 <= s.vaults.reserve_x <= U64_MAX and 0 <= s.vaults.reserve_y <= U64_MAX


def inv_supply_u64(s: PoolState) -> bool:
    return 0 <= s.lp.supply <= U64_MAX


def inv_reserves_empty_together(s: PoolState) -> bool:
    return (s.vaults.reserve_x == 0) == (s.vaults.reserve_y == 0)


def inv_supply_zero_iff_empty(s: PoolState) -> bool:
    return (s.lp.supply == 0) == s.vaults.is_empty


def inv_supply_matches_holders(s: PoolState) -> bool:
    return s.lp.supply == s.lp.holders_total()


# ---------------------------------------------------------------------------
# Registry + check_all
# ---------------------------------------------------------------------------

INVARIANT_REGISTRY: dict[str, Callable[[PoolState], bool]] = {
    "inv_fee_in_range": inv_fee_in_range,
    "inv_reserves_u64": inv_reserves_u64,
    "inv_supply_u64": inv_supply_u64,
    "inv_reserves_empty_together": inv_reserves_empty_together,
    "inv_supply_zero_iff_empty": inv_supply_zero_iff_empty,
    "inv_supply_matches_holders": inv_supply_matches_holders,
}


def check_all(state: PoolState) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(state)
    ]
