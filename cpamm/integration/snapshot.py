"""
Pool snapshot encoding.

Goals:
- Deterministic JSON serialization for hashing / persistence.
- Round-trippable into ``PoolState``.
- Explicit versioning.

Persisted layout per pool (keyed by seed): one config record, one vault
record, one LP record (supply + holders).
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from ..core.invariants import check_all
from ..state.canonical import canonical_json_bytes, domain_sep_bytes, sha256_hex
from ..state.config import PoolConfig
from ..state.lp import LPAccountant
from ..state.pool import PoolState
from ..state.vaults import VaultPair


POOL_SNAPSHOT_VERSION = 1


def _require_str(value: Any, *, name: str, max_len: int = 512) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    if not value:
        raise ValueError(f"{name} must be non-empty")
    if len(value) > max_len:
        raise ValueError(f"{name} too large")
    return value


def _optional_str(value: Any, *, name: str) -> str | None:
    if value is None:
        return None
    return _require_str(value, name=name)


def _require_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return int(value)


def _require_mapping(value: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{name} must be an object")
    return value


@dataclass(frozen=True)
class PoolSnapshot:
    """
    Deterministic, versioned snapshot of one ``PoolState``.

    The commitment is *not* included inside ``data`` to avoid self-reference.
    """

    version: int
    data: Dict[str, Any]

    def canonical_bytes(self) -> bytes:
        return canonical_json_bytes(self.data)

    def commitment_bytes(self) -> bytes:
        payload = domain_sep_bytes("pool_snapshot", version=self.version) + self.canonical_bytes()
        return hashlib.sha256(payload).digest()

    def commitment_hex(self) -> str:
        payload = domain_sep_bytes("pool_snapshot", version=self.version) + self.canonical_bytes()
        return sha256_hex(payload)


def snapshot_from_pool(pool: PoolState, *, version: int = POOL_SNAPSHOT_VERSION) -> PoolSnapshot:
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")

    cfg = pool.config
    holders = [{"holder": h, "amount": int(a)} for h, a in pool.lp.holders.items()]
    holders.sort(key=lambda e: e["holder"])

    data: Dict[str, Any] = {
        "version": int(version),
        "config": {
            "seed": int(cfg.seed),
            "fee_bps": int(cfg.fee_bps),
            "authority": cfg.authority,
            "mint_x": cfg.mint_x,
            "mint_y": cfg.mint_y,
            "locked": bool(cfg.locked),
        },
        "vaults": {
            "reserve_x": int(pool.vaults.reserve_x),
            "reserve_y": int(pool.vaults.reserve_y),
        },
        "lp": {
            "supply": int(pool.lp.supply),
            "holders": holders,
        },
    }
    return PoolSnapshot(version=version, data=data)


def pool_from_snapshot(snapshot: Mapping[str, Any], *, max_holders: int = 200_000) -> PoolState:
    """
    Decode and validate a snapshot. Fails closed on any malformed field or on
    a decoded pool that violates a pool invariant.
    """
    snapshot = _require_mapping(snapshot, name="snapshot")

    version = snapshot.get("version", POOL_SNAPSHOT_VERSION)
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("snapshot.version must be a positive int")
    if version != POOL_SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {version}")

    cfg_obj = _require_mapping(snapshot.get("config"), name="snapshot.config")
    locked = cfg_obj.get("locked", False)
    if not isinstance(locked, bool):
        raise TypeError("config.locked must be a bool")
    config = PoolConfig(
        seed=_require_int(cfg_obj.get("seed"), name="config.seed"),
        fee_bps=_require_int(cfg_obj.get("fee_bps"), name="config.fee_bps"),
        authority=_optional_str(cfg_obj.get("authority"), name="config.authority"),
        mint_x=_optional_str(cfg_obj.get("mint_x"), name="config.mint_x"),
        mint_y=_optional_str(cfg_obj.get("mint_y"), name="config.mint_y"),
        locked=locked,
    )

    vault_obj = _require_mapping(snapshot.get("vaults"), name="snapshot.vaults")
    vaults = VaultPair(
        reserve_x=_require_int(vault_obj.get("reserve_x"), name="vaults.reserve_x"),
        reserve_y=_require_int(vault_obj.get("reserve_y"), name="vaults.reserve_y"),
    )

    lp_obj = _require_mapping(snapshot.get("lp"), name="snapshot.lp")
    supply = _require_int(lp_obj.get("supply"), name="lp.supply")
    holder_entries = lp_obj.get("holders") or []
    if not isinstance(holder_entries, list):
        raise TypeError("lp.holders must be a list")
    if len(holder_entries) > max_holders:
        raise ValueError(f"too many LP holders: {len(holder_entries)} > {max_holders}")
    holders: Dict[str, int] = {}
    for entry in holder_entries:
        entry = _require_mapping(entry, name="lp.holders entry")
        holder = _require_str(entry.get("holder"), name="lp.holder")
        amount = _require_int(entry.get("amount"), name="lp.amount")
        if holder in holders:
            raise ValueError(f"duplicate LP holder: {holder}")
        if amount == 0:
            raise ValueError(f"zero LP balance stored for {holder}")
        holders[holder] = amount

    pool = PoolState(config=config, vaults=vaults, lp=LPAccountant(supply=supply, holders=holders))
    violations = check_all(pool)
    if violations:
        raise ValueError(f"snapshot violates pool invariants: {', '.join(violations)}")
    return pool
