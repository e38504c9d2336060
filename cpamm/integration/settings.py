"""
Runtime settings and pool bootstrap files.

Settings come from (lowest to highest precedence) dataclass defaults, the
``settings:`` block of a YAML pool file, and ``CPAMM_*`` environment
variables. Out-of-range env values are clamped; unparseable ones are logged
and ignored.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

import yaml

from ..core.curve import DEFAULT_PRICE_PRECISION

logger = logging.getLogger(__name__)

_MAX_PRECISION = 10**18


def _env_int(name: str, default: int, *, lo: int, hi: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        logger.warning("ignoring non-integer %s=%r", name, raw)
        return int(default)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


def _bool_env(name: str, *, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return bool(default)
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return bool(default)


@dataclass(frozen=True)
class AmmSettings:
    # Scale used by PoolManager.spot_price().
    price_precision: int = DEFAULT_PRICE_PRECISION
    # Registry size limit (DoS bound).
    max_pools: int = 10_000
    # If False, initialize() requires an authority.
    allow_authorityless_pools: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.price_precision, int) or isinstance(self.price_precision, bool):
            raise TypeError("price_precision must be an int")
        if not (1 <= self.price_precision <= _MAX_PRECISION):
            raise ValueError(f"price_precision must be in [1, {_MAX_PRECISION}]")
        if not isinstance(self.max_pools, int) or isinstance(self.max_pools, bool) or self.max_pools <= 0:
            raise ValueError("max_pools must be a positive int")
        if not isinstance(self.allow_authorityless_pools, bool):
            raise TypeError("allow_authorityless_pools must be a bool")

    @classmethod
    def from_mapping(cls, obj: Mapping[str, Any]) -> "AmmSettings":
        if not isinstance(obj, Mapping):
            raise TypeError("settings must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(obj) - known)
        if unknown:
            raise ValueError(f"unknown settings keys: {unknown}")
        return cls(**dict(obj))

    def with_env(self) -> "AmmSettings":
        """Overlay ``CPAMM_*`` environment variables."""
        return replace(
            self,
            price_precision=_env_int("CPAMM_PRICE_PRECISION", self.price_precision, lo=1, hi=_MAX_PRECISION),
            max_pools=_env_int("CPAMM_MAX_POOLS", self.max_pools, lo=1, hi=1_000_000),
            allow_authorityless_pools=_bool_env(
                "CPAMM_ALLOW_AUTHORITYLESS", default=self.allow_authorityless_pools
            ),
        )

    @classmethod
    def from_env(cls) -> "AmmSettings":
        return cls().with_env()


@dataclass(frozen=True)
class PoolDefinition:
    """One entry of a pool file's ``pools:`` list."""

    seed: int
    fee_bps: int
    authority: Optional[str] = None
    mint_x: Optional[str] = None
    mint_y: Optional[str] = None


def _parse_pool_entry(entry: Any, *, index: int) -> PoolDefinition:
    if not isinstance(entry, Mapping):
        raise ValueError(f"pools[{index}] must be a mapping")
    known = {f.name for f in fields(PoolDefinition)}
    unknown = sorted(set(entry) - known)
    if unknown:
        raise ValueError(f"pools[{index}] has unknown keys: {unknown}")
    for key in ("seed", "fee_bps"):
        v = entry.get(key)
        if not isinstance(v, int) or isinstance(v, bool):
            raise ValueError(f"pools[{index}].{key} must be an int")
    for key in ("authority", "mint_x", "mint_y"):
        v = entry.get(key)
        if v is not None and not isinstance(v, str):
            raise ValueError(f"pools[{index}].{key} must be a string")
    return PoolDefinition(**dict(entry))


def load_pool_file(path: Path | str) -> Tuple[AmmSettings, List[PoolDefinition]]:
    """
    Load a YAML pool file.

    Format::

        settings:
          price_precision: 1000000
        pools:
          - seed: 1
            fee_bps: 30
            authority: alice
            mint_x: USDC
            mint_y: SOL

    Returns the settings (env overlay applied) and the pool definitions.
    """
    p = Path(path)
    obj = yaml.safe_load(p.read_text(encoding="utf-8"))
    if obj is None:
        obj = {}
    if not isinstance(obj, Mapping):
        raise TypeError("pool file must be a mapping")

    settings_obj = obj.get("settings") or {}
    settings = AmmSettings.from_mapping(settings_obj).with_env()

    pools_obj = obj.get("pools") or []
    if not isinstance(pools_obj, list):
        raise TypeError("pool file 'pools' must be a list")
    defs = [_parse_pool_entry(entry, index=i) for i, entry in enumerate(pools_obj)]

    seeds = [d.seed for d in defs]
    if len(seeds) != len(set(seeds)):
        raise ValueError("pool file contains duplicate seeds")

    logger.debug("loaded %d pool definitions from %s", len(defs), p)
    return settings, defs
