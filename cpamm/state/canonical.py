"""
Stable byte encodings for pool snapshots.

Snapshot data is plain JSON made of dicts, lists, str, int, bool and None.
Floats are refused so that one pool state has exactly one encoding.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

_DOMAIN_PREFIX = b"cpamm:"


def _check_snapshot_value(value: Any, path: str = "$") -> None:
    if isinstance(value, float):
        raise TypeError(f"{path}: floats have no canonical encoding")
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"{path}: object keys must be strings")
            _check_snapshot_value(item, f"{path}.{key}")
    elif isinstance(value, (list, tuple)):
        for i, item in enumerate(value):
            _check_snapshot_value(item, f"{path}[{i}]")


def canonical_json_bytes(value: Any) -> bytes:
    """Compact, key-sorted UTF-8 JSON; floats and NaN are rejected."""
    _check_snapshot_value(value)
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False).encode(
        "utf-8"
    )


def sha256_hex(data: bytes) -> str:
    return "0x" + hashlib.sha256(data).hexdigest()


def domain_sep_bytes(label: str, version: int = 1) -> bytes:
    """Domain prefix ``cpamm:<label>:v<version>\\0``."""
    if not isinstance(label, str) or not label or not label.isascii() or "\x00" in label:
        raise ValueError(f"invalid domain label: {label!r}")
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")
    return b"%s%s:v%d\x00" % (_DOMAIN_PREFIX, label.encode("ascii"), version)
