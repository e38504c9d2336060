# [TESTER] v1

from __future__ import annotations

import pytest

from cpamm.state.canonical import canonical_json_bytes, domain_sep_bytes, sha256_hex
from cpamm.state.config import PoolConfig, compute_pool_id
from cpamm.state.lp import LPAccountant
from cpamm.state.pool import PoolState
from cpamm.state.vaults import Direction, VaultPair


# ---------------------------------------------------------------------------
# PoolConfig
# ---------------------------------------------------------------------------


class TestPoolConfig:
    def test_defaults(self) -> None:
        cfg = PoolConfig(seed=1, fee_bps=30)
        assert cfg.authority is None
        assert cfg.locked is False

    def test_with_locked_returns_copy(self) -> None:
        cfg = PoolConfig(seed=1, fee_bps=30, authority="admin")
        locked = cfg.with_locked(True)
        assert locked.locked is True
        assert cfg.locked is False
        assert locked.seed == cfg.seed and locked.authority == cfg.authority

    def test_rejects_bad_fields(self) -> None:
        with pytest.raises(TypeError):
            PoolConfig(seed="1", fee_bps=30)  # type: ignore[arg-type]
        with pytest.raises(ValueError):
            PoolConfig(seed=-1, fee_bps=30)
        with pytest.raises(ValueError):
            PoolConfig(seed=1, fee_bps=30, authority="")
        with pytest.raises(ValueError):
            PoolConfig(seed=1, fee_bps=30, mint_x="SOL", mint_y="SOL")
        with pytest.raises(TypeError):
            PoolConfig(seed=1, fee_bps=30, locked=1)  # type: ignore[arg-type]

    def test_pool_id_is_deterministic(self) -> None:
        a = PoolConfig(seed=9, fee_bps=30, mint_x="USDC", mint_y="SOL")
        b = PoolConfig(seed=9, fee_bps=100, mint_x="USDC", mint_y="SOL", locked=True)
        assert a.pool_id == b.pool_id
        assert a.pool_id.startswith("0x") and len(a.pool_id) == 66

    def test_pool_id_depends_on_seed_and_mints(self) -> None:
        base = compute_pool_id(9, "USDC", "SOL")
        assert compute_pool_id(10, "USDC", "SOL") != base
        assert compute_pool_id(9, "SOL", "USDC") != base
        # The separator keeps ("ab", "c") and ("a", "bc") apart.
        assert compute_pool_id(9, "ab", "c") != compute_pool_id(9, "a", "bc")


# ---------------------------------------------------------------------------
# VaultPair
# ---------------------------------------------------------------------------


class TestVaultPair:
    def test_orientation_round_trip(self) -> None:
        v = VaultPair(reserve_x=10, reserve_y=20)
        assert v.oriented(Direction.X_TO_Y) == (10, 20)
        assert v.oriented(Direction.Y_TO_X) == (20, 10)
        for d in Direction:
            rin, rout = v.oriented(d)
            assert v.from_oriented(d, rin, rout) == v

    def test_is_empty_and_k(self) -> None:
        assert VaultPair().is_empty
        assert not VaultPair(reserve_x=1, reserve_y=0).is_empty
        assert VaultPair(reserve_x=20, reserve_y=30).constant_product() == 600

    def test_rejects_negative(self) -> None:
        with pytest.raises(ValueError):
            VaultPair(reserve_x=-1)
        with pytest.raises(TypeError):
            VaultPair(reserve_y=True)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# LPAccountant
# ---------------------------------------------------------------------------


class TestLPAccountant:
    def test_mint_and_burn(self) -> None:
        lp = LPAccountant().mint("alice", 100).mint("bob", 50)
        assert lp.supply == 150
        assert lp.balance_of("alice") == 100
        lp2 = lp.burn("alice", 40)
        assert lp2.supply == 110
        assert lp2.balance_of("alice") == 60
        # Source ledger untouched.
        assert lp.balance_of("alice") == 100

    def test_burn_to_zero_drops_holder(self) -> None:
        lp = LPAccountant().mint("alice", 100).burn("alice", 100)
        assert lp.supply == 0
        assert lp.holders == {}
        assert lp.balance_of("alice") == 0

    def test_burn_more_than_balance(self) -> None:
        with pytest.raises(ValueError):
            LPAccountant().mint("alice", 10).burn("alice", 11)

    def test_zero_balances_rejected(self) -> None:
        with pytest.raises(ValueError):
            LPAccountant(supply=0, holders={"alice": 0})

    def test_holders_total(self) -> None:
        lp = LPAccountant(supply=7, holders={"a": 3, "b": 4})
        assert lp.holders_total() == 7


# ---------------------------------------------------------------------------
# PoolState + canonical encoding
# ---------------------------------------------------------------------------


def test_pool_state_accessors_and_evolve() -> None:
    pool = PoolState(config=PoolConfig(seed=3, fee_bps=30))
    assert (pool.seed, pool.reserve_x, pool.reserve_y, pool.lp_supply) == (3, 0, 0, 0)
    funded = pool.evolve(vaults=VaultPair(reserve_x=5, reserve_y=6))
    assert (funded.reserve_x, funded.reserve_y) == (5, 6)
    assert pool.reserve_x == 0


def test_canonical_json_is_order_independent() -> None:
    a = canonical_json_bytes({"b": 1, "a": [1, 2]})
    b = canonical_json_bytes({"a": [1, 2], "b": 1})
    assert a == b == b'{"a":[1,2],"b":1}'


def test_canonical_json_rejects_floats() -> None:
    with pytest.raises(TypeError, match=r"\$\.lp\.holders\[0\]"):
        canonical_json_bytes({"lp": {"holders": [1.5]}})


def test_canonical_json_rejects_non_string_keys() -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes({1: "a"})


def test_domain_separation() -> None:
    assert domain_sep_bytes("pool_snapshot") == b"cpamm:pool_snapshot:v1\x00"
    assert domain_sep_bytes("pool_snapshot", version=2) != domain_sep_bytes("pool_snapshot")
    with pytest.raises(ValueError):
        domain_sep_bytes("bad\x00label")
    assert sha256_hex(b"").startswith("0x")
