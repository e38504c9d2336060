#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cpamm.core.errors import AmmError
from cpamm.integration.pool_manager import PoolManager
from cpamm.state.vaults import Direction


def _now() -> int:
    return int(time.time())


def _print_pool(manager: PoolManager, seed: int, label: str) -> None:
    pool = manager.get_pool(seed)
    k = pool.vaults.constant_product()
    print(
        f"[offline-demo] {label}: reserve_x={pool.reserve_x} reserve_y={pool.reserve_y} "
        f"lp_supply={pool.lp_supply} k={k}"
    )


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Run genesis deposit, swap and withdraw on an in-memory pool.")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--fee-bps", type=int, default=30)
    ap.add_argument("--initial-x", type=int, default=1_000_000_000)
    ap.add_argument("--initial-y", type=int, default=1_000_000_000)
    ap.add_argument("--initial-lp", type=int, default=1_000_000)
    ap.add_argument("--swap-in", type=int, default=1_000_000)
    ap.add_argument("--direction", choices=[d.value for d in Direction], default=Direction.X_TO_Y.value)
    ap.add_argument("--pool-file", type=Path, default=None, help="YAML pool file (optional)")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    provider = "alice"
    if args.pool_file is not None:
        manager = PoolManager.from_pool_file(args.pool_file)
    else:
        manager = PoolManager()
    if args.seed not in manager:
        manager.initialize(args.seed, args.fee_bps, authority=provider)

    deadline = _now() + 3600
    try:
        manager.deposit(args.seed, provider, args.initial_lp, args.initial_x, args.initial_y, deadline=deadline)
        _print_pool(manager, args.seed, "after genesis deposit")

        price = manager.spot_price(args.seed)
        print(f"[offline-demo] spot price of X in Y: {price.amount}/{price.precision}")

        quote = manager.quote_swap(args.seed, args.swap_in, Direction(args.direction))
        effect = manager.swap(
            args.seed, args.swap_in, quote.amount_out, Direction(args.direction), deadline=deadline
        )
        print(
            f"[offline-demo] swap: in={args.swap_in} fee={effect.fee} "
            f"out_x={effect.amount_x_out} out_y={effect.amount_y_out} "
            f"k_before={effect.k_before} k_after={effect.k_after}"
        )
        _print_pool(manager, args.seed, "after swap")

        withdrawn = manager.withdraw(args.seed, provider, args.initial_lp, deadline=deadline)
        print(f"[offline-demo] withdraw: x={withdrawn.amount_x_out} y={withdrawn.amount_y_out}")
        _print_pool(manager, args.seed, "after withdraw")
    except AmmError as exc:
        print(f"[offline-demo] FAIL ({exc.code}): {exc}")
        return 1

    print("[offline-demo] OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
