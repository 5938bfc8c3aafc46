from __future__ import annotations

"""Simulate the lottery and compare picks 1-4 with the expected odds.

Run:
  python -m tools.verify_lottery --iterations 100000 --seed 7
  python -m tools.verify_lottery --combinations 70,20,5,5

Exit code:
  0 - every picks 1-4 difference within tolerance
  1 - at least one difference exceeds tolerance
  2 - invalid arguments
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from config import NBA_14_TEAM_COMBINATIONS, VERIFY_DEFAULT_ITERATIONS
from lottery.combinations import validate_combinations
from lottery.errors import LotteryError
from lottery.verification import format_verification_report, verify_lottery_probabilities


def _parse_combinations(raw: Optional[str]) -> List[int]:
    if not raw:
        return list(NBA_14_TEAM_COMBINATIONS)
    try:
        return [int(x.strip()) for x in raw.split(",") if x.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"--combinations must be comma-separated integers: {raw!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="verify_lottery", description="Compare simulated lottery odds with the expected table.")
    p.add_argument("--iterations", type=int, default=VERIFY_DEFAULT_ITERATIONS)
    p.add_argument("--seed", type=int, default=None, help="RNG seed for a reproducible run")
    p.add_argument("--combinations", type=str, default=None, help="comma-separated, worst -> best")
    p.add_argument("--tolerance", type=float, default=0.5, help="max allowed difference in percentage points")
    p.add_argument("--verbose", action="store_true")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        combos = _parse_combinations(args.combinations)
    except argparse.ArgumentTypeError as exc:
        print(f"[FAIL] {exc}", file=sys.stderr)
        return 2

    ok, error = validate_combinations(combos)
    if not ok:
        print(f"[FAIL] {error}", file=sys.stderr)
        return 2
    if args.iterations <= 0:
        print("[FAIL] --iterations must be positive", file=sys.stderr)
        return 2

    try:
        report = verify_lottery_probabilities(args.iterations, combos, rng_seed=args.seed)
    except LotteryError as exc:
        print(f"[FAIL] {exc.message}", file=sys.stderr)
        return 2
    print(format_verification_report(report))

    if report.within(args.tolerance):
        print(f"\n[OK] All differences within {args.tolerance:.2f} percentage points.")
        return 0
    print(f"\n[FAIL] Max difference {report.max_difference:.2f} exceeds {args.tolerance:.2f}.")
    return 1


if __name__ == '__main__':
    raise SystemExit(main())
