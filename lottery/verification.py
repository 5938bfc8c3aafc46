from __future__ import annotations

"""Lottery probability verification.

Checks that the sampler reproduces the published NBA lottery odds for the
post-2019 14-team table (1000 combinations):

  seeds 1..3: 14.0%    seed 8:  6.0%    seed 12: 1.5%
  seed 4:     12.5%    seed 9:  4.5%    seed 13: 1.0%
  seed 5:     10.5%    seed 10: 3.0%    seed 14: 0.5%
  seed 6:      9.0%    seed 11: 2.0%
  seed 7:      7.5%

The NBA only draws picks 1-4 (picks 5-14 go by record), so only those columns
are published. Every pick is still drawn, but only picks 1-4 are compared;
later picks are reported as an observed aggregate with no expected value
(their `differences` entries are None).
"""

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from config import NBA_14_TEAM_COMBINATIONS, VERIFY_DEFAULT_ITERATIONS

from .errors import ZeroTotalWeightError
from .sampler import run_lottery
from .types import LotteryEntry, LotteryTeam


PUBLISHED_PICKS = 4

# [seed][pick] = percent, picks 1..4.
NBA_PROBABILITIES: Tuple[Tuple[float, ...], ...] = (
    (14.0, 13.4, 12.7, 12.0),
    (14.0, 13.4, 12.7, 12.0),
    (14.0, 13.4, 12.7, 12.0),
    (12.5, 12.2, 11.9, 11.5),
    (10.5, 10.5, 10.6, 10.5),
    (9.0, 9.2, 9.4, 9.6),
    (7.5, 7.8, 8.1, 8.5),
    (6.0, 6.3, 6.7, 7.2),
    (4.5, 4.8, 5.2, 5.7),
    (3.0, 3.3, 3.6, 4.0),
    (2.0, 2.2, 2.4, 2.8),
    (1.5, 1.7, 1.9, 2.1),
    (1.0, 1.1, 1.2, 1.4),
    (0.5, 0.6, 0.6, 0.7),
)


def _mock_entries(combinations: Sequence[int]) -> List[LotteryEntry]:
    return [
        LotteryEntry(
            team=LotteryTeam(team_id=f"team-{i + 1}", display_name=f"Team {i + 1}"),
            combinations=int(c),
        )
        for i, c in enumerate(combinations)
    ]


def exact_pick_probabilities(combinations: Sequence[int], max_pick: int = PUBLISHED_PICKS) -> List[List[float]]:
    """Exact Plackett-Luce odds (percent) for picks 1..max_pick.

    Enumerates every ordered prefix of length max_pick, so keep max_pick small
    for large leagues (14 teams x 4 picks is ~24k prefixes).
    """
    combos = [int(c) for c in combinations]
    n = len(combos)
    depth = max(0, min(int(max_pick), n))
    probs = [[0.0] * depth for _ in range(n)]
    if n == 0 or depth == 0:
        return probs
    if sum(c for c in combos if c > 0) <= 0 and n > 1:
        raise ZeroTotalWeightError()

    def _walk(remaining: Tuple[int, ...], p: float, pick: int) -> None:
        if pick >= depth:
            return
        if len(remaining) == 1:
            probs[remaining[0]][pick] += p
            return
        total = sum(combos[i] for i in remaining if combos[i] > 0)
        if total <= 0:
            raise ZeroTotalWeightError(details={"remaining": list(remaining)})
        for i in remaining:
            c = combos[i]
            if c <= 0:
                continue
            q = p * c / total
            probs[i][pick] += q
            _walk(tuple(j for j in remaining if j != i), q, pick + 1)

    _walk(tuple(range(n)), 1.0, 0)
    return [[v * 100.0 for v in row] for row in probs]


def simulate_pick_counts(
    combinations: Sequence[int],
    iterations: int,
    *,
    rng_seed: Optional[int] = None,
) -> List[List[int]]:
    """Run `iterations` lotteries; counts[seed][pick] (both 0-based)."""
    entries = _mock_entries(combinations)
    n = len(entries)
    counts = [[0] * n for _ in range(n)]
    seed_of = {e.team_id: i for i, e in enumerate(entries)}
    rng = random.Random(rng_seed)

    for _ in range(int(iterations)):
        result = run_lottery(entries, rng=rng)
        for s in result.selections:
            counts[seed_of[s.team.team_id]][s.pick_number - 1] += 1
    return counts


@dataclass(frozen=True, slots=True)
class VerificationReport:
    iterations: int
    combinations: Tuple[int, ...]
    counts: List[List[int]]
    observed: List[List[float]]
    expected: List[List[float]]
    expected_source: str
    differences: List[List[Optional[float]]] = field(default_factory=list)

    @property
    def max_difference(self) -> float:
        diffs = [d for row in self.differences for d in row if d is not None]
        return max(diffs) if diffs else 0.0

    def within(self, tolerance: float) -> bool:
        return self.max_difference <= float(tolerance)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "iterations": int(self.iterations),
            "combinations": list(self.combinations),
            "expected_source": self.expected_source,
            "observed": [list(r) for r in self.observed],
            "expected": [list(r) for r in self.expected],
            "differences": [list(r) for r in self.differences],
            "max_difference": float(self.max_difference),
        }


def verify_lottery_probabilities(
    iterations: int = VERIFY_DEFAULT_ITERATIONS,
    combinations: Sequence[int] = NBA_14_TEAM_COMBINATIONS,
    *,
    rng_seed: Optional[int] = None,
) -> VerificationReport:
    """Simulate and compare picks 1-4 against the expected odds.

    The published NBA table is the reference for the official 14-team
    combinations; any other table is compared against exact values.
    """
    combos = tuple(int(c) for c in combinations)
    iters = int(iterations)
    if iters <= 0:
        raise ValueError(f"iterations must be positive, got {iterations!r}")

    counts = simulate_pick_counts(combos, iters, rng_seed=rng_seed)
    observed = [[c / iters * 100.0 for c in row] for row in counts]

    if combos == tuple(NBA_14_TEAM_COMBINATIONS):
        expected = [list(row) for row in NBA_PROBABILITIES]
        source = "published"
    else:
        expected = exact_pick_probabilities(combos, PUBLISHED_PICKS)
        source = "exact"

    differences: List[List[Optional[float]]] = []
    for seed, row in enumerate(observed):
        diffs: List[Optional[float]] = []
        for pick, obs in enumerate(row):
            if pick < len(expected[seed]):
                diffs.append(abs(obs - float(expected[seed][pick])))
            else:
                diffs.append(None)
        differences.append(diffs)

    return VerificationReport(
        iterations=iters,
        combinations=combos,
        counts=counts,
        observed=observed,
        expected=expected,
        expected_source=source,
        differences=differences,
    )


def format_verification_report(report: VerificationReport) -> str:
    n = len(report.observed)
    lines = [
        f"=== Lottery Verification Results ({report.iterations:,} iterations) ===",
        f"Comparing picks 1-{PUBLISHED_PICKS} against {report.expected_source} odds.",
        "",
    ]
    for seed in range(n):
        lines.append(f"Seed {seed + 1} ({report.combinations[seed]} combinations):")
        for pick in range(min(PUBLISHED_PICKS, n)):
            obs = report.observed[seed][pick]
            exp = report.expected[seed][pick]
            diff = report.differences[seed][pick]
            lines.append(
                f"  Pick #{pick + 1}: Observed={obs:.2f}%, Expected={exp:.2f}%, Diff={diff:.2f}%"
            )
        if n > PUBLISHED_PICKS:
            rest = sum(report.observed[seed][PUBLISHED_PICKS:])
            lines.append(f"  Picks {PUBLISHED_PICKS + 1}-{n}: {rest:.2f}%")
        lines.append("")
    lines.append(f"Max difference (picks 1-{PUBLISHED_PICKS}): {report.max_difference:.2f}%")
    return "\n".join(lines)
