from __future__ import annotations

"""Full-order draft lottery (pure).

Plackett-Luce sampling without replacement over integer combinations, the same
mechanics as the NBA lottery but continued until every team has a pick:

  pick 1: P(team i) = c_i / sum(c_j for all teams)
  pick 2: P(team i | team j drawn) = c_i / sum(c_k for k != j)
  ...

Each draw picks a uniform integer in [1, total] and walks the pool in its
fixed order; teams with 0 combinations never contribute to the walk. When a
single team remains it is drawn regardless of its combinations.

Input contract:
  - entries: LotteryEntry list, usually worst -> best.
Output:
  - LotteryResult from lottery.types.
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from .errors import (
    EmptyInputError,
    EmptyPoolError,
    InvalidEntityError,
    InvalidWeightError,
    ZeroTotalWeightError,
)
from .types import LotteryEntry, LotteryResult, LotterySelection, LotteryTeam


logger = logging.getLogger(__name__)

SelectionCallback = Callable[[LotteryTeam, int], None]


@dataclass(frozen=True, slots=True)
class PoolEntry:
    """Working-pool member. `key` is the input index and the identity used for removal."""

    key: int
    entry: LotteryEntry

    @property
    def combinations(self) -> int:
        return int(self.entry.combinations)


def _validate_weights(entries: Sequence[LotteryEntry]) -> int:
    total = 0
    for i, e in enumerate(entries):
        c = e.combinations
        if isinstance(c, bool) or not isinstance(c, int):
            raise InvalidWeightError(
                f"combinations must be an integer (team={e.team_id!r}, got {c!r})",
                details={"index": i, "team_id": e.team_id},
            )
        if c < 0:
            raise InvalidWeightError(
                f"combinations must be non-negative (team={e.team_id!r}, got {c})",
                details={"index": i, "team_id": e.team_id},
            )
        total += c
    return total


def pool_total(pool: Sequence[PoolEntry]) -> int:
    return int(sum(p.combinations for p in pool if p.combinations > 0))


def draw_one(pool: Sequence[PoolEntry], rng: random.Random) -> PoolEntry:
    """Select one member of the pool by combinations (not removed)."""
    if not pool:
        raise EmptyPoolError()

    if len(pool) == 1:
        return pool[0]

    total = pool_total(pool)
    if total <= 0:
        raise ZeroTotalWeightError(
            f"Total combinations cannot be zero with {len(pool)} teams remaining",
            details={"remaining": [p.entry.team_id for p in pool]},
        )

    roll = rng.randint(1, total)
    cumulative = 0
    for p in pool:
        c = p.combinations
        if c <= 0:
            continue
        cumulative += c
        if roll <= cumulative:
            return p

    raise InvalidEntityError(details={"roll": int(roll), "total": int(total)})


def _remove_by_identity(pool: List[PoolEntry], selected: PoolEntry) -> None:
    for idx, p in enumerate(pool):
        if p is selected:
            pool.pop(idx)
            return
    raise InvalidEntityError(
        "Selected team is not in the pool",
        details={"key": int(selected.key), "team_id": selected.entry.team_id},
    )


def run_lottery(
    entries: Sequence[LotteryEntry],
    *,
    rng: Optional[random.Random] = None,
    rng_seed: Optional[int] = None,
    on_selection: Optional[SelectionCallback] = None,
    include_audit: bool = False,
) -> LotteryResult:
    """Draw every team, pick 1 first.

    Parameters
    ----------
    entries:
        Teams with their combinations. Pool walk order follows this sequence.
    rng / rng_seed:
        Inject a generator, or seed a fresh one for reproducibility. If both
        are omitted a fresh unseeded generator is used.
    on_selection:
        Called synchronously as (team, pick_number) right after each pick is
        recorded, in increasing pick order.
    include_audit:
        If True, includes draw steps in result.audit.
    """
    items = list(entries or [])
    if not items:
        raise EmptyInputError()

    total = _validate_weights(items)
    if total <= 0:
        raise ZeroTotalWeightError(details={"teams": [e.team_id for e in items]})

    # Zero-combination teams are only drawable as the last team standing, so
    # two or more of them always end in a zero-total pool. Reject before any
    # pick is made or reported.
    zero_teams = [e.team_id for e in items if e.combinations == 0]
    if len(zero_teams) > 1:
        raise ZeroTotalWeightError(
            f"{len(zero_teams)} teams have zero combinations; at most one can be drawn by fallback",
            details={"teams": zero_teams},
        )

    if rng is None:
        rng = random.Random(rng_seed)

    n = len(items)
    pool: List[PoolEntry] = [PoolEntry(key=i, entry=e) for i, e in enumerate(items)]
    selections: List[LotterySelection] = []
    audit: Dict[str, Any] = {}

    for pick_number in range(1, n + 1):
        remaining_total = pool_total(pool)
        selected = draw_one(pool, rng)

        if include_audit:
            audit.setdefault("draws", []).append(
                {
                    "pick_number": pick_number,
                    "candidates": [p.entry.team_id for p in pool],
                    "combinations": [p.combinations for p in pool],
                    "pool_total": int(remaining_total),
                    "winner": selected.entry.team_id,
                }
            )

        _remove_by_identity(pool, selected)

        selection = LotterySelection(
            team=selected.entry.team,
            combinations=selected.combinations,
            pick_number=pick_number,
            total_teams=n,
        )
        selections.append(selection)
        logger.debug(
            "lottery pick=%s team=%s combinations=%s pool_total=%s",
            pick_number,
            selected.entry.team_id,
            selected.combinations,
            remaining_total,
        )

        if on_selection is not None:
            on_selection(selection.team, pick_number)

    if pool:
        raise InvalidEntityError("Pool not exhausted after all picks", details={"remaining": len(pool)})

    logger.info("LOTTERY_RUN_COMPLETE teams=%s total_combinations=%s", n, total)

    return LotteryResult(
        selections=tuple(selections),
        total_combinations=int(total),
        rng_seed=None if rng_seed is None else int(rng_seed),
        audit=audit,
    )


def run_lottery_from_weights(
    teams: Sequence[LotteryTeam],
    weights: Sequence[int],
    **kwargs: Any,
) -> LotteryResult:
    """Convenience wrapper for parallel team/weight lists."""
    team_list = list(teams or [])
    weight_list = list(weights or [])
    if len(team_list) != len(weight_list):
        raise ValueError(f"teams and weights must have equal length ({len(team_list)} != {len(weight_list)})")
    entries = [LotteryEntry(team=t, combinations=w) for t, w in zip(team_list, weight_list)]
    return run_lottery(entries, **kwargs)
