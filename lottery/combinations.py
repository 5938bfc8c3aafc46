from __future__ import annotations

"""Lottery combination tables and generators (pure).

All arrays follow the same convention:
  - index 0   = worst team (most combinations = best chance at pick 1)
  - index N-1 = best team  (fewest combinations)

Generated sets (equal/linear/exponential) always sum exactly to the requested
total; rounding drift is absorbed by the worst team. Fixed tables are cut to
a prefix for smaller leagues and extended with max(1, floor(prev * 0.8)) for
larger ones.
"""

import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from config import COMBINATION_SETS, DEFAULT_COMBINATIONS, TOTAL_COMBINATIONS


_EXTENSION_DECAY = 0.8


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _require_team_count(num_teams: int) -> int:
    n = int(num_teams)
    if n < 1:
        raise ValueError(f"num_teams must be >= 1, got {num_teams!r}")
    return n


def _require_total(total: int) -> int:
    t = int(total)
    if t < 0:
        raise ValueError(f"total must be >= 0, got {total!r}")
    return t


def _absorb_drift(combinations: List[int], total: int) -> List[int]:
    """Push total - sum(combinations) onto the worst team.

    If removing the excess would take index 0 below zero, the rest carries to
    the next teams so no entry ends up negative.
    """
    diff = int(total) - int(sum(combinations))
    if diff >= 0:
        combinations[0] += diff
        return combinations
    excess = -diff
    for i in range(len(combinations)):
        take = min(excess, combinations[i])
        combinations[i] -= take
        excess -= take
        if excess == 0:
            break
    return combinations


def calculate_total_combinations(combinations: Sequence[Optional[int]]) -> int:
    return int(sum(int(c or 0) for c in combinations))


def calculate_percentages(combinations: Sequence[Optional[int]]) -> List[float]:
    """Percent chance at pick 1 for each entry (all zeros when the total is 0)."""
    total = calculate_total_combinations(combinations)
    if total == 0:
        return [0.0 for _ in combinations]
    return [float(c or 0) / float(total) * 100.0 for c in combinations]


def validate_combinations(combinations: Any) -> Tuple[bool, Optional[str]]:
    """Return (is_valid, error_message) for a user-supplied combinations list."""
    if not isinstance(combinations, (list, tuple)):
        return False, "Combinations must be an array"
    if len(combinations) == 0:
        return False, "At least one team required"
    for c in combinations:
        if isinstance(c, bool) or not isinstance(c, (int, float)) or c < 0:
            return False, "All combination values must be non-negative numbers"
    if calculate_total_combinations(combinations) == 0:
        return False, "Total combinations cannot be zero"
    return True, None


# ---------------------------------------------------------------------------
# Fixed tables
# ---------------------------------------------------------------------------

def fixed_table_combinations(table: Sequence[int], num_teams: int) -> List[int]:
    """Prefix of `table` for num_teams, extended when the league is larger."""
    n = int(num_teams)
    base = [int(c) for c in table]
    if n <= len(base):
        return base[:max(0, n)]
    if not base:
        raise ValueError("cannot extend an empty combinations table")
    extended = list(base)
    while len(extended) < n:
        extended.append(max(1, int(math.floor(extended[-1] * _EXTENSION_DECAY))))
    return extended


def get_default_combinations(num_teams: int) -> List[int]:
    return fixed_table_combinations(DEFAULT_COMBINATIONS, num_teams)


# ---------------------------------------------------------------------------
# Generated distributions
# ---------------------------------------------------------------------------

def generate_equal_combinations(num_teams: int, total: int = TOTAL_COMBINATIONS) -> List[int]:
    n = _require_team_count(num_teams)
    t = _require_total(total)
    base, remainder = divmod(t, n)
    # Worst teams get the leftover units.
    return [base + (1 if i < remainder else 0) for i in range(n)]


def generate_linear_combinations(num_teams: int, total: int = TOTAL_COMBINATIONS) -> List[int]:
    n = _require_team_count(num_teams)
    t = _require_total(total)
    shares_sum = n * (n + 1) / 2
    combinations = [_round_half_up((n - i) / shares_sum * t) for i in range(n)]
    return _absorb_drift(combinations, t)


def generate_exponential_combinations(num_teams: int, total: int = TOTAL_COMBINATIONS) -> List[int]:
    n = _require_team_count(num_teams)
    t = _require_total(total)
    weights = [2 ** (n - i - 1) for i in range(n)]
    weight_sum = sum(weights)
    combinations = [_round_half_up(w / weight_sum * t) for w in weights]
    return _absorb_drift(combinations, t)


_GENERATORS = {
    "EQUAL": generate_equal_combinations,
    "LINEAR": generate_linear_combinations,
    "EXPONENTIAL": generate_exponential_combinations,
}


# ---------------------------------------------------------------------------
# Set registry
# ---------------------------------------------------------------------------

def get_combination_set(set_key: Optional[str], num_teams: int) -> List[int]:
    """Combinations (worst -> best) for a named set.

    Unknown keys and CUSTOM fall back to the default table.
    """
    key = str(set_key or "").strip().upper()
    set_def = COMBINATION_SETS.get(key)
    if set_def is None:
        return get_default_combinations(num_teams)

    fixed = set_def.get("combinations")
    if fixed:
        return fixed_table_combinations(fixed, num_teams)

    gen = _GENERATORS.get(key)
    if gen is None:
        return get_default_combinations(num_teams)
    return gen(num_teams, int(set_def.get("total") or TOTAL_COMBINATIONS))


def is_lottery_only(set_key: Optional[str]) -> bool:
    set_def = COMBINATION_SETS.get(str(set_key or "").strip().upper()) or {}
    return bool(set_def.get("lottery_only"))


def list_combination_sets() -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for key, set_def in COMBINATION_SETS.items():
        fixed = set_def.get("combinations")
        out.append(
            {
                "key": key,
                "name": str(set_def.get("name") or key),
                "combinations": None if not fixed else list(fixed),
                "total": int(set_def.get("total") or TOTAL_COMBINATIONS),
                "lottery_only": bool(set_def.get("lottery_only")),
            }
        )
    return out
