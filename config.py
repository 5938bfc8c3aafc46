from __future__ import annotations

"""Runtime constants for the lottery service.

Values that operators may want to change without a code edit are read from the
environment once at import time. Bad values fail loud (RuntimeError) instead of
silently falling back.
"""

import os
from typing import Any, Dict, Optional, Tuple


def _env_int(name: str, default: int, *, minimum: int = 0) -> int:
    raw = os.environ.get(name)
    if raw is None or not str(raw).strip():
        return int(default)
    try:
        value = int(str(raw).strip())
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise RuntimeError(f"{name} must be >= {minimum}, got {value}")
    return value


# NBA lottery is commonly described in terms of 1000 combinations.
TOTAL_COMBINATIONS = 1000

# Pacing between reveals. Timing only; never feeds the sampler.
DEFAULT_DELAY_MS = _env_int("LOTTERY_DEFAULT_DELAY_MS", 1500)

DEFAULT_PLAYOFF_SPOTS = _env_int("LOTTERY_PLAYOFF_SPOTS", 6)

VERIFY_DEFAULT_ITERATIONS = 100_000

# Upper bound on league size accepted over HTTP; generated sets scale with it.
MAX_TEAMS = 64


# ---------------------------------------------------------------------------
# Combination sets
# ---------------------------------------------------------------------------
# Every table is ordered worst -> best (index 0 gets the most combinations).

NBA_12_TEAM_COMBINATIONS: Tuple[int, ...] = (
    # Seeds 13/14 (10 + 5) folded into seed 1.
    155, 140, 140, 125, 105, 90, 75, 60, 45, 30, 20, 15,
)

NBA_14_TEAM_COMBINATIONS: Tuple[int, ...] = (
    140, 140, 140,
    125,
    105,
    90,
    75,
    60,
    45,
    30,
    20,
    15,
    10,
    5,
)

# Seeds 7..12 of the 12-team table (245 total) scaled to 1000.
NBA_6_TEAM_COMBINATIONS: Tuple[int, ...] = (306, 245, 184, 122, 82, 61)

DEFAULT_COMBINATIONS: Tuple[int, ...] = NBA_12_TEAM_COMBINATIONS


COMBINATION_SETS: Dict[str, Dict[str, Any]] = {
    "NBA_6_TEAMS": {
        "name": "NBA Style (6 Teams)",
        "combinations": NBA_6_TEAM_COMBINATIONS,
        "total": TOTAL_COMBINATIONS,
        # Only non-playoff teams get slots.
        "lottery_only": True,
    },
    "NBA_12_TEAMS": {
        "name": "NBA Style (12 Teams)",
        "combinations": NBA_12_TEAM_COMBINATIONS,
        "total": TOTAL_COMBINATIONS,
        "lottery_only": False,
    },
    "NBA_14_TEAMS": {
        "name": "NBA Style (14 Teams) - Official",
        "combinations": NBA_14_TEAM_COMBINATIONS,
        "total": TOTAL_COMBINATIONS,
        "lottery_only": False,
    },
    "EQUAL": {
        "name": "Equal Distribution",
        "combinations": None,
        "total": TOTAL_COMBINATIONS,
        "lottery_only": False,
    },
    "LINEAR": {
        "name": "Linear Distribution",
        "combinations": None,
        "total": TOTAL_COMBINATIONS,
        "lottery_only": False,
    },
    "EXPONENTIAL": {
        "name": "Exponential Distribution",
        "combinations": None,
        "total": TOTAL_COMBINATIONS,
        "lottery_only": False,
    },
    "CUSTOM": {
        # User-edited per slot; seeded from the default table.
        "name": "Custom",
        "combinations": None,
        "total": TOTAL_COMBINATIONS,
        "lottery_only": False,
    },
}


def _env_combination_set(name: str, default: str) -> str:
    raw: Optional[str] = os.environ.get(name)
    key = str(raw or "").strip().upper() or default
    if key not in COMBINATION_SETS:
        raise RuntimeError(f"{name} must be one of {sorted(COMBINATION_SETS)}, got {raw!r}")
    return key


DEFAULT_COMBINATION_SET = _env_combination_set("LOTTERY_COMBINATION_SET", "NBA_6_TEAMS")
