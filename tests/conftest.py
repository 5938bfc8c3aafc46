from __future__ import annotations

from typing import List, Sequence

import pytest

from lottery.types import LotteryEntry, LotteryTeam


def make_entries(combinations: Sequence[int]) -> List[LotteryEntry]:
    return [
        LotteryEntry(
            team=LotteryTeam(team_id=f"t{i}", display_name=f"Team {i}"),
            combinations=c,
        )
        for i, c in enumerate(combinations)
    ]


@pytest.fixture
def league_teams() -> List[LotteryTeam]:
    # 8-team league, ids ordered best -> worst by record.
    rows = [
        ("u1", "Gridiron Gurus", 11, 3, 0, 1650.4),
        ("u2", "Bench Mob", 10, 4, 0, 1601.0),
        ("u3", "Taco Corp", 9, 5, 0, 1588.2),
        ("u4", "Waiver Wire", 8, 6, 0, 1502.9),
        ("u5", "Fumble Kings", 7, 7, 0, 1499.5),
        ("u6", "Sunday Scaries", 7, 7, 0, 1430.0),
        ("u7", "Punt Return", 5, 8, 1, 1388.8),
        ("u8", "Last Place Larry", 2, 12, 0, 1205.3),
    ]
    return [
        LotteryTeam(team_id=tid, display_name=name, wins=w, losses=l, ties=t, points_for=pf)
        for tid, name, w, l, t, pf in rows
    ]
