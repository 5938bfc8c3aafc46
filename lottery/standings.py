from __future__ import annotations

"""Lottery standings utilities (pure).

Orders provider teams by record for seeding the lottery slots.

Ordering rules:
 - Primary key: exact win fraction (ties count as games played).
 - Secondary key: points for (lower = worse).
 - Final key: team_id, so equal records always produce the same order.

Playoff split:
 - The top `playoff_spots` teams by best -> worst ordering make the playoffs
   (a tie for the last spot goes to the team with more points for).
 - Everyone else is a lottery team, returned worst -> best.
"""

from fractions import Fraction
from typing import Dict, Iterable, List, Sequence, Tuple

from .types import LotteryTeam


def win_percentage(team: LotteryTeam) -> float:
    return float(team.win_fraction)


def format_record(team: LotteryTeam) -> str:
    record = f"{int(team.wins)}-{int(team.losses)}"
    if int(team.ties) > 0:
        record += f"-{int(team.ties)}"
    return record


def _worst_first_key(team: LotteryTeam) -> Tuple[Fraction, float, str]:
    return (team.win_fraction, float(team.points_for), team.team_id)


def sort_teams_worst_to_best(teams: Iterable[LotteryTeam]) -> List[LotteryTeam]:
    """Return teams sorted worst -> best (win%, then points for)."""
    return sorted(list(teams), key=_worst_first_key)


def sort_teams_best_to_worst(teams: Iterable[LotteryTeam]) -> List[LotteryTeam]:
    """Return teams sorted best -> worst (win%, then points for)."""
    return list(reversed(sort_teams_worst_to_best(teams)))


def split_playoff_and_lottery_teams(
    teams: Sequence[LotteryTeam],
    playoff_spots: int,
) -> Tuple[List[LotteryTeam], List[LotteryTeam]]:
    """Return (playoff_teams best -> worst, lottery_teams worst -> best)."""
    if not teams:
        return [], []
    spots = max(0, int(playoff_spots))
    best_first = sort_teams_best_to_worst(teams)
    playoff_teams = best_first[:spots]
    lottery_teams = sort_teams_worst_to_best(best_first[spots:])
    return playoff_teams, lottery_teams


def group_tied_teams(teams_worst_to_best: Sequence[LotteryTeam]) -> List[Tuple[Fraction, List[LotteryTeam]]]:
    """Group consecutive teams with identical win fraction.

    Input must already be ordered; grouping preserves that order so it can be
    aligned with slot indices.
    """
    groups: List[Tuple[Fraction, List[LotteryTeam]]] = []
    for team in teams_worst_to_best:
        frac = team.win_fraction
        if groups and groups[-1][0] == frac:
            groups[-1][1].append(team)
        else:
            groups.append((frac, [team]))
    return groups


def records_by_team(teams: Iterable[LotteryTeam]) -> Dict[str, str]:
    return {t.team_id: format_record(t) for t in teams}
