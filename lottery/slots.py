from __future__ import annotations

"""Lottery slot assignment (weight assignment layer).

Slots carry combinations (worst -> best); teams are placed into slots from
their record and can then be moved around by the user before the draw.

Flow:
  1) build_lottery_slots()   -> slots seeded from a combination set
  2) swap/assign/set helpers -> manual reassignment (mutating)
  3) entries_from_slots()    -> LotteryEntry list for lottery.sampler
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .combinations import get_combination_set, is_lottery_only
from .errors import LOTTERY_NO_ASSIGNED_SLOTS, LOTTERY_UNKNOWN_TEAM, LotteryError
from .standings import group_tied_teams, sort_teams_worst_to_best, split_playoff_and_lottery_teams
from .types import LotteryEntry, LotterySlot, LotteryTeam, TeamId, norm_team_id


def share_tied_combinations(
    teams_worst_to_best: Sequence[LotteryTeam],
    combinations: Sequence[int],
) -> Tuple[List[int], List[Dict[str, Any]]]:
    """Split combinations evenly across teams tied on record.

    NBA ties are resolved via random drawings, but tied teams *share* the
    combinations of the seed slots they occupy:
      - group consecutive tied teams along the given order,
      - sum the base combinations across the occupied slots,
      - split them evenly across the tied teams,
      - assign any remainder to earlier teams in order.

    Returns
    -------
    (combinations, audit)
        combinations: list aligned with teams_worst_to_best.
        audit: details about tie groups and splits.
    """
    base = [int(c) for c in combinations]
    if len(base) != len(teams_worst_to_best):
        raise ValueError(
            f"combinations must align with teams ({len(base)} != {len(teams_worst_to_best)})"
        )

    out: List[int] = []
    audit_groups: List[Dict[str, Any]] = []

    cursor = 0
    for frac, group in group_tied_teams(teams_worst_to_best):
        k = len(group)
        start = cursor
        end = cursor + k

        total = int(sum(base[start:end]))
        per, rem = divmod(total, k)

        assigned: Dict[str, int] = {}
        for j, team in enumerate(group):
            c = int(per + (1 if j < rem else 0))
            out.append(c)
            assigned[team.team_id] = c

        if k > 1:
            audit_groups.append(
                {
                    "win_fraction": f"{frac.numerator}/{frac.denominator}",
                    "teams": [t.team_id for t in group],
                    "slot_range": [int(start), int(end - 1)],
                    "base_combinations": list(base[start:end]),
                    "total_combinations": int(total),
                    "split": dict(assigned),
                }
            )

        cursor = end

    return out, audit_groups


def build_lottery_slots(
    teams: Sequence[LotteryTeam],
    *,
    set_key: str,
    playoff_spots: int,
    share_ties: bool = False,
) -> List[LotterySlot]:
    """Create slots for a combination set and seat teams worst -> best.

    Lottery-only sets seat only non-playoff teams; other sets seat everyone.
    A slot whose table value is 0 gets 1 combination so it stays drawable.
    """
    if is_lottery_only(set_key):
        _, seated = split_playoff_and_lottery_teams(teams, playoff_spots)
    else:
        seated = sort_teams_worst_to_best(teams)

    if not seated:
        return []

    combos = get_combination_set(set_key, len(seated))
    if share_ties:
        combos, _ = share_tied_combinations(seated, combos)

    return [
        LotterySlot(slot_id=i, combinations=(int(c) or 1), team_id=seated[i].team_id)
        for i, c in enumerate(combos)
    ]


def _slot_index(slots: Sequence[LotterySlot], slot_id: int) -> int:
    for i, s in enumerate(slots):
        if int(s.slot_id) == int(slot_id):
            return i
    raise ValueError(f"unknown slot_id: {slot_id}")


def swap_slot_teams(slots: List[LotterySlot], slot_a: int, slot_b: int) -> None:
    """Exchange the teams seated in two slots; combinations stay with the slots."""
    ia = _slot_index(slots, slot_a)
    ib = _slot_index(slots, slot_b)
    slots[ia].team_id, slots[ib].team_id = slots[ib].team_id, slots[ia].team_id


def assign_team_to_slot(slots: List[LotterySlot], team_id: Optional[TeamId], slot_id: int) -> None:
    """Seat team_id in slot_id, vacating any other slot it was in.

    A team previously in the target slot is moved to the vacated slot (or
    unseated when team_id was not seated anywhere).
    """
    target = _slot_index(slots, slot_id)
    tid = norm_team_id(team_id) or None
    displaced = slots[target].team_id

    source: Optional[int] = None
    if tid is not None:
        for i, s in enumerate(slots):
            if s.team_id == tid and i != target:
                source = i
                break

    slots[target].team_id = tid
    if source is not None:
        slots[source].team_id = displaced


def set_slot_combinations(slots: List[LotterySlot], slot_id: int, combinations: int) -> None:
    c = int(combinations)
    if c < 0:
        raise ValueError(f"combinations must be non-negative, got {combinations!r}")
    slots[_slot_index(slots, slot_id)].combinations = c


def entries_from_slots(
    slots: Sequence[LotterySlot],
    teams: Sequence[LotteryTeam] | Mapping[TeamId, LotteryTeam],
) -> List[LotteryEntry]:
    """Build sampler input from seated slots (slot order preserved)."""
    if isinstance(teams, Mapping):
        by_id = {norm_team_id(k): v for k, v in teams.items()}
    else:
        by_id = {t.team_id: t for t in teams}

    entries: List[LotteryEntry] = []
    for slot in slots:
        if slot.team_id is None:
            continue
        team = by_id.get(slot.team_id)
        if team is None:
            raise LotteryError(
                LOTTERY_UNKNOWN_TEAM,
                f"Slot {slot.slot_id} references unknown team {slot.team_id!r}",
                details={"slot_id": int(slot.slot_id), "team_id": slot.team_id},
            )
        entries.append(LotteryEntry(team=team, combinations=int(slot.combinations)))

    if not entries:
        raise LotteryError(
            LOTTERY_NO_ASSIGNED_SLOTS,
            "No teams assigned to lottery slots. Please assign teams to slots.",
        )
    return entries
