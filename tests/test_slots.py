from __future__ import annotations

import pytest

from config import NBA_14_TEAM_COMBINATIONS
from lottery.errors import LOTTERY_NO_ASSIGNED_SLOTS, LOTTERY_UNKNOWN_TEAM, LotteryError
from lottery.slots import (
    assign_team_to_slot,
    build_lottery_slots,
    entries_from_slots,
    set_slot_combinations,
    share_tied_combinations,
    swap_slot_teams,
)
from lottery.standings import sort_teams_worst_to_best
from lottery.types import LotterySlot, LotteryTeam


def test_lottery_only_set_seats_non_playoff_teams(league_teams):
    slots = build_lottery_slots(league_teams, set_key="NBA_6_TEAMS", playoff_spots=6)
    assert [s.team_id for s in slots] == ["u8", "u7"]
    assert [s.combinations for s in slots] == [306, 245]
    assert [s.slot_id for s in slots] == [0, 1]


def test_full_league_set_seats_everyone(league_teams):
    slots = build_lottery_slots(league_teams, set_key="NBA_14_TEAMS", playoff_spots=6)
    assert [s.team_id for s in slots] == ["u8", "u7", "u6", "u5", "u4", "u3", "u2", "u1"]
    assert [s.combinations for s in slots] == list(NBA_14_TEAM_COMBINATIONS[:8])


def test_no_lottery_teams_gives_no_slots(league_teams):
    assert build_lottery_slots(league_teams, set_key="NBA_6_TEAMS", playoff_spots=8) == []


def test_tied_teams_share_occupied_slots(league_teams):
    slots = build_lottery_slots(league_teams, set_key="NBA_6_TEAMS", playoff_spots=2, share_ties=True)
    by_team = {s.team_id: s.combinations for s in slots}
    # u6 and u5 are both 7-7 and sit in the 184 and 122 slots.
    assert by_team["u6"] == by_team["u5"] == 153
    assert sum(s.combinations for s in slots) == 1000


def test_share_tied_combinations_remainder_and_audit():
    teams = [
        LotteryTeam(team_id="a", wins=1, losses=3),
        LotteryTeam(team_id="b", wins=1, losses=3),
        LotteryTeam(team_id="c", wins=1, losses=3),
        LotteryTeam(team_id="d", wins=3, losses=1),
    ]
    combos, audit = share_tied_combinations(teams, [100, 90, 60, 10])
    assert combos == [84, 83, 83, 10]
    assert len(audit) == 1
    assert audit[0]["teams"] == ["a", "b", "c"]
    assert audit[0]["slot_range"] == [0, 2]
    assert audit[0]["total_combinations"] == 250

    with pytest.raises(ValueError):
        share_tied_combinations(teams, [1, 2])


def test_swap_slot_teams(league_teams):
    slots = build_lottery_slots(league_teams, set_key="NBA_14_TEAMS", playoff_spots=0)
    swap_slot_teams(slots, 0, 7)
    assert slots[0].team_id == "u1"
    assert slots[7].team_id == "u8"
    assert slots[0].combinations == 140


def test_assign_moves_displaced_team_to_vacated_slot():
    slots = [LotterySlot(0, 300, "a"), LotterySlot(1, 200, "b"), LotterySlot(2, 100, None)]
    assign_team_to_slot(slots, "b", 0)
    assert [s.team_id for s in slots] == ["b", "a", None]

    assign_team_to_slot(slots, "z", 2)
    assert slots[2].team_id == "z"

    assign_team_to_slot(slots, None, 1)
    assert slots[1].team_id is None

    with pytest.raises(ValueError):
        assign_team_to_slot(slots, "a", 99)


def test_set_slot_combinations():
    slots = [LotterySlot(0, 300, "a")]
    set_slot_combinations(slots, 0, 55)
    assert slots[0].combinations == 55
    with pytest.raises(ValueError):
        set_slot_combinations(slots, 0, -5)


def test_entries_from_slots_skips_empty_slots(league_teams):
    slots = [LotterySlot(0, 300, "u8"), LotterySlot(1, 200, None), LotterySlot(2, 100, "u7")]
    entries = entries_from_slots(slots, league_teams)
    assert [(e.team_id, e.combinations) for e in entries] == [("u8", 300), ("u7", 100)]

    by_id = {t.team_id: t for t in league_teams}
    assert entries_from_slots(slots, by_id) == entries


def test_entries_from_slots_errors(league_teams):
    with pytest.raises(LotteryError) as ei:
        entries_from_slots([LotterySlot(0, 10, "ghost")], league_teams)
    assert ei.value.code == LOTTERY_UNKNOWN_TEAM

    with pytest.raises(LotteryError) as ei:
        entries_from_slots([LotterySlot(0, 10), LotterySlot(1, 5)], league_teams)
    assert ei.value.code == LOTTERY_NO_ASSIGNED_SLOTS
    assert ei.value.message == "No teams assigned to lottery slots. Please assign teams to slots."


def test_slot_order_feeds_sampler_order(league_teams):
    slots = build_lottery_slots(league_teams, set_key="NBA_14_TEAMS", playoff_spots=0)
    entries = entries_from_slots(slots, league_teams)
    assert [e.team for e in entries] == sort_teams_worst_to_best(league_teams)
