from __future__ import annotations

import pytest

from config import COMBINATION_SETS, NBA_12_TEAM_COMBINATIONS, NBA_14_TEAM_COMBINATIONS
from lottery.combinations import (
    _absorb_drift,
    calculate_percentages,
    calculate_total_combinations,
    fixed_table_combinations,
    generate_equal_combinations,
    generate_exponential_combinations,
    generate_linear_combinations,
    get_combination_set,
    get_default_combinations,
    is_lottery_only,
    list_combination_sets,
    validate_combinations,
)


GENERATORS = [generate_equal_combinations, generate_linear_combinations, generate_exponential_combinations]


@pytest.mark.parametrize("gen", GENERATORS)
@pytest.mark.parametrize("num_teams", [1, 2, 3, 6, 7, 10, 12, 14, 20, 32])
@pytest.mark.parametrize("total", [0, 1, 7, 10, 100, 1000, 1001])
def test_generated_sets_sum_exactly(gen, num_teams, total):
    combos = gen(num_teams, total)
    assert len(combos) == num_teams
    assert sum(combos) == total
    assert all(isinstance(c, int) and c >= 0 for c in combos)


def test_equal_gives_remainder_to_worst_teams():
    assert generate_equal_combinations(3, 1000) == [334, 333, 333]
    assert generate_equal_combinations(4, 10) == [3, 3, 2, 2]


def test_linear_known_values():
    assert generate_linear_combinations(4, 1000) == [400, 300, 200, 100]
    # 3+2+2+1+1+0 = 9 after rounding; the missing unit goes to the worst team.
    assert generate_linear_combinations(6, 10) == [4, 2, 2, 1, 1, 0]


def test_exponential_known_values():
    assert generate_exponential_combinations(4, 1000) == [533, 267, 133, 67]
    assert generate_exponential_combinations(1, 1000) == [1000]


@pytest.mark.parametrize("gen", GENERATORS)
def test_generators_reject_bad_arguments(gen):
    with pytest.raises(ValueError):
        gen(0, 1000)
    with pytest.raises(ValueError):
        gen(3, -1)


def test_drift_excess_never_goes_negative():
    assert _absorb_drift([0, 2, 1], 1) == [0, 0, 1]
    assert _absorb_drift([5, 5], 12) == [7, 5]


def test_fixed_table_prefix_and_extension():
    assert fixed_table_combinations(NBA_14_TEAM_COMBINATIONS, 4) == [140, 140, 140, 125]
    assert fixed_table_combinations(NBA_14_TEAM_COMBINATIONS, 16) == list(NBA_14_TEAM_COMBINATIONS) + [4, 3]
    assert fixed_table_combinations([1], 4) == [1, 1, 1, 1]
    assert fixed_table_combinations(NBA_14_TEAM_COMBINATIONS, 0) == []


def test_default_combinations_follow_12_team_table():
    assert get_default_combinations(12) == list(NBA_12_TEAM_COMBINATIONS)
    assert get_default_combinations(3) == [155, 140, 140]
    assert get_default_combinations(13) == list(NBA_12_TEAM_COMBINATIONS) + [12]


def test_combination_set_lookup():
    assert get_combination_set("NBA_14_TEAMS", 14) == list(NBA_14_TEAM_COMBINATIONS)
    assert get_combination_set("nba_6_teams", 8) == [306, 245, 184, 122, 82, 61, 48, 38]
    assert get_combination_set("EQUAL", 3) == [334, 333, 333]
    assert get_combination_set("LINEAR", 4) == [400, 300, 200, 100]


@pytest.mark.parametrize("key", ["CUSTOM", "NOPE", "", None])
def test_custom_and_unknown_sets_use_default_table(key):
    assert get_combination_set(key, 5) == get_default_combinations(5)


def test_lottery_only_flags():
    assert is_lottery_only("NBA_6_TEAMS") is True
    assert is_lottery_only("NBA_14_TEAMS") is False
    assert is_lottery_only("CUSTOM") is False
    assert is_lottery_only("missing") is False


def test_list_combination_sets_covers_registry():
    sets = list_combination_sets()
    assert [s["key"] for s in sets] == list(COMBINATION_SETS)
    nba14 = next(s for s in sets if s["key"] == "NBA_14_TEAMS")
    assert nba14["combinations"] == list(NBA_14_TEAM_COMBINATIONS)
    assert sum(nba14["combinations"]) == nba14["total"] == 1000


def test_percentages():
    assert calculate_percentages([70, 20, 5, 5]) == pytest.approx([70.0, 20.0, 5.0, 5.0])
    assert calculate_percentages([0, 0]) == [0.0, 0.0]
    assert calculate_total_combinations([3, None, 4]) == 7


@pytest.mark.parametrize(
    "value,message",
    [
        ("1,2", "Combinations must be an array"),
        ([], "At least one team required"),
        ([5, -1], "All combination values must be non-negative numbers"),
        ([5, "x"], "All combination values must be non-negative numbers"),
        ([0, 0, 0], "Total combinations cannot be zero"),
    ],
)
def test_validate_combinations_rejects(value, message):
    assert validate_combinations(value) == (False, message)


def test_validate_combinations_accepts():
    assert validate_combinations([140, 140, 0]) == (True, None)
