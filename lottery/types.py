from __future__ import annotations

"""Lottery domain types.

Imported by:
- lottery.sampler      (Plackett-Luce draw loop)
- lottery.standings    (record ordering)
- lottery.slots        (weight assignment)
- lottery.reveal       (paced presentation replay)
- app.api              (HTTP payload conversion)

Conventions:
- team_id is the provider's stable identifier (a string, compared verbatim).
- combinations are non-negative ints; index 0 of any table is the worst team.
- pick_number 1 = first drawn = most favoured outcome.
- display_position = N - pick_number + 1 (1 = least favoured, shown first).
"""

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Dict, List, Mapping, Optional, Tuple


TeamId = str


def norm_team_id(v: Any) -> str:
    """Normalize a provider id into the canonical string form."""
    return str(v if v is not None else "").strip()


def _to_int(x: Any, default: int = 0) -> int:
    try:
        if x is None or isinstance(x, bool):
            return default
        return int(x)
    except (TypeError, ValueError):
        return default


def _to_float(x: Any, default: float = 0.0) -> float:
    try:
        if x is None or isinstance(x, bool):
            return default
        return float(x)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True, slots=True)
class LotteryTeam:
    """A participant as supplied by the team data provider.

    Only team_id matters to the sampler; the rest is payload carried through
    to the result for display and for record-based ordering.
    """

    team_id: TeamId
    display_name: str = ""
    image_ref: Optional[str] = None
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: Optional[float] = None

    def __post_init__(self) -> None:
        tid = norm_team_id(self.team_id)
        object.__setattr__(self, "team_id", tid)
        object.__setattr__(self, "display_name", str(self.display_name or f"Team {tid}"))
        object.__setattr__(self, "wins", max(0, _to_int(self.wins)))
        object.__setattr__(self, "losses", max(0, _to_int(self.losses)))
        object.__setattr__(self, "ties", max(0, _to_int(self.ties)))
        object.__setattr__(self, "points_for", _to_float(self.points_for))
        if self.points_against is not None:
            object.__setattr__(self, "points_against", _to_float(self.points_against))

    @property
    def games_played(self) -> int:
        return int(self.wins + self.losses + self.ties)

    @property
    def win_fraction(self) -> Fraction:
        gp = self.games_played
        if gp <= 0:
            return Fraction(0, 1)
        return Fraction(int(self.wins), int(gp))

    @property
    def win_pct(self) -> float:
        return float(self.win_fraction)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_id": self.team_id,
            "display_name": self.display_name,
            "image_ref": self.image_ref,
            "wins": int(self.wins),
            "losses": int(self.losses),
            "ties": int(self.ties),
            "points_for": float(self.points_for),
            "points_against": None if self.points_against is None else float(self.points_against),
            "win_pct": float(self.win_pct),
        }

    @classmethod
    def from_provider_record(cls, d: Mapping[str, Any]) -> "LotteryTeam":
        """Build from a provider record (camelCase keys, as served by the provider)."""
        pa = d.get("pointsAgainst")
        return cls(
            team_id=norm_team_id(d.get("id")),
            display_name=str(d.get("displayName") or ""),
            image_ref=(str(d.get("imageRef")) if d.get("imageRef") else None),
            wins=d.get("wins") or 0,
            losses=d.get("losses") or 0,
            ties=d.get("ties") or 0,
            points_for=d.get("pointsFor") or 0.0,
            points_against=pa,
        )


@dataclass(frozen=True, slots=True)
class LotteryEntry:
    """One (team, combinations) pair handed to the sampler."""

    team: LotteryTeam
    combinations: int

    @property
    def team_id(self) -> TeamId:
        return self.team.team_id


@dataclass(frozen=True, slots=True)
class LotterySelection:
    """A single drawn record."""

    team: LotteryTeam
    combinations: int
    pick_number: int
    total_teams: int

    @property
    def display_position(self) -> int:
        return int(self.total_teams - self.pick_number + 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team": self.team.to_dict(),
            "combinations": int(self.combinations),
            "pick_number": int(self.pick_number),
            "display_position": int(self.display_position),
        }


@dataclass(frozen=True, slots=True)
class LotteryResult:
    """Result of one full-order lottery run.

    Notes:
      - selections is in draw order: [pick 1, pick 2, ..., pick N].
      - total_combinations is the pool total at the start of the run.
      - audit is optional, for debugging/telemetry.
    """

    selections: Tuple[LotterySelection, ...]
    total_combinations: int
    rng_seed: Optional[int] = None
    audit: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.selections)

    def selection_order(self) -> List[LotterySelection]:
        return list(self.selections)

    def display_order(self) -> List[LotterySelection]:
        """Worst pick first, winner last."""
        return list(reversed(self.selections))

    def winner(self) -> LotterySelection:
        return self.selections[0]

    def pick_for(self, team_id: TeamId) -> Optional[int]:
        tid = norm_team_id(team_id)
        for s in self.selections:
            if s.team.team_id == tid:
                return int(s.pick_number)
        return None

    def pick_order(self) -> List[TeamId]:
        return [s.team.team_id for s in self.selections]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rng_seed": None if self.rng_seed is None else int(self.rng_seed),
            "total_combinations": int(self.total_combinations),
            "selection_order": [s.to_dict() for s in self.selections],
            "display_order": [s.to_dict() for s in self.display_order()],
            "audit": dict(self.audit) if isinstance(self.audit, dict) else {},
        }


@dataclass(slots=True)
class LotterySlot:
    """A weight slot (worst -> best) that a team can be assigned to.

    Slots hold the combinations; teams are moved between slots by the caller.
    """

    slot_id: int
    combinations: int
    team_id: Optional[TeamId] = None

    def __post_init__(self) -> None:
        self.slot_id = int(self.slot_id)
        self.combinations = max(0, _to_int(self.combinations))
        if self.team_id is not None:
            self.team_id = norm_team_id(self.team_id) or None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slot_id": int(self.slot_id),
            "combinations": int(self.combinations),
            "team_id": self.team_id,
        }
