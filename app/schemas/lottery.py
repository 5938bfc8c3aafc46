from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from config import DEFAULT_COMBINATION_SET, DEFAULT_PLAYOFF_SPOTS, MAX_TEAMS, VERIFY_DEFAULT_ITERATIONS


class TeamPayload(BaseModel):
    # Provider record shape.
    id: str
    displayName: str = ""
    imageRef: Optional[str] = None
    wins: int = 0
    losses: int = 0
    ties: int = 0
    pointsFor: float = 0.0
    pointsAgainst: Optional[float] = None


class LotteryEntryPayload(BaseModel):
    team: TeamPayload
    combinations: int


class CombinationsRequest(BaseModel):
    set_key: str = DEFAULT_COMBINATION_SET
    num_teams: int = Field(..., ge=1, le=MAX_TEAMS)


class LotterySlotsRequest(BaseModel):
    teams: List[TeamPayload] = Field(default_factory=list)
    combination_set: str = DEFAULT_COMBINATION_SET
    playoff_spots: int = Field(DEFAULT_PLAYOFF_SPOTS, ge=0)
    share_ties: bool = False


class LotteryRunRequest(BaseModel):
    entries: List[LotteryEntryPayload] = Field(default_factory=list)
    rng_seed: Optional[int] = None
    include_audit: bool = False


class LotteryVerifyRequest(BaseModel):
    combinations: Optional[List[int]] = None  # default: official 14-team table
    iterations: int = Field(VERIFY_DEFAULT_ITERATIONS, ge=1, le=1_000_000)
    rng_seed: Optional[int] = None
    tolerance: float = 0.5


class SlotPayload(BaseModel):
    slot_id: int
    combinations: int = Field(..., ge=0)
    team_id: Optional[str] = None


class LotterySlotsRunRequest(BaseModel):
    teams: List[TeamPayload] = Field(default_factory=list)
    slots: List[SlotPayload] = Field(default_factory=list)
    rng_seed: Optional[int] = None
    include_audit: bool = False
