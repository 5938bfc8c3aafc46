from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException

from config import NBA_14_TEAM_COMBINATIONS
from lottery.combinations import (
    calculate_percentages,
    calculate_total_combinations,
    get_combination_set,
    list_combination_sets,
    validate_combinations,
)
from lottery.errors import LotteryError, is_client_error
from lottery.sampler import run_lottery
from lottery.slots import build_lottery_slots, entries_from_slots
from lottery.standings import records_by_team, split_playoff_and_lottery_teams
from lottery.types import LotteryEntry, LotterySlot, LotteryTeam
from lottery.verification import verify_lottery_probabilities
from app.schemas.lottery import (
    CombinationsRequest,
    LotteryRunRequest,
    LotterySlotsRequest,
    LotterySlotsRunRequest,
    LotteryVerifyRequest,
    TeamPayload,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_team(p: TeamPayload) -> LotteryTeam:
    return LotteryTeam.from_provider_record(p.model_dump())


def _lottery_http_error(exc: LotteryError) -> HTTPException:
    status = 400 if is_client_error(exc) else 500
    return HTTPException(status_code=status, detail={"code": exc.code, "message": exc.message})


@router.get("/health")
async def health():
    return {"ok": True}


@router.get("/api/lottery/combination-sets")
async def api_lottery_combination_sets():
    return {"sets": list_combination_sets()}


@router.post("/api/lottery/combinations")
async def api_lottery_combinations(req: CombinationsRequest):
    combos = get_combination_set(req.set_key, int(req.num_teams))
    return {
        "set_key": str(req.set_key).upper(),
        "combinations": combos,
        "total": calculate_total_combinations(combos),
        "percentages": calculate_percentages(combos),
    }


@router.post("/api/lottery/slots")
async def api_lottery_slots(req: LotterySlotsRequest):
    """Seat teams into slots for a combination set (worst -> best)."""
    teams = [_to_team(t) for t in req.teams]
    if not teams:
        raise HTTPException(status_code=400, detail="Please load teams first")

    try:
        slots = build_lottery_slots(
            teams,
            set_key=req.combination_set,
            playoff_spots=int(req.playoff_spots),
            share_ties=bool(req.share_ties),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    playoff_teams, lottery_teams = split_playoff_and_lottery_teams(teams, int(req.playoff_spots))
    return {
        "combination_set": str(req.combination_set).upper(),
        "slots": [s.to_dict() for s in slots],
        "percentages": calculate_percentages([s.combinations for s in slots]),
        "playoff_team_ids": [t.team_id for t in playoff_teams],
        "lottery_team_ids": [t.team_id for t in lottery_teams],
        "records": records_by_team(teams),
    }


@router.post("/api/lottery/run")
async def api_lottery_run(req: LotteryRunRequest):
    """Run the full-order lottery (pick 1 first; display order = reverse)."""
    entries = [LotteryEntry(team=_to_team(e.team), combinations=int(e.combinations)) for e in req.entries]
    try:
        result = run_lottery(entries, rng_seed=req.rng_seed, include_audit=bool(req.include_audit))
    except LotteryError as e:
        if not is_client_error(e):
            logger.exception("LOTTERY_RUN_FAILED code=%s", e.code)
        raise _lottery_http_error(e)
    return {"ok": True, "result": result.to_dict()}


@router.post("/api/lottery/verify")
async def api_lottery_verify(req: LotteryVerifyRequest):
    combos: List[int] = list(req.combinations) if req.combinations else list(NBA_14_TEAM_COMBINATIONS)
    ok, error = validate_combinations(combos)
    if not ok:
        raise HTTPException(status_code=400, detail=error)

    try:
        report = verify_lottery_probabilities(int(req.iterations), combos, rng_seed=req.rng_seed)
    except LotteryError as e:
        raise _lottery_http_error(e)

    out: Dict[str, Any] = report.to_dict()
    out["tolerance"] = float(req.tolerance)
    out["passed"] = bool(report.within(float(req.tolerance)))
    return out


@router.post("/api/lottery/slots/run")
async def api_lottery_slots_run(req: LotterySlotsRunRequest):
    """Run the lottery from (possibly user-edited) slots.

    LotteryError (unassigned slots, unknown team, zero total) is mapped by the
    app-level handler.
    """
    teams = [_to_team(t) for t in req.teams]
    slots = [LotterySlot(slot_id=s.slot_id, combinations=s.combinations, team_id=s.team_id) for s in req.slots]
    entries = entries_from_slots(slots, teams)
    result = run_lottery(entries, rng_seed=req.rng_seed, include_audit=bool(req.include_audit))
    return {"ok": True, "result": result.to_dict()}
