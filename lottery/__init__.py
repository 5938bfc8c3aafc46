"""Draft lottery package.

Modules:
  - types        : core domain dataclasses (LotteryTeam, LotteryEntry, LotteryResult, ...)
  - errors       : structured LotteryError + stable error codes
  - sampler      : Plackett-Luce full-order draw (pure)
  - combinations : combination tables and generators (pure)
  - standings    : record ordering and playoff/lottery split (pure)
  - slots        : slot seating, tie sharing, manual reassignment
  - reveal       : paced replay of a computed result (asyncio)
  - verification : exact odds + Monte Carlo checks against published odds
"""

from __future__ import annotations

from .errors import LotteryError
from .sampler import draw_one, run_lottery
from .types import LotteryEntry, LotteryResult, LotterySelection, LotterySlot, LotteryTeam

__all__ = [
    "LotteryError",
    "LotteryEntry",
    "LotteryResult",
    "LotterySelection",
    "LotterySlot",
    "LotteryTeam",
    "draw_one",
    "run_lottery",
]
