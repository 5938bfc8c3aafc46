from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class LotteryError(Exception):
    """Structured error for lottery runs.

    The server layer maps these to HTTP 4xx/5xx while keeping a stable
    machine-readable code for client/UI.
    """

    code: str
    message: str
    details: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}"


# Error codes (stable API surface)
LOTTERY_EMPTY_INPUT = "LOTTERY_EMPTY_INPUT"
LOTTERY_EMPTY_POOL = "LOTTERY_EMPTY_POOL"
LOTTERY_ZERO_TOTAL_WEIGHT = "LOTTERY_ZERO_TOTAL_WEIGHT"
LOTTERY_INVALID_ENTITY = "LOTTERY_INVALID_ENTITY"
LOTTERY_INVALID_WEIGHT = "LOTTERY_INVALID_WEIGHT"
LOTTERY_NO_ASSIGNED_SLOTS = "LOTTERY_NO_ASSIGNED_SLOTS"
LOTTERY_UNKNOWN_TEAM = "LOTTERY_UNKNOWN_TEAM"


class EmptyInputError(LotteryError):
    def __init__(self, message: str = "Cannot run lottery with empty teams list", details: Optional[Any] = None) -> None:
        super().__init__(LOTTERY_EMPTY_INPUT, message, details)


class EmptyPoolError(LotteryError):
    def __init__(self, message: str = "Cannot select from empty pool", details: Optional[Any] = None) -> None:
        super().__init__(LOTTERY_EMPTY_POOL, message, details)


class ZeroTotalWeightError(LotteryError):
    def __init__(self, message: str = "Total combinations cannot be zero", details: Optional[Any] = None) -> None:
        super().__init__(LOTTERY_ZERO_TOTAL_WEIGHT, message, details)


class InvalidWeightError(LotteryError):
    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(LOTTERY_INVALID_WEIGHT, message, details)


class InvalidEntityError(LotteryError):
    # Internal consistency failure, not a user input problem.
    def __init__(self, message: str = "Invalid team selected during lottery", details: Optional[Any] = None) -> None:
        super().__init__(LOTTERY_INVALID_ENTITY, message, details)


_INTERNAL_CODES = frozenset({LOTTERY_INVALID_ENTITY})


def is_client_error(exc: LotteryError) -> bool:
    """True when the error is caused by the request (maps to HTTP 400)."""
    return str(exc.code) not in _INTERNAL_CODES
