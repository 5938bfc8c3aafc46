from __future__ import annotations

"""Paced reveal of a computed lottery result.

The draw happens once, up front (lottery.sampler.run_lottery). This module only
replays the finished selections with a delay between notifications, so pacing
can never change who gets which pick.

Skip:
  RevealState.skip() stops the pacing; every selection not yet revealed is
  delivered immediately, in the same order.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Union

from config import DEFAULT_DELAY_MS

from .types import LotteryResult, LotterySelection


logger = logging.getLogger(__name__)

RevealCallback = Callable[[LotterySelection], Union[None, Awaitable[None]]]


@dataclass(slots=True)
class RevealState:
    """Per-run presentation state. Create a new one for every run."""

    revealed: List[LotterySelection] = field(default_factory=list)
    running: bool = False
    skipped: bool = False
    complete: bool = False
    _skip_event: Optional[asyncio.Event] = None

    def skip(self) -> None:
        self.skipped = True
        if self._skip_event is not None:
            self._skip_event.set()

    def reset(self) -> None:
        self.revealed = []
        self.running = False
        self.skipped = False
        self.complete = False
        self._skip_event = None


async def _pause(state: RevealState, delay_ms: int) -> None:
    if delay_ms <= 0 or state.skipped or state._skip_event is None:
        return
    try:
        await asyncio.wait_for(state._skip_event.wait(), timeout=delay_ms / 1000.0)
    except asyncio.TimeoutError:
        pass


async def reveal_selections(
    result: LotteryResult,
    on_reveal: Optional[RevealCallback] = None,
    *,
    delay_ms: int = DEFAULT_DELAY_MS,
    state: Optional[RevealState] = None,
    display_order: bool = False,
) -> List[LotterySelection]:
    """Replay `result` with `delay_ms` between reveals.

    Parameters
    ----------
    on_reveal:
        Called (or awaited, if it returns an awaitable) once per selection.
    state:
        Presentation state; call state.skip() from elsewhere to flush.
    display_order:
        Reveal worst pick first (winner last) instead of pick 1 first.

    Returns
    -------
    List[LotterySelection]
        The revealed selections, identical to the result's ordering.
    """
    st = state if state is not None else RevealState()
    st.revealed = []
    st.running = True
    st.complete = False
    st._skip_event = asyncio.Event()
    if st.skipped:
        st._skip_event.set()

    delay = max(0, int(delay_ms))
    ordered = result.display_order() if display_order else result.selection_order()

    try:
        for i, selection in enumerate(ordered):
            if i > 0:
                await _pause(st, delay)
            st.revealed.append(selection)
            if on_reveal is not None:
                ret = on_reveal(selection)
                if asyncio.iscoroutine(ret) or isinstance(ret, asyncio.Future):
                    await ret
        st.complete = True
    finally:
        st.running = False

    if st.skipped:
        logger.info("LOTTERY_REVEAL_SKIPPED revealed=%s", len(st.revealed))
    return list(st.revealed)
