"""
Countdown Timer - per-question auto-submit.

One countdown lives for exactly one question. Re-arming always cancels
the previous countdown first, and every run carries a generation number
so a countdown whose cancellation has not been processed yet can never
fire for a newer question.
"""

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class CountdownTimer:
    """
    Ticks once per `tick_seconds` from the question's time budget down to
    zero, then calls `on_expire(turn)` once and stops.
    """

    def __init__(
        self,
        on_expire: Callable[[int], Awaitable[None]],
        on_tick: Callable[[int], Awaitable[None]] | None = None,
        tick_seconds: float = 1.0,
    ):
        self._on_expire = on_expire
        self._on_tick = on_tick
        self.tick_seconds = tick_seconds
        self._task: asyncio.Task | None = None
        self._generation = 0
        self.remaining_seconds = 0
        self.turn: int | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def arm(self, seconds: int, turn: int) -> None:
        """Start counting down for the question of `turn`. 0 means untimed."""
        self.cancel()
        if seconds <= 0:
            return
        self.remaining_seconds = seconds
        self.turn = turn
        self._task = asyncio.create_task(self._run(seconds, turn, self._generation))
        logger.debug(f"Countdown armed: {seconds}s for turn {turn}")

    def cancel(self) -> None:
        """Stop the current countdown, if any. Safe to call repeatedly."""
        self._generation += 1
        task, self._task = self._task, None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
        self.remaining_seconds = 0
        self.turn = None

    async def _run(self, seconds: int, turn: int, generation: int) -> None:
        remaining = seconds
        while remaining > 0:
            await asyncio.sleep(self.tick_seconds)
            if generation != self._generation:
                return
            remaining -= 1
            self.remaining_seconds = remaining
            if self._on_tick is not None and remaining > 0:
                try:
                    await self._on_tick(remaining)
                except Exception as e:
                    logger.error(f"Countdown tick callback error: {e}")

        if generation != self._generation:
            return

        # Detach before expiring so the submission can re-arm freely
        self._task = None
        self.turn = None
        logger.info(f"Countdown expired for turn {turn}, auto-submitting")
        await self._on_expire(turn)
