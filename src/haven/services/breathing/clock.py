"""
Session Clock

Single monotonic tick source for an active breathing session.

ARCHITECTURE: Ticks are scheduled against absolute deadlines
(start + n * interval) on the event loop clock, so scheduling jitter
never accumulates into drift. A generation counter makes stop()
race-free: a tick already running may finish, but a sleeping tick
that wakes after stop() sees a stale generation and exits.
"""

import asyncio
from typing import Callable, Optional, Protocol

from haven.config.logging_config import get_logger
from haven.domain.errors import ClockUnavailable

logger = get_logger(__name__)

TickCallback = Callable[[], None]


class SessionClock(Protocol):
    """Tick source consumed by the breathing engine."""

    @property
    def is_running(self) -> bool:
        ...

    def start(self) -> None:
        """Begin ticking; no-op if already running."""
        ...

    def stop(self) -> None:
        """Stop ticking; no tick is scheduled after this returns."""
        ...


class AsyncioSessionClock:
    """
    Session clock backed by an asyncio task.

    Usage:
        clock = AsyncioSessionClock(on_tick=on_tick, interval_seconds=1.0)
        clock.start()   # from inside a running event loop
        ...
        clock.stop()
    """

    def __init__(
        self,
        on_tick: Optional[TickCallback] = None,
        interval_seconds: float = 1.0,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._on_tick = on_tick
        self._interval = interval_seconds
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        if self._on_tick is None:
            raise ClockUnavailable("Session clock has no tick callback bound")

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise ClockUnavailable("No running event loop to schedule ticks on") from e

        self._generation += 1
        self._task = loop.create_task(
            self._run(self._generation),
            name=f"session-clock-{self._generation}",
        )
        logger.debug("Session clock started", generation=self._generation)

    def stop(self) -> None:
        self._generation += 1
        task, self._task = self._task, None
        if task is None or task.done():
            return

        # stop() may be called from inside our own tick (session completed);
        # the generation bump alone ends the loop in that case.
        if task is not _current_task():
            task.cancel()
        logger.debug("Session clock stopped", generation=self._generation)

    async def _run(self, generation: int) -> None:
        loop = asyncio.get_running_loop()
        started_at = loop.time()
        ticks = 0

        while generation == self._generation:
            ticks += 1
            deadline = started_at + ticks * self._interval
            await asyncio.sleep(max(0.0, deadline - loop.time()))

            if generation != self._generation:
                break
            self._on_tick()


def _current_task() -> Optional[asyncio.Task]:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None
