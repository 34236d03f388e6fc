"""
Flourish timer for the Mood Detector.

After every analysis the UI shows a floating emoji for a short while. This
module schedules the one-shot callback that hides it again.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Literal, Protocol

logger = logging.getLogger(__name__)

DEFAULT_FLOURISH_SECONDS = 2.5

FlourishPolicy = Literal["debounce", "legacy"]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Delays a callback; ``asyncio`` event loops satisfy this."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class LoopScheduler:
    """Schedules on the running asyncio loop, looked up at call time."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class FlourishTimer:
    """
    Schedules the hide callback after a flourish becomes visible.

    With the ``debounce`` policy arming the timer cancels the hide that is
    still pending, so only the latest flourish decides when it disappears.
    With the ``legacy`` policy every armed hide fires, and an older one may
    hide a newer flourish early.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        delay: float = DEFAULT_FLOURISH_SECONDS,
        policy: FlourishPolicy = "debounce",
    ) -> None:
        self._scheduler = scheduler
        self._delay = delay
        self._policy = policy
        self._pending: list[TimerHandle] = []

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def policy(self) -> FlourishPolicy:
        return self._policy

    @property
    def pending(self) -> int:
        """Number of hide callbacks scheduled but not yet fired."""
        return len(self._pending)

    def arm(self, on_expire: Callable[[], None]) -> None:
        """Schedule ``on_expire`` to run once the delay has elapsed."""
        if self._policy == "debounce":
            self.cancel()

        handle: TimerHandle | None = None

        def fire() -> None:
            if handle in self._pending:
                self._pending.remove(handle)
            on_expire()

        handle = self._scheduler.call_later(self._delay, fire)
        self._pending.append(handle)
        logger.debug("Flourish hide scheduled in %ss (%d pending)", self._delay, self.pending)

    def cancel(self) -> None:
        """Cancel every pending hide callback."""
        for handle in self._pending:
            handle.cancel()
        self._pending.clear()
