"""
Presentation state storage for the Mood Detector.

This module provides an in-memory store for the current presentation state
that notifies synchronous observers and streams updates to any number of
async subscribers. The presenter is its only writer.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager

from .models import PresentationState

logger = logging.getLogger(__name__)

Observer = Callable[[PresentationState], None]


class PresentationStore:
    """
    In-memory presentation state with observer and streaming support.

    Streaming uses event-based signaling instead of queues: every publish
    sets the current event and replaces it with a fresh one, waking all
    waiting subscribers, which then read the latest state. Publishing is
    synchronous so it can be called from plain callbacks on the event loop.
    """

    def __init__(self, initial: PresentationState) -> None:
        self._current_state = initial
        self._observers: list[Observer] = []
        self._changed = asyncio.Event()

    def publish(self, state: PresentationState) -> PresentationState:
        """
        Replace the current state and notify observers and subscribers.

        Args:
            state: The new state

        Returns:
            The state that was published
        """
        self._current_state = state

        # Wake all waiting subscribers
        changed, self._changed = self._changed, asyncio.Event()
        changed.set()

        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                logger.exception("Presentation observer %r failed", observer)

        return state

    def read(self) -> PresentationState:
        """Get the current presentation state."""
        return self._current_state

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register a callback invoked with every published state.

        Returns:
            A function that removes the observer again
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    @asynccontextmanager
    async def stream(
        self,
    ) -> AsyncGenerator[AsyncGenerator[PresentationState, None], None]:
        """
        Stream state updates to a subscriber.

        This context manager yields an async generator that produces the
        current state first and then every newer state. A subscriber that
        falls behind skips straight to the latest state.

        Yields:
            An async generator of PresentationState objects
        """

        async def state_generator() -> AsyncGenerator[PresentationState, None]:
            changed = self._changed
            last_seen = self._current_state
            yield last_seen

            try:
                while True:
                    await changed.wait()
                    changed = self._changed
                    if self._current_state is not last_seen:
                        last_seen = self._current_state
                        yield last_seen

            except (asyncio.CancelledError, GeneratorExit):
                # Subscriber disconnected or generator closed
                return

        yield state_generator()
