"""
Shared fixtures for the Mood Detector tests.
"""

import pytest

from mood_detector.flourish import FlourishTimer
from mood_detector.presenter import MoodPresenter
from mood_detector.sentiment import StaticScorer


class ManualHandle:
    def __init__(self, when: float, callback) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """A scheduler driven by a clock that only moves when told to."""

    def __init__(self) -> None:
        self.now = 0.0
        self.handles: list[ManualHandle] = []

    def call_later(self, delay, callback) -> ManualHandle:
        handle = ManualHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due callbacks in scheduled order."""
        self.now += seconds
        due = [h for h in self.handles if h.when <= self.now]
        due.sort(key=lambda h: h.when)
        for handle in due:
            self.handles.remove(handle)
            if not handle.cancelled:
                handle.callback()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def make_presenter(scheduler):
    """Build a presenter with a manual scheduler and a scripted scorer."""

    def _make(default=None, scores=None, policy="debounce", delay=2.5) -> MoodPresenter:
        timer = FlourishTimer(scheduler, delay=delay, policy=policy)
        return MoodPresenter(
            StaticScorer(default=default, scores=scores),
            timer=timer,
            clock=lambda: 1000.0 + scheduler.now,
        )

    return _make
