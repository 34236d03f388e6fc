"""
Mood presenter for the Mood Detector.

This module turns text into a mood presentation: it asks a sentiment scorer
for a score, maps the score to an emoji, message and gradient, and publishes
the new presentation state for the UI to render.
"""

import logging
import math
import time
from collections.abc import Callable

from .flourish import FlourishTimer, LoopScheduler
from .models import Color, MoodPresentation, PresentationState
from .sentiment import SentimentScorer
from .store import Observer, PresentationStore

logger = logging.getLogger(__name__)

POSITIVE_THRESHOLD = 0.25
NEGATIVE_THRESHOLD = -0.25

IDLE = MoodPresentation(
    kind="idle",
    emoji="😐",
    message="Type something to analyze your mood!",
    colors=(Color(name="gray"), Color(name="gray", opacity=0.5)),
)
UNKNOWN = MoodPresentation(
    kind="unknown",
    emoji="😐",
    message="Couldn't understand. Try again!",
    colors=(Color(name="gray"), Color(name="gray", opacity=0.4)),
)
HAPPY = MoodPresentation(
    kind="happy",
    emoji="😊",
    message="You seem happy and positive!",
    colors=(Color(name="yellow"), Color(name="orange")),
)
SAD = MoodPresentation(
    kind="sad",
    emoji="😢",
    message="Feeling down? Take a deep breath 🌧️",
    colors=(Color(name="blue"), Color(name="purple")),
)
NEUTRAL = MoodPresentation(
    kind="neutral",
    emoji="😐",
    message="You're feeling neutral today.",
    colors=(Color(name="gray"), Color(name="black", opacity=0.6)),
)


def classify(score: float | None) -> MoodPresentation:
    """
    Map a sentiment score to its presentation.

    Scores strictly above 0.25 are happy and strictly below -0.25 are sad;
    everything in between, both bounds included, is neutral. A missing or
    NaN score yields the "couldn't understand" presentation.
    """
    if score is None or math.isnan(score):
        return UNKNOWN
    if score > POSITIVE_THRESHOLD:
        return HAPPY
    if score < NEGATIVE_THRESHOLD:
        return SAD
    return NEUTRAL


def initial_state() -> PresentationState:
    return PresentationState(presentation=IDLE)


class MoodPresenter:
    """
    Owns the presentation state and the only way to change it.

    ``analyze`` scores and classifies text, shows the result with the
    flourish raised and schedules the flourish to be hidden again;
    ``clear_flourish`` hides it immediately. Both run on the thread that
    owns the state, so no locking is involved.
    """

    def __init__(
        self,
        scorer: SentimentScorer,
        store: PresentationStore | None = None,
        timer: FlourishTimer | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._scorer = scorer
        self._store = store or PresentationStore(initial_state())
        self._timer = timer or FlourishTimer(LoopScheduler())
        self._clock = clock

    @property
    def state(self) -> PresentationState:
        return self._store.read()

    @property
    def store(self) -> PresentationStore:
        return self._store

    @property
    def timer(self) -> FlourishTimer:
        return self._timer

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Call ``observer`` with every new state; returns an unsubscribe function."""
        return self._store.subscribe(observer)

    def analyze(self, text: str) -> MoodPresentation:
        """
        Classify ``text`` and make the result the current presentation.

        Unanalyzable text, including the empty string, is not an error: it
        produces the "couldn't understand" presentation.
        """
        presentation = classify(self._score(text))
        logger.debug("Analyzed %r as %s", text, presentation.kind)

        current = self._store.read()
        self._store.publish(
            PresentationState(
                presentation=presentation,
                show_flourish=True,
                revision=current.revision + 1,
                timestamp=self._clock(),
            )
        )
        self._timer.arm(self.clear_flourish)
        return presentation

    def clear_flourish(self) -> None:
        """Hide the floating emoji."""
        if self._timer.policy == "debounce":
            self._timer.cancel()

        current = self._store.read()
        if not current.show_flourish:
            return

        self._store.publish(
            current.model_copy(
                update={"show_flourish": False, "revision": current.revision + 1}
            )
        )

    def _score(self, text: str) -> float | None:
        try:
            return self._scorer.score(text)
        except Exception:
            logger.warning("Sentiment scorer failed for %r", text, exc_info=True)
            return None
