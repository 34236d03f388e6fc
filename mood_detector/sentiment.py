"""
Sentiment scorers for the Mood Detector.

A scorer turns a piece of text into a single polarity score for the whole
text, or ``None`` when it cannot produce one.
"""

import logging
from collections.abc import Mapping
from typing import Protocol

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

logger = logging.getLogger(__name__)


class SentimentScorer(Protocol):
    """Anything that scores text in [-1.0, 1.0], or returns None."""

    def score(self, text: str) -> float | None: ...


class VaderScorer:
    """
    Paragraph-level scorer backed by VADER.

    The whole input is scored as one unit and the compound score, already
    normalized to [-1.0, 1.0], is returned. Blank text has no score.
    """

    def __init__(self) -> None:
        self._analyzer = SentimentIntensityAnalyzer()

    def score(self, text: str) -> float | None:
        if not text or not text.strip():
            return None

        scores = self._analyzer.polarity_scores(text)
        compound = scores.get("compound")
        logger.debug("VADER scores for %r: %s", text, scores)
        return None if compound is None else float(compound)


class StaticScorer:
    """Returns a fixed score, or looks the text up in a mapping."""

    def __init__(
        self,
        default: float | None = None,
        scores: Mapping[str, float | None] | None = None,
    ) -> None:
        self._default = default
        self._scores = dict(scores or {})

    def score(self, text: str) -> float | None:
        return self._scores.get(text, self._default)
