"""
Tests for the MoodPresenter.

These tests verify score classification, the state published by each
operation, and how the flourish is raised and hidden again.
"""

import math

import pytest

from mood_detector.presenter import (
    HAPPY,
    IDLE,
    NEUTRAL,
    SAD,
    UNKNOWN,
    MoodPresenter,
    classify,
)


class FailingScorer:
    def score(self, text: str) -> float | None:
        raise RuntimeError("model unavailable")


# MARK: - Classification


class TestClassify:
    """Threshold behaviour of classify()."""

    @pytest.mark.parametrize("score", [0.2501, 0.5, 0.8, 1.0])
    def test_above_upper_threshold_is_happy(self, score):
        assert classify(score) == HAPPY

    @pytest.mark.parametrize("score", [-0.2501, -0.5, -1.0])
    def test_below_lower_threshold_is_sad(self, score):
        assert classify(score) == SAD

    @pytest.mark.parametrize("score", [0.25, -0.25, 0.0, 0.1, -0.1])
    def test_neutral_band_includes_both_bounds(self, score):
        assert classify(score) == NEUTRAL

    def test_missing_score_is_unknown(self):
        assert classify(None) == UNKNOWN

    def test_nan_score_is_unknown(self):
        assert classify(math.nan) == UNKNOWN

    def test_unknown_is_distinguishable_from_neutral(self):
        assert UNKNOWN.emoji == NEUTRAL.emoji
        assert UNKNOWN.message != NEUTRAL.message
        assert UNKNOWN.kind != NEUTRAL.kind

    def test_presentations(self):
        assert HAPPY.emoji == "😊"
        assert [c.name for c in HAPPY.colors] == ["yellow", "orange"]
        assert SAD.emoji == "😢"
        assert SAD.message == "Feeling down? Take a deep breath 🌧️"
        assert [c.name for c in SAD.colors] == ["blue", "purple"]
        assert NEUTRAL.colors[1].name == "black"
        assert NEUTRAL.colors[1].opacity == 0.6
        assert UNKNOWN.colors[1].name == "gray"
        assert UNKNOWN.colors[1].opacity == 0.4

    def test_color_css(self):
        assert HAPPY.colors[0].css == "rgba(255, 204, 0, 1)"
        assert UNKNOWN.colors[1].css == "rgba(142, 142, 147, 0.4)"


# MARK: - Analyze


class TestAnalyze:
    """State changes driven by analyze() and clear_flourish()."""

    def test_initial_state(self, make_presenter):
        presenter = make_presenter()
        state = presenter.state
        assert state.presentation == IDLE
        assert state.show_flourish is False
        assert state.revision == 0
        assert state.timestamp is None

    def test_happy_scenario(self, make_presenter):
        presenter = make_presenter(scores={"I am so happy today!": 0.8})
        presentation = presenter.analyze("I am so happy today!")
        assert presentation.emoji == "😊"
        assert presentation.message == "You seem happy and positive!"
        assert presenter.state.presentation == presentation

    def test_empty_input_scenario(self, make_presenter):
        presenter = make_presenter(default=None)
        presentation = presenter.analyze("")
        assert presentation.emoji == "😐"
        assert presentation.message == "Couldn't understand. Try again!"

    def test_boundary_scenario(self, make_presenter):
        presenter = make_presenter(scores={"meh": 0.25})
        presentation = presenter.analyze("meh")
        assert presentation.emoji == "😐"
        assert presentation.message == "You're feeling neutral today."

    def test_negative_boundary_is_neutral(self, make_presenter):
        presenter = make_presenter(default=-0.25)
        assert presenter.analyze("whatever") == NEUTRAL

    def test_sad(self, make_presenter):
        presenter = make_presenter(default=-0.7)
        assert presenter.analyze("awful day") == SAD

    def test_idempotent_for_same_text(self, make_presenter):
        presenter = make_presenter(scores={"fine": 0.4})
        first = presenter.analyze("fine")
        second = presenter.analyze("fine")
        assert first == second

    def test_failing_scorer_falls_back_to_unknown(self, scheduler):
        from mood_detector.flourish import FlourishTimer

        presenter = MoodPresenter(FailingScorer(), timer=FlourishTimer(scheduler))
        assert presenter.analyze("anything") == UNKNOWN
        assert presenter.state.show_flourish is True

    def test_analyze_updates_state(self, make_presenter):
        presenter = make_presenter(default=0.9)
        presenter.analyze("great")
        state = presenter.state
        assert state.presentation == HAPPY
        assert state.show_flourish is True
        assert state.revision == 1
        assert state.timestamp == 1000.0

    def test_clear_flourish(self, make_presenter):
        presenter = make_presenter(default=0.9)
        presenter.analyze("great")
        presenter.clear_flourish()
        assert presenter.state.show_flourish is False
        assert presenter.state.presentation == HAPPY
        assert presenter.state.revision == 2

    def test_clear_flourish_when_hidden_is_a_no_op(self, make_presenter):
        presenter = make_presenter()
        presenter.clear_flourish()
        assert presenter.state.revision == 0

    def test_observers_receive_every_state(self, make_presenter, scheduler):
        presenter = make_presenter(default=-0.9)
        received = []
        presenter.subscribe(received.append)

        presenter.analyze("bad")
        scheduler.advance(2.5)

        assert [(s.presentation.kind, s.show_flourish) for s in received] == [
            ("sad", True),
            ("sad", False),
        ]

    def test_unsubscribe(self, make_presenter):
        presenter = make_presenter(default=0.0)
        received = []
        unsubscribe = presenter.subscribe(received.append)
        unsubscribe()
        presenter.analyze("ok")
        assert received == []

    def test_failing_observer_does_not_block_others(self, make_presenter):
        presenter = make_presenter(default=0.0)
        received = []

        def broken(state):
            raise ValueError("render failed")

        presenter.subscribe(broken)
        presenter.subscribe(received.append)
        presenter.analyze("ok")
        assert len(received) == 1


# MARK: - Flourish


class TestFlourish:
    """Timing of the flourish, driven by a manual clock."""

    def test_flourish_hidden_after_delay(self, make_presenter, scheduler):
        presenter = make_presenter(default=0.8)
        presenter.analyze("yay")
        assert presenter.state.show_flourish is True

        scheduler.advance(2.0)
        assert presenter.state.show_flourish is True

        scheduler.advance(0.5)
        assert presenter.state.show_flourish is False

    def test_debounce_keeps_newer_flourish_visible(self, make_presenter, scheduler):
        presenter = make_presenter(default=0.8)
        presenter.analyze("first")
        scheduler.advance(2.0)
        presenter.analyze("second")

        scheduler.advance(1.0)  # first hide would have been due at 2.5
        assert presenter.state.show_flourish is True
        assert presenter.timer.pending == 1

        scheduler.advance(1.5)
        assert presenter.state.show_flourish is False
        assert presenter.timer.pending == 0

    def test_legacy_stale_hide_clears_newer_flourish(self, make_presenter, scheduler):
        presenter = make_presenter(default=0.8, policy="legacy")
        presenter.analyze("first")
        scheduler.advance(2.0)
        presenter.analyze("second")
        assert presenter.timer.pending == 2

        scheduler.advance(1.0)
        assert presenter.state.show_flourish is False
        assert presenter.timer.pending == 1

        # The second hide still fires and changes nothing
        revision = presenter.state.revision
        scheduler.advance(2.0)
        assert presenter.state.revision == revision
        assert presenter.timer.pending == 0

    def test_clear_flourish_cancels_pending_hide(self, make_presenter, scheduler):
        presenter = make_presenter(default=0.8)
        presenter.analyze("yay")
        presenter.clear_flourish()
        assert presenter.timer.pending == 0

        revision = presenter.state.revision
        scheduler.advance(5.0)
        assert presenter.state.revision == revision

    def test_custom_delay(self, make_presenter, scheduler):
        presenter = make_presenter(default=0.8, delay=1.0)
        presenter.analyze("yay")
        scheduler.advance(1.0)
        assert presenter.state.show_flourish is False
