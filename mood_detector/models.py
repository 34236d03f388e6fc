"""
Shared data models for the Mood Detector.

This module defines the core domain models used across multiple layers
of the application (presenter, store, CLI, API).
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

MoodKind = Literal["idle", "happy", "sad", "neutral", "unknown"]

# RGB values of the named colours a presentation may use
PALETTE: dict[str, tuple[int, int, int]] = {
    "gray": (142, 142, 147),
    "yellow": (255, 204, 0),
    "orange": (255, 149, 0),
    "blue": (0, 122, 255),
    "purple": (175, 82, 222),
    "black": (0, 0, 0),
    "white": (255, 255, 255),
}


class Color(BaseModel):
    """A named palette colour with an opacity."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Palette colour name")
    opacity: float = Field(1.0, ge=0.0, le=1.0, description="Alpha in [0, 1]")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def css(self) -> str:
        """The colour as a CSS ``rgba()`` value."""
        red, green, blue = PALETTE[self.name]
        return f"rgba({red}, {green}, {blue}, {self.opacity:g})"


class MoodPresentation(BaseModel):
    """What the UI shows for a mood classification."""

    model_config = ConfigDict(frozen=True)

    kind: MoodKind = Field(..., description="Classification the presentation represents")
    emoji: str = Field(..., description="Emoji to display")
    message: str = Field(..., description="Message to display")
    colors: tuple[Color, Color] = Field(
        ..., description="Gradient start and end colours"
    )


class PresentationState(BaseModel):
    """The presentation currently on screen plus the flourish flag."""

    model_config = ConfigDict(frozen=True)

    presentation: MoodPresentation
    show_flourish: bool = Field(False, description="Whether the floating emoji is visible")
    revision: int = Field(0, description="Incremented on every state change")
    timestamp: float | None = Field(
        None, description="Unix timestamp of the last analysis"
    )


class AnalyzeRequest(BaseModel):
    """Text submitted for mood analysis."""

    text: str = Field(..., description="Free text to analyze; may be empty")


class AnalyzeResponse(BaseModel):
    """Result of an analysis together with the state it produced."""

    presentation: MoodPresentation
    state: PresentationState


class StateResponse(BaseModel):
    """Response model for state endpoints."""

    state: PresentationState = Field(..., description="The current presentation state")
