"""
Deck and slide records as the styling engine sees them.

Slide ``content`` is an open dict: the styling pass merges its own reserved
keys into it and leaves every other field alone.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pitchstyle.schemas.styling import CamelModel, ContentAnalysis, StylingStatus


class Slide(CamelModel):
    id: str | None = None
    title: str = ""
    slide_type: str = ""
    position: int = 0
    content: dict[str, Any] | None = Field(default_factory=dict)


class Deck(CamelModel):
    id: str | None = None
    title: str = ""
    slides: list[Slide] = Field(default_factory=list)


class SlidePayload(CamelModel):
    title: str = ""
    type: str = ""
    headline: str = ""
    paragraphs: list[str] = Field(default_factory=list)
    bullets: list[str] = Field(default_factory=list)


class ContentPayload(CamelModel):
    """Canonical text signal sent to the classifier (never persisted)."""

    title: str = ""
    slides: list[SlidePayload] = Field(default_factory=list)


class StyledDeck(CamelModel):
    deck: Deck
    analysis: ContentAnalysis
    status: StylingStatus
