"""
Reduce a deck's free text to the payload both classifier paths read.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pitchstyle.schemas.deck import ContentPayload, Deck, SlidePayload


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _texts(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def extract(deck: Deck) -> ContentPayload:
    """Build the canonical ``ContentPayload`` for *deck*.

    Slides without a content record are skipped; every missing field falls
    back to an empty string or list.
    """
    slides = []
    for slide in deck.slides:
        if slide.content is None:
            continue
        content = slide.content
        slides.append(
            SlidePayload(
                title=slide.title or "",
                type=slide.slide_type or "",
                headline=_text(content.get("headline")),
                paragraphs=_texts(content.get("paragraphs")),
                bullets=_texts(content.get("bullets")),
            )
        )
    return ContentPayload(title=deck.title or "", slides=slides)


def collect_text(payload: ContentPayload) -> Iterator[str]:
    """Yield every non-empty text fragment of *payload* in reading order."""
    if payload.title:
        yield payload.title
    for slide in payload.slides:
        if slide.title:
            yield slide.title
        if slide.headline:
            yield slide.headline
        yield from (p for p in slide.paragraphs if p)
        yield from (b for b in slide.bullets if b)


def has_styleable_content(deck: Deck) -> bool:
    """True when at least one slide carries a title, headline, paragraph or bullet."""
    for slide in deck.slides:
        if slide.title:
            return True
        content = slide.content or {}
        if _text(content.get("headline")) or _texts(content.get("bullets")) or _texts(content.get("paragraphs")):
            return True
    return False
