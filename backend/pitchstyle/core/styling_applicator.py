"""
Deck-level styling orchestration.

``StylingApplicator`` runs extraction and classification once per deck,
resolves and emits a design for every slide, and merges the result into each
slide's content record.  It owns the per-deck state that outlives a single
request:

- the cached ``ContentAnalysis`` of each deck id,
- the in-flight classification task, so concurrent requests for the same deck
  share one remote call,
- the ``StylingStatus`` of each deck id,
- a freshness epoch per deck id; ``abandon`` bumps it, and any result that
  arrives for an older epoch is discarded instead of cached or written back.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from pitchstyle.core.classifier import Classifier
from pitchstyle.core.config import settings
from pitchstyle.core.content_extractor import extract, has_styleable_content
from pitchstyle.core.design_emitter import build_design_spec, build_theme_design_spec
from pitchstyle.core.exceptions import StylingAbandonedError, StylingPersistenceError
from pitchstyle.core.style_resolver import color_theme_for, font_style_for
from pitchstyle.core.style_tables import DEFAULT_THEME
from pitchstyle.schemas.deck import Deck, Slide, StyledDeck
from pitchstyle.schemas.styling import ContentAnalysis, DesignSpec, StylingStatus, Theme

logger = logging.getLogger(__name__)

# Keys the styling pass owns inside a slide's content record
RESERVED_CONTENT_KEYS = (
    "color_theme",
    "design_style",
    "font_style",
    "css",
    "decorativeElements",
    "layout",
    "industry",
    "business_tone",
    "ai_styling",
    "custom_design",
)


class DeckStore(Protocol):
    async def get_deck(self, deck_id: str) -> Deck | None: ...

    async def update_slide_content(self, slide_id: str, partial_content: dict[str, Any]) -> None: ...

    async def update_slides_content(self, deck_id: str, updates: dict[str, dict[str, Any]]) -> None:
        """Merge each partial into its slide's content; all slides are saved or none are."""
        ...


def styled_content(analysis: ContentAnalysis, spec: DesignSpec) -> dict[str, Any]:
    """The reserved-key fields written into one slide's content."""
    decorations = [d.model_dump(mode="json", by_alias=True, exclude_none=True) for d in spec.decorative_elements]
    return {
        "color_theme": color_theme_for(analysis.industry).value,
        "design_style": analysis.recommended_style.value,
        "font_style": font_style_for(spec.style),
        "css": spec.css_text,
        "decorativeElements": decorations,
        "layout": spec.layout.value,
        "industry": analysis.industry.value,
        "business_tone": analysis.business_tone.value,
        "ai_styling": True,
        "custom_design": {
            "style": spec.style.model_dump(mode="json", by_alias=True),
            "layout": spec.layout.value,
            "fontImports": spec.font_imports,
            "css": spec.css_text,
            "decorativeElements": decorations,
            "animations": spec.animations.model_dump(mode="json", by_alias=True),
        },
    }


def _merge_slide(slide: Slide, partial: dict[str, Any]) -> Slide:
    merged = slide.model_copy(deep=True)
    merged.content = {**(merged.content or {}), **partial}
    return merged


def apply_theme(deck: Deck, theme: Theme | str) -> Deck:
    """Style every slide from a manually chosen theme; no classification involved."""
    try:
        chosen = Theme(theme)
    except ValueError:
        chosen = DEFAULT_THEME
    slides = []
    for slide in deck.slides:
        spec = build_theme_design_spec(chosen, slide.slide_type)
        decorations = [d.model_dump(mode="json", by_alias=True, exclude_none=True) for d in spec.decorative_elements]
        slides.append(_merge_slide(slide, {
            "color_theme": chosen.value,
            "font_style": font_style_for(spec.style),
            "css": spec.css_text,
            "decorativeElements": decorations,
            "layout": spec.layout.value,
            "ai_styling": False,
        }))
    return deck.model_copy(update={"slides": slides})


class StylingApplicator:
    def __init__(self, classifier: Classifier, write_retries: int | None = None):
        self.classifier = classifier
        self.write_retries = settings.STYLING_WRITE_RETRIES if write_retries is None else write_retries
        self._analyses: dict[str, ContentAnalysis] = {}
        self._inflight: dict[str, asyncio.Task[ContentAnalysis]] = {}
        self._status: dict[str, StylingStatus] = {}
        self._epochs: dict[str, int] = {}

    # ── State queries ─────────────────────────────────────────

    def get_status(self, deck_id: str) -> StylingStatus:
        return self._status.get(deck_id, StylingStatus.not_started)

    def get_cached_analysis(self, deck_id: str) -> ContentAnalysis | None:
        return self._analyses.get(deck_id)

    def is_fresh(self, deck_id: str, epoch: int) -> bool:
        return self._epochs.get(deck_id, 0) == epoch

    # ── Invalidation ──────────────────────────────────────────

    def clear(self, deck_id: str) -> None:
        """Forget the cached analysis and status of *deck_id*."""
        self._analyses.pop(deck_id, None)
        self._status.pop(deck_id, None)

    def abandon(self, deck_id: str) -> None:
        """Drop all state for *deck_id*; results still in flight will be discarded."""
        self._epochs[deck_id] = self._epochs.get(deck_id, 0) + 1
        self._inflight.pop(deck_id, None)
        self.clear(deck_id)
        logger.info("Abandoned styling for deck %s", deck_id)

    # ── Classification ────────────────────────────────────────

    async def analyze(self, deck: Deck, *, restyle: bool = False) -> ContentAnalysis:
        """Classify *deck*, reusing the cached or in-flight analysis for its id.

        Decks without an id are classified directly and never cached.
        """
        if deck.id is None:
            return await self.classifier.classify(extract(deck))

        deck_id = deck.id
        epoch = self._epochs.get(deck_id, 0)
        if restyle:
            self._analyses.pop(deck_id, None)
        analysis = await self._classify_once(deck, deck_id)
        if not self.is_fresh(deck_id, epoch):
            raise StylingAbandonedError(deck_id)
        return analysis

    async def _classify_once(self, deck: Deck, deck_id: str) -> ContentAnalysis:
        cached = self._analyses.get(deck_id)
        if cached is not None:
            return cached

        task = self._inflight.get(deck_id)
        if task is None:
            if not has_styleable_content(deck):
                logger.info("Deck %s has no text content; default styling will be used", deck_id)
            epoch = self._epochs.get(deck_id, 0)
            task = asyncio.create_task(self._run_classification(deck, deck_id, epoch))
            self._inflight[deck_id] = task
        return await asyncio.shield(task)

    async def _run_classification(self, deck: Deck, deck_id: str, epoch: int) -> ContentAnalysis:
        try:
            analysis = await self.classifier.classify(extract(deck), deck_id)
        finally:
            if self._inflight.get(deck_id) is asyncio.current_task():
                del self._inflight[deck_id]
        if self.is_fresh(deck_id, epoch):
            self._analyses[deck_id] = analysis
        else:
            logger.info("Discarding stale classification for abandoned deck %s", deck_id)
        return analysis

    # ── Styling ───────────────────────────────────────────────

    async def apply_styling(
        self,
        deck: Deck,
        *,
        store: DeckStore | None = None,
        restyle: bool = False,
    ) -> StyledDeck:
        """Style every slide of *deck* and optionally write the result to *store*.

        The caller's deck is left untouched; a new deck is returned.  Decks
        without an id are styled without caching, status tracking or write-back.
        If the run fails or is cancelled, the deck's status returns to its
        value before the run.
        """
        if deck.id is None:
            analysis = await self.analyze(deck)
            return StyledDeck(deck=self._style_deck(deck, analysis), analysis=analysis, status=StylingStatus.complete)

        deck_id = deck.id
        epoch = self._epochs.get(deck_id, 0)
        previous = self.get_status(deck_id)

        if restyle or previous is not StylingStatus.complete:
            self._status[deck_id] = StylingStatus.in_progress

        try:
            analysis = await self.analyze(deck, restyle=restyle)
            styled = self._style_deck(deck, analysis)
            if store is not None:
                await self._write_back(store, deck_id, epoch, styled)
            if not self.is_fresh(deck_id, epoch):
                raise StylingAbandonedError(deck_id)
        except StylingAbandonedError:
            logger.info("Styling result for deck %s discarded", deck_id)
            raise
        except BaseException:
            if self.is_fresh(deck_id, epoch):
                self._status[deck_id] = previous
            raise

        self._status[deck_id] = StylingStatus.complete
        logger.info(
            "Styled deck %s: %d slides, industry=%s, style=%s",
            deck_id, len(styled.slides), analysis.industry.value, analysis.recommended_style.value,
        )
        return StyledDeck(deck=styled, analysis=analysis, status=StylingStatus.complete)

    def _style_deck(self, deck: Deck, analysis: ContentAnalysis) -> Deck:
        slides = []
        for slide in deck.slides:
            spec = build_design_spec(analysis, slide.slide_type)
            slides.append(_merge_slide(slide, styled_content(analysis, spec)))
        return deck.model_copy(update={"slides": slides})

    async def _write_back(self, store: DeckStore, deck_id: str, epoch: int, styled: Deck) -> None:
        """Save every slide's reserved keys in one batch; the store applies all or none."""
        updates = {
            slide.id: {key: slide.content[key] for key in RESERVED_CONTENT_KEYS}
            for slide in styled.slides
            if slide.id is not None
        }
        if not updates:
            return

        attempts = self.write_retries + 1
        for attempt in range(1, attempts + 1):
            if not self.is_fresh(deck_id, epoch):
                raise StylingAbandonedError(deck_id)
            try:
                await store.update_slides_content(deck_id, updates)
                return
            except Exception as exc:
                logger.warning(
                    "Saving styling for deck %s failed (attempt %d/%d): %s",
                    deck_id, attempt, attempts, exc,
                )
                if attempt == attempts:
                    raise StylingPersistenceError(deck_id, None, exc) from exc
