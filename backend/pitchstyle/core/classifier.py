"""
Deck content classifier.

Two paths produce a ``ContentAnalysis`` from the same ``ContentPayload``:

- **remote**: a pydantic-ai agent returns industry, tone, themes, colours and
  a recommended style as structured output.
- **local**: a keyword heuristic over the payload text.  It is used whenever
  the remote path is not configured, times out, answers with something that
  does not validate, or raises.  Its output depends on the payload alone.

Either result is then enhanced with per-slide-type layout overrides.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from collections import Counter
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from pydantic import BaseModel
from pydantic_ai import Agent

from pitchstyle.core.config import settings
from pitchstyle.core.content_extractor import collect_text
from pitchstyle.core.style_tables import (
    INDUSTRY_KEYWORDS,
    STOP_WORDS,
    industry_guide,
    industry_recommended_style,
    industry_tone,
    theme_style,
)
from pitchstyle.schemas.deck import ContentPayload
from pitchstyle.schemas.styling import (
    CamelModel,
    ContentAnalysis,
    Industry,
    Layout,
    SlideSpecificStyle,
    SlideType,
)

logger = logging.getLogger(__name__)

RemoteClassifier = Callable[[ContentPayload], Awaitable[Any]]

TOP_KEYWORDS = 10
SURFACED_THEMES = 3
_WORD_SPLIT = re.compile(r"\W+")


# ---------------------------------------------------------------------------
# 1.  Remote path  (pydantic-ai agent)
# ---------------------------------------------------------------------------

_CLASSIFIER_SYSTEM_PROMPT = """\
You are a professional presentation designer.  Given the text content of a \
pitch deck, recommend the styling that suits it best.

Return strict structured data with exactly these fields:

- **industry**: one of technology, healthcare, finance, education, ecommerce, \
  creative, default
- **businessTone**: one of professional, creative, technical, friendly, \
  luxurious, modern, traditional
- **keyThemes**: 2-3 short keywords that should influence the design
- **colorSuggestions**: 2-3 hex colour codes such as "#1E40AF"
- **recommendedStyle**: a single word, e.g. corporate, playful, innovative

Base every answer on the supplied content only.
"""


class RemoteAnalysis(CamelModel):
    industry: str
    business_tone: str
    key_themes: list[str]
    color_suggestions: list[str]
    recommended_style: str


class AgentRemoteClassifier:
    """Remote classification through a pydantic-ai agent.

    The agent is built on first use so that importing this module never
    touches model provider configuration.
    """

    def __init__(self, model: str):
        self.model = model
        self._agent: Agent | None = None

    def _get_agent(self) -> Agent:
        if self._agent is None:
            self._agent = Agent(
                model=self.model,
                output_type=RemoteAnalysis,
                system_prompt=_CLASSIFIER_SYSTEM_PROMPT,
                retries=1,
            )
        return self._agent

    async def __call__(self, payload: ContentPayload) -> RemoteAnalysis:
        prompt = (
            f"Analyze this pitch deck content and recommend styling.\n\n"
            f"Content:\n{json.dumps(payload.model_dump(), indent=2)}"
        )
        result = await self._get_agent().run(prompt)
        return result.output


def parse_remote_response(raw: Any) -> ContentAnalysis:
    """Validate a remote answer into ``ContentAnalysis``.

    Accepts a model instance, a mapping or a JSON string.  Raises
    ``ValueError`` (pydantic's ``ValidationError`` included) or ``TypeError``
    when the answer does not have the expected shape.

    ``slideSpecificStyles`` is never taken from the remote side; the
    enhancement step always supplies it.
    """
    if isinstance(raw, BaseModel):
        data = raw.model_dump(by_alias=True)
    elif isinstance(raw, (str, bytes)):
        data = json.loads(raw)
    elif isinstance(raw, dict):
        data = dict(raw)
    else:
        raise TypeError(f"unsupported classifier response type {type(raw).__name__}")

    if not isinstance(data, dict):
        raise TypeError("classifier response is not a JSON object")

    data.pop("slideSpecificStyles", None)
    data.pop("slide_specific_styles", None)
    return ContentAnalysis.model_validate(data)


# ---------------------------------------------------------------------------
# 2.  Local path  (deterministic heuristic)
# ---------------------------------------------------------------------------

def extract_keywords(payload: ContentPayload, limit: int = TOP_KEYWORDS) -> list[str]:
    """Rank payload words by frequency; ties keep first-occurrence order."""
    text = " ".join(collect_text(payload)).lower()
    words = [w for w in _WORD_SPLIT.split(text) if len(w) > 3 and w not in STOP_WORDS]
    return [word for word, _ in Counter(words).most_common(limit)]


def detect_industry(keywords: Iterable[str]) -> Industry:
    candidates = set(keywords)
    for industry, vocabulary in INDUSTRY_KEYWORDS:
        if candidates & vocabulary:
            return industry
    return Industry.default


def fallback_analysis(payload: ContentPayload) -> ContentAnalysis:
    keywords = extract_keywords(payload)
    industry = detect_industry(keywords)
    guide = industry_guide(industry)
    return ContentAnalysis(
        industry=industry,
        business_tone=industry_tone(industry),
        key_themes=keywords[:SURFACED_THEMES],
        color_suggestions=[theme_style(theme).color_palette.primary for theme in guide.color_themes],
        recommended_style=industry_recommended_style(industry),
    )


# ---------------------------------------------------------------------------
# 3.  Enhancement + orchestration
# ---------------------------------------------------------------------------

def enhance_with_slide_styles(analysis: ContentAnalysis, payload: ContentPayload) -> ContentAnalysis:
    """Attach fixed layout overrides for the slide types present in *payload*."""
    overrides: dict[SlideType, SlideSpecificStyle] = {}
    for slide in payload.slides:
        slide_type = SlideType.parse(slide.type)
        if slide_type is SlideType.cover:
            overrides[slide_type] = SlideSpecificStyle(layout=Layout.full_width_image)
        elif slide_type in (SlideType.data, SlideType.financials):
            overrides[slide_type] = SlideSpecificStyle(layout=Layout.data_grid)
    return analysis.model_copy(update={"slide_specific_styles": overrides})


class Classifier:
    def __init__(self, remote: RemoteClassifier | None = None, timeout: float | None = None):
        self.remote = remote
        self.timeout = settings.CLASSIFIER_TIMEOUT_SECONDS if timeout is None else timeout

    @property
    def has_remote(self) -> bool:
        return self.remote is not None

    async def classify(self, payload: ContentPayload, deck_id: str | None = None) -> ContentAnalysis:
        """Classify *payload*; never raises for remote failures."""
        analysis = await self._classify_remote(payload, deck_id)
        if analysis is None:
            analysis = fallback_analysis(payload)
        return enhance_with_slide_styles(analysis, payload)

    async def _classify_remote(self, payload: ContentPayload, deck_id: str | None) -> ContentAnalysis | None:
        if self.remote is None:
            logger.info("No remote classifier configured; analysing deck %s locally", deck_id)
            return None

        try:
            raw = await asyncio.wait_for(self.remote(payload), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Remote classification timed out after %.1fs for deck %s", self.timeout, deck_id)
            return None
        except Exception as exc:
            logger.warning("Remote classification failed for deck %s: %s", deck_id, exc, exc_info=True)
            return None

        try:
            return parse_remote_response(raw)
        except (ValueError, TypeError) as exc:
            logger.warning("Malformed classifier response for deck %s: %s", deck_id, exc)
            return None


def build_classifier() -> Classifier:
    """Classifier wired from settings; no API key means local analysis only."""
    remote = AgentRemoteClassifier(settings.STYLING_MODEL) if settings.OPENAI_API_KEY else None
    return Classifier(remote=remote, timeout=settings.CLASSIFIER_TIMEOUT_SECONDS)
