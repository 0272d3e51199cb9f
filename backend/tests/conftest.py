"""Shared fixtures: deck builders, a scripted remote classifier and an in-memory deck store."""

import asyncio
import copy

import pytest

from pitchstyle.schemas.deck import Deck, Slide


def make_deck(deck_id="deck-1", title="Acme", slides=None):
    if slides is None:
        slides = [
            Slide(id="s1", title="Acme", slide_type="cover", position=0, content={"headline": "Welcome"}),
            Slide(id="s2", title="Problem", slide_type="problem", position=1,
                  content={"paragraphs": ["Teams waste hours"], "bullets": ["Slow", "Manual"], "notes": "keep me"}),
            Slide(id="s3", title="Numbers", slide_type="financials", position=2, content={"bullets": ["ARR 2M"]}),
        ]
    return Deck(id=deck_id, title=title, slides=slides)


def tech_deck(deck_id="deck-tech"):
    return make_deck(
        deck_id=deck_id,
        title="Nimbus",
        slides=[
            Slide(id="t1", title="Nimbus", slide_type="cover", content={"headline": "Software platform for teams"}),
            Slide(id="t2", title="Product", slide_type="product",
                  content={"paragraphs": ["Our software platform runs a ranking algorithm"],
                           "bullets": ["Software", "Platform", "Algorithm"]}),
        ],
    )


class ScriptedRemote:
    """Remote classifier stand-in that counts calls and can be slowed down or made to fail."""

    def __init__(self, response=None, delay=0.0, error=None):
        self.response = response
        self.delay = delay
        self.error = error
        self.calls = 0
        self.started = asyncio.Event()

    async def __call__(self, payload):
        self.calls += 1
        self.started.set()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


class InMemoryDeckStore:
    """Applies a batch of slide updates all at once, or not at all."""

    def __init__(self, *decks, failures=0, fail_on=None):
        self.decks = {deck.id: copy.deepcopy(deck) for deck in decks}
        self.writes = []
        self.failures = failures
        self.fail_on = fail_on

    async def get_deck(self, deck_id):
        deck = self.decks.get(deck_id)
        return deck.model_copy(deep=True) if deck else None

    async def update_slides_content(self, deck_id, updates):
        if self.failures:
            self.failures -= 1
            raise ConnectionError("database unavailable")
        if self.fail_on in updates:
            raise ValueError(f"cannot save slide {self.fail_on}")
        for slide_id, partial_content in updates.items():
            self._merge(slide_id, partial_content)

    async def update_slide_content(self, slide_id, partial_content):
        await self.update_slides_content(None, {slide_id: partial_content})

    def _merge(self, slide_id, partial_content):
        self.writes.append((slide_id, partial_content))
        for deck in self.decks.values():
            for slide in deck.slides:
                if slide.id == slide_id:
                    slide.content = {**(slide.content or {}), **partial_content}


REMOTE_ANSWER = {
    "industry": "finance",
    "businessTone": "traditional",
    "keyThemes": ["trust", "growth", "security"],
    "colorSuggestions": ["#0B3D91", "#F5A623", "#1B998B"],
    "recommendedStyle": "corporate",
}


@pytest.fixture
def deck():
    return make_deck()


@pytest.fixture
def remote_answer():
    return dict(REMOTE_ANSWER)
