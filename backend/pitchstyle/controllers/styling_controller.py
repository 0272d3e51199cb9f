import logging
import uuid

from fastapi import HTTPException

from pitchstyle.core.exceptions import (
    DeckNotFoundError,
    StylingAbandonedError,
    StylingPersistenceError,
)
from pitchstyle.core.styling_applicator import DeckStore, StylingApplicator, apply_theme
from pitchstyle.schemas.deck import Deck, StyledDeck
from pitchstyle.schemas.styling import ContentAnalysis, StylingStatusRead

logger = logging.getLogger(__name__)


def deck_key(deck_id: str) -> str:
    """Canonical form of a deck id; UUIDs in any accepted spelling map to the stored lowercase form."""
    try:
        return str(uuid.UUID(deck_id))
    except ValueError:
        return deck_id


async def _load_deck(store: DeckStore, deck_id: str) -> Deck:
    deck = await store.get_deck(deck_id)
    if deck is None:
        raise DeckNotFoundError(deck_id)
    return deck


async def style_deck(
    applicator: StylingApplicator, store: DeckStore, deck_id: str, restyle: bool = False
) -> StyledDeck:
    deck_id = deck_key(deck_id)
    try:
        deck = await _load_deck(store, deck_id)
        return await applicator.apply_styling(deck, store=store, restyle=restyle)
    except DeckNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except StylingAbandonedError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except StylingPersistenceError as exc:
        logger.error("Styling for deck %s could not be saved: %s", deck_id, exc.cause)
        raise HTTPException(status_code=502, detail="Could not save styled slides")


async def preview_styling(applicator: StylingApplicator, deck: Deck) -> StyledDeck:
    """Style a deck that is not stored; nothing is cached or written."""
    return await applicator.apply_styling(deck.model_copy(update={"id": None}))


def preview_theme(deck: Deck, theme: str) -> Deck:
    return apply_theme(deck, theme)


def get_styling_status(applicator: StylingApplicator, deck_id: str) -> StylingStatusRead:
    deck_id = deck_key(deck_id)
    return StylingStatusRead(deck_id=deck_id, status=applicator.get_status(deck_id))


def get_analysis(applicator: StylingApplicator, deck_id: str) -> ContentAnalysis:
    analysis = applicator.get_cached_analysis(deck_key(deck_id))
    if analysis is None:
        raise HTTPException(status_code=404, detail="No analysis cached for this deck")
    return analysis


def abandon_styling(applicator: StylingApplicator, deck_id: str) -> None:
    applicator.abandon(deck_key(deck_id))
