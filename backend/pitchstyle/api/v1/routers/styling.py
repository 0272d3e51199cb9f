from fastapi import APIRouter, Depends, Query, status

from pitchstyle.api.deps import get_applicator, get_deck_store
from pitchstyle.controllers import styling_controller
from pitchstyle.core.styling_applicator import DeckStore, StylingApplicator
from pitchstyle.schemas.deck import Deck, StyledDeck
from pitchstyle.schemas.styling import ContentAnalysis, StylingStatusRead, Theme

router = APIRouter(tags=["styling"])


@router.post("/decks/{deck_id}/styling", response_model=StyledDeck)
async def style_deck(
    deck_id: str,
    restyle: bool = Query(False, description="Discard the cached analysis and classify again"),
    applicator: StylingApplicator = Depends(get_applicator),
    store: DeckStore = Depends(get_deck_store),
):
    """Style every slide of a stored deck and save the result."""
    return await styling_controller.style_deck(applicator, store, deck_id, restyle=restyle)


@router.get("/decks/{deck_id}/styling/status", response_model=StylingStatusRead)
async def get_styling_status(
    deck_id: str,
    applicator: StylingApplicator = Depends(get_applicator),
):
    return styling_controller.get_styling_status(applicator, deck_id)


@router.get("/decks/{deck_id}/styling/analysis", response_model=ContentAnalysis)
async def get_analysis(
    deck_id: str,
    applicator: StylingApplicator = Depends(get_applicator),
):
    """The cached content analysis for a deck, if it has been classified."""
    return styling_controller.get_analysis(applicator, deck_id)


@router.delete("/decks/{deck_id}/styling", status_code=status.HTTP_204_NO_CONTENT)
async def abandon_styling(
    deck_id: str,
    applicator: StylingApplicator = Depends(get_applicator),
):
    """Abandon a deck: drop its cached analysis and discard any styling still running."""
    styling_controller.abandon_styling(applicator, deck_id)


@router.post("/styling/preview", response_model=StyledDeck)
async def preview_styling(
    payload: Deck,
    applicator: StylingApplicator = Depends(get_applicator),
):
    """Style an unsaved deck without persisting anything."""
    return await styling_controller.preview_styling(applicator, payload)


@router.post("/styling/preview/{theme}", response_model=Deck)
async def preview_theme(theme: Theme, payload: Deck):
    """Style an unsaved deck with a manually chosen theme."""
    return styling_controller.preview_theme(payload, theme)
