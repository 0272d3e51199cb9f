class StylingError(Exception):
    """Base class for styling failures the caller can act on."""


class DeckNotFoundError(StylingError):
    def __init__(self, deck_id: str):
        self.deck_id = deck_id
        super().__init__(f"Deck {deck_id} not found")


class StylingAbandonedError(StylingError):
    """The deck was abandoned while its styling was still running."""

    def __init__(self, deck_id: str):
        self.deck_id = deck_id
        super().__init__(f"Styling for deck {deck_id} was abandoned")


class StylingPersistenceError(StylingError):
    """Writing styled content back to the deck store failed; nothing was saved."""

    def __init__(self, deck_id: str, slide_id: str | None, cause: BaseException):
        self.deck_id = deck_id
        self.slide_id = slide_id
        self.cause = cause
        where = f"deck {deck_id}" if slide_id is None else f"deck {deck_id} (slide {slide_id})"
        super().__init__(f"Could not save styling for {where}: {cause}")
