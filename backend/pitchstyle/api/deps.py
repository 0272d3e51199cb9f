"""
Shared FastAPI dependencies.

Routers import get_db, get_deck_store and get_applicator from HERE, not from
db.database or core.styling_applicator directly.
"""

from functools import lru_cache

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from pitchstyle.controllers.deck_store import SessionDeckStore
from pitchstyle.core.classifier import build_classifier
from pitchstyle.core.styling_applicator import DeckStore, StylingApplicator
from pitchstyle.db.database import get_db as _get_db

__all__ = ["get_db", "get_deck_store", "get_applicator"]


async def get_db() -> AsyncSession:
    """Yield an async database session."""
    async for session in _get_db():
        yield session


async def get_deck_store(db: AsyncSession = Depends(get_db)) -> DeckStore:
    return SessionDeckStore(db)


@lru_cache
def get_applicator() -> StylingApplicator:
    """Process-wide applicator; its per-deck cache and status live for the app's lifetime."""
    return StylingApplicator(build_classifier())
