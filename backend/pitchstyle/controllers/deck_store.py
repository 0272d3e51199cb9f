import uuid
from typing import Any

from sqlalchemy import select
from sqlmodel.ext.asyncio.session import AsyncSession

from pitchstyle.models.deck import PitchDeck, SlideRecord
from pitchstyle.schemas.deck import Deck, Slide


def _parse_id(value: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class SessionDeckStore:
    """Deck store backed by the pitch_decks / slides tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_deck(self, deck_id: str) -> Deck | None:
        deck_uuid = _parse_id(deck_id)
        if deck_uuid is None:
            return None
        record = await self.db.get(PitchDeck, deck_uuid)
        if not record:
            return None

        result = await self.db.execute(
            select(SlideRecord)
            .where(SlideRecord.pitch_deck_id == deck_uuid)
            .order_by(SlideRecord.position.asc())
        )
        slides = [
            Slide(
                id=str(row.id),
                title=row.title,
                slide_type=row.slide_type,
                position=row.position,
                content=dict(row.content or {}),
            )
            for row in result.scalars().all()
        ]
        return Deck(id=str(record.id), title=record.title, slides=slides)

    async def update_slide_content(self, slide_id: str, partial_content: dict[str, Any]) -> None:
        await self._save({slide_id: partial_content})

    async def update_slides_content(self, deck_id: str, updates: dict[str, dict[str, Any]]) -> None:
        await self._save(updates, deck_uuid=_parse_id(deck_id))

    async def _save(self, updates: dict[str, dict[str, Any]], deck_uuid: uuid.UUID | None = None) -> None:
        """Merge every partial in one transaction; any failure rolls all of them back."""
        try:
            for slide_id, partial_content in updates.items():
                slide_uuid = _parse_id(slide_id)
                slide = await self.db.get(SlideRecord, slide_uuid) if slide_uuid else None
                if not slide or (deck_uuid is not None and slide.pitch_deck_id != deck_uuid):
                    raise LookupError(f"Slide {slide_id} not found")

                # Reassign so the JSON column is flagged dirty
                slide.content = {**(slide.content or {}), **partial_content}
                self.db.add(slide)
            await self.db.flush()
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
