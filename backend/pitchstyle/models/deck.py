from uuid import UUID

from sqlalchemy import JSON, Column
from sqlmodel import Field, Relationship

from pitchstyle.models.base import BaseUUIDModel


class PitchDeck(BaseUUIDModel, table=True):
    __tablename__ = "pitch_decks"

    title: str = Field(default="", max_length=255)

    slides: list["SlideRecord"] = Relationship(
        back_populates="deck",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "SlideRecord.position"},
    )


class SlideRecord(BaseUUIDModel, table=True):
    __tablename__ = "slides"

    pitch_deck_id: UUID = Field(foreign_key="pitch_decks.id", index=True)
    title: str = Field(default="", max_length=255)
    position: int = Field(default=0)
    slide_type: str = Field(default="content", max_length=50)  # cover, problem, team, ...

    # Free-form slide content; styling fields are merged in under reserved keys
    content: dict | None = Field(default=None, sa_column=Column(JSON, nullable=True))

    deck: PitchDeck = Relationship(back_populates="slides")
