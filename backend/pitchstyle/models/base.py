from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import DateTime, func
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def timestamp_field(*, on_update: bool = False) -> Any:
    """Timezone-aware timestamp column; a fresh Column per model."""
    if on_update:
        return Field(
            default=None,
            sa_type=DateTime(timezone=True),
            sa_column_kwargs={"onupdate": func.now(), "nullable": True},
        )
    return Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": func.now(), "nullable": False},
    )


class BaseUUIDModel(SQLModel):
    """UUID primary key plus created/updated timestamps."""

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)

    created_at: datetime = timestamp_field()
    updated_at: datetime | None = timestamp_field(on_update=True)
