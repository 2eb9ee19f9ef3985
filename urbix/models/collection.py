from datetime import datetime

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel

from urbix.models.base import utc_now


class StoredCollection(SQLModel, table=True):
    """One row per persisted collection; ``payload`` is the full JSON document."""

    __tablename__ = 'collections'

    name: str = Field(primary_key=True, max_length=64)
    payload: str = Field(sa_type=Text, sa_column_kwargs={"nullable": False})
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"nullable": False, "onupdate": utc_now},
    )
