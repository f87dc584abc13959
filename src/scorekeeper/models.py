"""Database models for Scorekeeper."""

import datetime as dt

from sqlmodel import Field, SQLModel


class StoredBlob(SQLModel, table=True):
    """One named value in the local key-value store."""

    key: str = Field(primary_key=True)
    value: str | None = None  # JSON text; None once deleted
    version: int = 1  # bumped on every write
    updated_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )
