"""
Key-value entry database model.

Backs the persistent record store: one row per collection key holding
the collection's JSON document.
"""

import datetime

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class KeyValueEntry(SQLModel, table=True):
    """A single persisted collection."""

    __tablename__ = "kv_entries"

    key: str = Field(primary_key=True, max_length=100)
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime.datetime = Field(default_factory=_utcnow)
