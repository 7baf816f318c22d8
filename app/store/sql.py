"""
SQL storage backend.

Each key is one row of the ``kv_entries`` table.  Any SQLAlchemy error is
re-raised as :class:`~app.core.exceptions.PersistenceFault` so the store
only has to know about one fault type.
"""

import datetime
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.exceptions import PersistenceFault
from app.models.kv_entry import KeyValueEntry
from app.store.base import StorageBackend


class SqlStorageBackend(StorageBackend):
    """Key-value rows in a relational database (SQLite by default)."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def read(self, key: str) -> Optional[str]:
        try:
            with Session(self.engine) as session:
                entry = session.get(KeyValueEntry, key)
                return entry.value if entry else None
        except SQLAlchemyError as e:
            raise PersistenceFault(key, "read", str(e)) from e

    def write(self, key: str, raw: str) -> None:
        try:
            with Session(self.engine) as session:
                entry = session.get(KeyValueEntry, key)
                if entry is None:
                    entry = KeyValueEntry(key=key, value=raw)
                else:
                    entry.value = raw
                    entry.updated_at = datetime.datetime.now(datetime.timezone.utc)
                session.add(entry)
                session.commit()
        except SQLAlchemyError as e:
            raise PersistenceFault(key, "write", str(e)) from e
