"""Database repositories."""

from app.db.repositories.records import RecordRepository

__all__ = [
    "RecordRepository",
]
