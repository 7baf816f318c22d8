"""Helpers shared by the record schemas."""

import datetime
import uuid


def new_id() -> str:
    """Short random identifier for sessions and meal entries."""
    return uuid.uuid4().hex[:12]


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)
