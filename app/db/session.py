"""
Database engine management.

Provides the SQLModel engine that backs the persistent record store.
"""

from typing import Any

from sqlalchemy.engine import Engine
from sqlmodel import create_engine

from app.core.config import settings


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for *database_url*.

    SQLite connections are shared across the server's worker threads, so
    the same-thread check is disabled for them.
    """
    connect_args: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=echo, connect_args=connect_args, pool_pre_ping=True)


# Create database engine
engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
