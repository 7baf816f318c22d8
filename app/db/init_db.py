"""
Database initialization.

Creates the key-value table backing the record store.
"""

import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Initialize database schema.

    Creates every SQLModel table that does not exist yet.
    """

    # Import all models so SQLModel.metadata has them
    import app.db.base  # noqa: F401

    target = engine or default_engine
    logger.info("Creating database tables on %s", target.url)
    SQLModel.metadata.create_all(target)


if __name__ == "__main__":
    init_db()
