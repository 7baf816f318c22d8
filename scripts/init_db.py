"""
Database initialization script.

Creates the key-value table backing the record store in the database
named by DATABASE_URL (a local SQLite file by default).

Usage:
    python scripts/init_db.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.logging import setup_logging
from app.db.init_db import init_db

if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    print("=" * 50)
    print("Big3 Trainer Database Initialization")
    print("=" * 50)
    print()

    try:
        init_db()
        print()
        print("=" * 50)
        print(f"SUCCESS: Database initialized at {settings.DATABASE_URL}")
        print("=" * 50)
        sys.exit(0)

    except SQLAlchemyError as e:
        print()
        print("=" * 50)
        print("ERROR: Database initialization failed!")
        print(f"Details: {e}")
        print("=" * 50)
        sys.exit(1)
