#!/usr/bin/env python
"""Create the database tables."""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from goalsync.config import get_settings
from goalsync.database import Database


async def init_db():
    """Create all tables."""
    settings = get_settings()
    database = Database(settings.database_url_str, create_tables=True)
    print("Creating database tables...")
    await database.connect()
    try:
        if await database.ping():
            print("✓ Tables created")
        else:
            print("✗ Database not reachable")
    finally:
        await database.disconnect()

    print("\nDatabase initialized successfully!")

if __name__ == "__main__":
    asyncio.run(init_db())
