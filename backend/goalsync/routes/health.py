"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from goalsync.database import Database, get_database

router = APIRouter()


async def database_status(database: Database) -> str:
    return "connected" if await database.ping() else "disconnected"


@router.get("/health")
async def health_check(database: Database = Depends(get_database)):
    """Health check with database connection test."""
    return {
        "status": "ok",
        "database": await database_status(database),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
