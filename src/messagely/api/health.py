"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running and,
for the sql backend, that the database is reachable.
"""

from fastapi import APIRouter
from sqlalchemy import text

from messagely import __version__
from messagely.config import settings
from messagely.db.engine import engine

router = APIRouter()


@router.get("/health")
async def health_check():
    """Check server health and storage connectivity."""
    checks = {"server": "ok", "version": __version__, "storage": settings.storage_backend}

    if settings.storage_backend == "sql":
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            checks["database"] = "ok"
        except Exception as e:
            checks["database"] = f"error: {e}"

    status = "healthy" if checks.get("database", "ok") == "ok" else "degraded"
    return {"status": status, **checks}
