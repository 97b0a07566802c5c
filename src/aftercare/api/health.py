"""Health check endpoint.

Verifies the server is running and the database is reachable. Mounted at
the root (/health), outside the API prefix, so load balancers can probe
it without knowing the API version.
"""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from aftercare import __version__

logger = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Check server health and database connectivity."""
    try:
        async with request.app.state.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        database = "ok"
    except (OSError, SQLAlchemyError) as e:
        logger.warning("health.database_unreachable", error=str(e))
        database = "unreachable"

    return {
        "status": "OK" if database == "ok" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "database": database,
    }
