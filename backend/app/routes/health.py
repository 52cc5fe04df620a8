"""
Floreria Backend — Health Check Route
=======================================

What:  Liveness probe at "/" and "/health", answered for any method.
How:   Runs SELECT 1 through the request's session; a database that cannot
       answer turns the probe into a 500 envelope ("Error de base de datos").
Who:   The mobile client on start-up, Docker health checks, uptime monitors.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import DatabaseError
from app.schemas.envelope import Envelope, HealthPayload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Every method except OPTIONS, which the preflight middleware answers first
PROBE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


@router.api_route("/", methods=PROBE_METHODS, response_model=Envelope, include_in_schema=False)
@router.api_route(
    "/health",
    methods=PROBE_METHODS,
    response_model=Envelope,
    summary="Service health check",
)
async def health_check(db: AsyncSession = Depends(get_db_session)) -> Envelope:
    """
    Probe the database and report the server time.

    Returns:
        {"status": "API funcionando", "timestamp": "2025-01-15 12:00:00"}
    """
    try:
        await db.execute(text("SELECT 1 AS ok"))
    except SQLAlchemyError as e:
        logger.warning("Health check: database unreachable: %s", str(e))
        raise DatabaseError(context={"error_type": type(e).__name__})

    payload = HealthPayload(
        status="API funcionando",
        timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
    )
    return Envelope.success(payload.model_dump())
