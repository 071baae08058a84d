"""Unauthenticated liveness endpoint."""
import logging
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from db.session import get_async_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Service status plus the result of a trivial database round trip."""

    status: Literal["healthy", "degraded"]
    database: Literal["healthy", "unhealthy"]
    environment: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    """Report whether the API can reach the bookmarks database."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        return HealthResponse(
            status="degraded", database="unhealthy", environment=settings.environment,
        )
    return HealthResponse(status="healthy", database="healthy", environment=settings.environment)
