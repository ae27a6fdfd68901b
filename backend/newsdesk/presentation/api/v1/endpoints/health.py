"""Liveness probe; does not open a database connection."""

from fastapi import APIRouter

from newsdesk.config import get_settings
from newsdesk.infrastructure.database import engine

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "database": engine.dialect.name,
    }
