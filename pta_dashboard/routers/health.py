"""Health check endpoints."""
from fastapi import APIRouter
import logging

from ..core.config import settings
from ..core.database import health_check_db
from ..core.cache import cache_manager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["Health"])


@router.get("/")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "service": "PTA Payment Tracker",
        "version": settings.app_version,
    }


@router.get("/db")
async def database_health():
    """Database connectivity check"""
    healthy = await health_check_db()
    return {"status": "healthy" if healthy else "unhealthy", "database": "connected" if healthy else "unreachable"}


@router.get("/full")
async def full_health_check():
    """Comprehensive health check"""
    health_status = {
        "service": "healthy",
        "database": "healthy" if await health_check_db() else "unhealthy",
        "cache": "disabled" if not cache_manager.enabled else "enabled",
    }

    overall_status = "healthy" if health_status["database"] == "healthy" else "degraded"

    return {
        "status": overall_status,
        "components": health_status,
    }
