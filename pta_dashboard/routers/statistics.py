from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.statistics_schemas import DashboardStatistics
from ..services.statistics_service import StatisticsService

router = APIRouter(prefix="/api/v1/statistics", tags=["Statistics"])


@router.get("/", response_model=DashboardStatistics)
async def get_statistics(
    refresh: bool = Query(False, description="Bypass the cached aggregate"),
    db: AsyncSession = Depends(get_db)
):
    """Collection totals, percentage paid and per-class summary"""
    service = StatisticsService(db)
    return await service.get_statistics(use_cache=not refresh)
