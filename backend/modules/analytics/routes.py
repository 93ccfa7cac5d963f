"""
Analytics API endpoints.
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_analytics_service

from .models import ActivityItem, PlatformStats, TrendingTopic
from .service import AnalyticsService, DEFAULT_LIMIT

router = APIRouter()


@router.get("/stats", response_model=PlatformStats)
async def get_stats(
    service: AnalyticsService = Depends(get_analytics_service),
) -> PlatformStats:
    return await service.get_stats()


@router.get("/trending", response_model=list[TrendingTopic])
async def get_trending(
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=50),
    service: AnalyticsService = Depends(get_analytics_service),
) -> list[TrendingTopic]:
    """Most common words (4+ letters) across debate topics."""
    return await service.trending_topics(limit)


@router.get("/activity", response_model=list[ActivityItem])
async def get_activity(
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=50),
    service: AnalyticsService = Depends(get_analytics_service),
) -> list[ActivityItem]:
    """Most recently created debates."""
    return await service.recent_activity(limit)
