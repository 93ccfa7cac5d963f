"""
Analytics module.

Platform counts, trending topic words and recent activity.
"""

from .models import ActivityItem, PlatformStats, TrendingTopic

__all__ = [
    "ActivityItem",
    "PlatformStats",
    "TrendingTopic",
]
