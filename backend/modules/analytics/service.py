"""
Analytics service.

Aggregates are computed from storage on each request.
"""

from collections import Counter

from modules.debates.models import DebateStatus
from modules.storage.interfaces import IStorage

from .models import ActivityItem, PlatformStats, TrendingTopic

# Words this short are ignored when ranking topics
MIN_TRENDING_WORD_LENGTH = 4
DEFAULT_LIMIT = 10


class AnalyticsService:
    """Read-only platform analytics."""

    def __init__(self, storage: IStorage):
        self._storage = storage

    async def get_stats(self) -> PlatformStats:
        debates = await self._storage.list_debates()
        arguments = await self._storage.list_all_arguments()
        votes = await self._storage.list_all_votes()
        personas = await self._storage.list_personas()

        return PlatformStats(
            total_debates=len(debates),
            active_debates=sum(
                1 for d in debates if d.status in (DebateStatus.ACTIVE, DebateStatus.PAUSED)
            ),
            completed_debates=sum(1 for d in debates if d.status == DebateStatus.COMPLETED),
            total_arguments=len(arguments),
            total_votes=len(votes),
            total_personas=len(personas),
        )

    async def trending_topics(self, limit: int = DEFAULT_LIMIT) -> list[TrendingTopic]:
        """Most frequent topic words, ties in first-seen order."""
        counts: Counter[str] = Counter()
        for debate in await self._storage.list_debates():
            counts.update(
                word for word in debate.topic.lower().split()
                if len(word) >= MIN_TRENDING_WORD_LENGTH
            )
        return [TrendingTopic(word=word, count=count) for word, count in counts.most_common(limit)]

    async def recent_activity(self, limit: int = DEFAULT_LIMIT) -> list[ActivityItem]:
        debates = await self._storage.list_debates()
        personas = {p.id: p.name for p in await self._storage.list_personas()}
        return [
            ActivityItem(
                id=debate.id,
                topic=debate.topic,
                status=debate.status,
                created_at=debate.created_at,
                persona_a=personas.get(debate.persona_a_id, "Unknown"),
                persona_b=personas.get(debate.persona_b_id, "Unknown"),
            )
            for debate in debates[:limit]
        ]
