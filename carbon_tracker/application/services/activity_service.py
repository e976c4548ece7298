from __future__ import annotations

import asyncio
import logging
import math
from datetime import datetime
from typing import Dict, List, Optional, Union

from ...domain import insights
from ...domain.carbon import CarbonEstimator
from ...domain.errors import ValidationError
from ...domain.models import Activity
from ...domain.ports.persistence import PersistenceGateway

logger = logging.getLogger(__name__)


class ActivityService:
    """Logs activities and derives scores, suggestions, badges and the leaderboard."""

    def __init__(self, persistence: PersistenceGateway, estimator: CarbonEstimator) -> None:
        self._persistence = persistence
        self._estimator = estimator

    async def log_activity(
        self,
        owner_id: int,
        activity_type: str,
        value: float,
        unit: str,
        timestamp: Optional[datetime] = None,
    ) -> Activity:
        carbon = self._estimator.estimate(activity_type, value, unit)
        if not math.isfinite(carbon):
            raise ValidationError("Estimated carbon is out of range")
        activity = await asyncio.to_thread(
            self._persistence.create_activity,
            owner_id,
            activity_type,
            value,
            unit,
            carbon,
            timestamp,
        )
        logger.debug("User %s logged %s activity %s", owner_id, activity_type, activity.id)
        return activity

    async def list_activities(self, owner_id: int) -> List[Activity]:
        return await asyncio.to_thread(self._persistence.list_activities_by_owner, owner_id)

    async def carbon_score(self, owner_id: int) -> float:
        return insights.carbon_score(await self.list_activities(owner_id))

    async def suggestions(self, owner_id: int) -> List[str]:
        return insights.suggestions(await self.list_activities(owner_id))

    async def achievements(self, owner_id: int) -> List[str]:
        return insights.achievements(await self.list_activities(owner_id))

    async def leaderboard(self) -> List[Dict[str, Union[str, float]]]:
        """Every user with their total footprint, lowest first."""
        users = await asyncio.to_thread(self._persistence.list_users)
        scores = await asyncio.gather(*(self.carbon_score(user.id) for user in users))
        entries = [{"email": user.email, "score": score} for user, score in zip(users, scores)]
        entries.sort(key=lambda item: item["score"])
        return entries
