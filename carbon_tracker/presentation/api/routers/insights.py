from typing import List

from fastapi import APIRouter, Depends

from ....application.services.activity_service import ActivityService
from ....core.dependencies import get_activity_service
from ...api.dependencies import require_user_id
from ...api.schemas.activity import LeaderboardEntry

router = APIRouter(prefix="/api", tags=["Insights"])


@router.get("/suggestions", response_model=List[str])
async def suggestions(
    user_id: int = Depends(require_user_id),
    activity_service: ActivityService = Depends(get_activity_service),
) -> List[str]:
    return await activity_service.suggestions(user_id)


@router.get("/achievements", response_model=List[str])
async def achievements(
    user_id: int = Depends(require_user_id),
    activity_service: ActivityService = Depends(get_activity_service),
) -> List[str]:
    return await activity_service.achievements(user_id)


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
async def leaderboard(
    activity_service: ActivityService = Depends(get_activity_service),
) -> List[LeaderboardEntry]:
    entries = await activity_service.leaderboard()
    return [LeaderboardEntry(**entry) for entry in entries]
