from typing import List

from fastapi import APIRouter, Depends, status

from ....application.services.activity_service import ActivityService
from ....core.dependencies import get_activity_service
from ...api.dependencies import require_user_id
from ...api.schemas.activity import ActivityPayload, ActivityResponse, CarbonScoreResponse

router = APIRouter(prefix="/api", tags=["Activities"])


@router.get("/activities", response_model=List[ActivityResponse])
async def list_activities(
    user_id: int = Depends(require_user_id),
    activity_service: ActivityService = Depends(get_activity_service),
) -> List[ActivityResponse]:
    activities = await activity_service.list_activities(user_id)
    return [ActivityResponse.from_domain(item) for item in activities]


@router.post("/activities", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def log_activity(
    payload: ActivityPayload,
    user_id: int = Depends(require_user_id),
    activity_service: ActivityService = Depends(get_activity_service),
) -> ActivityResponse:
    activity = await activity_service.log_activity(
        user_id,
        payload.type,
        payload.value,
        payload.unit,
        timestamp=payload.date,
    )
    return ActivityResponse.from_domain(activity)


@router.get("/carbon-score", response_model=CarbonScoreResponse)
async def carbon_score(
    user_id: int = Depends(require_user_id),
    activity_service: ActivityService = Depends(get_activity_service),
) -> CarbonScoreResponse:
    return CarbonScoreResponse(score=await activity_service.carbon_score(user_id))
