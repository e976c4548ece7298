"""Pydantic schemas for activity and insight endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ....domain.models import Activity


class ActivityPayload(BaseModel):
    """Request schema for logging an activity."""

    type: str
    value: float = Field(allow_inf_nan=False)
    unit: str
    date: Optional[datetime] = None


class ActivityResponse(BaseModel):
    """Stored activity as returned to clients."""

    id: int
    owner_id: int = Field(serialization_alias="userId")
    type: str
    value: float
    unit: str
    carbon: float
    timestamp: datetime = Field(serialization_alias="date")

    @classmethod
    def from_domain(cls, activity: Activity) -> "ActivityResponse":
        return cls(
            id=activity.id,
            owner_id=activity.owner_id,
            type=activity.type,
            value=activity.value,
            unit=activity.unit,
            carbon=activity.carbon,
            timestamp=activity.timestamp,
        )


class CarbonScoreResponse(BaseModel):
    score: float


class LeaderboardEntry(BaseModel):
    email: str
    score: float
