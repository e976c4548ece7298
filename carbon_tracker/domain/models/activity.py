from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Activity:
    id: int
    owner_id: int
    type: str
    value: float
    unit: str
    carbon: float
    timestamp: datetime
