from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Protocol

from ..models import Activity, User


class UserRepository(Protocol):
    """Persistence functions related to user accounts."""

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        ...

    def create_user(self, email: str, password_hash: str) -> User:
        ...

    def list_users(self) -> List[User]:
        ...


class ActivityRepository(Protocol):
    """Persistence functions related to logged activities."""

    def create_activity(
        self,
        owner_id: int,
        activity_type: str,
        value: float,
        unit: str,
        carbon: float,
        timestamp: Optional[datetime] = None,
    ) -> Activity:
        ...

    def list_activities_by_owner(self, owner_id: int) -> List[Activity]:
        ...


class PersistenceGateway(UserRepository, ActivityRepository, Protocol):
    """Composite gateway combining every persistence concern used by the app."""

    def close(self) -> None:
        ...
