"""Domain models for the carbon tracker."""

from .activity import Activity
from .user import User

__all__ = [
    "Activity",
    "User",
]
