"""Threshold rules that turn a user's activities into suggestions and badges."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .models import Activity

TRANSPORT_THRESHOLD = 100
ELECTRICITY_THRESHOLD = 200
CONSISTENT_TRACKER_MIN_COUNT = 10
ECO_WARRIOR_MAX_CARBON = 50

TRANSPORT_SUGGESTION = "Consider carpooling or using public transport."
ELECTRICITY_SUGGESTION = "Switch to LED bulbs or unplug devices."
CONSISTENT_TRACKER_BADGE = "Consistent Tracker: Logged 10+ activities!"
ECO_WARRIOR_BADGE = "Eco Warrior: Kept footprint below 50kg CO₂!"


def _total_value(activities: Iterable[Activity], activity_type: str) -> float:
    return sum(item.value for item in activities if item.type == activity_type)


def carbon_score(activities: Iterable[Activity]) -> float:
    """Total carbon mass of the given activities."""
    return sum(item.carbon for item in activities)


def suggestions(activities: Sequence[Activity]) -> List[str]:
    """Return tips triggered by the user's transport and electricity usage.

    Food has a carbon factor but no suggestion rule.
    """
    result: List[str] = []
    if _total_value(activities, "transport") > TRANSPORT_THRESHOLD:
        result.append(TRANSPORT_SUGGESTION)
    if _total_value(activities, "electricity") > ELECTRICITY_THRESHOLD:
        result.append(ELECTRICITY_SUGGESTION)
    return result


def achievements(activities: Sequence[Activity]) -> List[str]:
    """Return earned badges.

    An empty history totals zero carbon and therefore earns the Eco Warrior badge.
    """
    result: List[str] = []
    if len(activities) > CONSISTENT_TRACKER_MIN_COUNT:
        result.append(CONSISTENT_TRACKER_BADGE)
    if carbon_score(activities) < ECO_WARRIOR_MAX_CARBON:
        result.append(ECO_WARRIOR_BADGE)
    return result
