from dataclasses import dataclass

from ..application.services.activity_service import ActivityService
from ..application.services.auth_service import AuthService
from ..domain.carbon import CarbonEstimator
from ..domain.ports.persistence import PersistenceGateway
from .config import Settings


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    persistence: PersistenceGateway
    estimator: CarbonEstimator
    auth_service: AuthService
    activity_service: ActivityService
