from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...application.services.auth_service import AuthService
from ...core.dependencies import get_auth_service

_bearer_scheme = HTTPBearer(auto_error=False)


def require_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> int:
    """Resolve the caller's user id from the bearer token."""
    token = credentials.credentials if credentials else None
    return auth_service.verify(token)
