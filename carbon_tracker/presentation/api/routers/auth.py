"""API router for registration, login and the caller's profile."""

from fastapi import APIRouter, Depends, status

from ....application.services.auth_service import AuthService
from ....core.dependencies import get_auth_service
from ....domain.errors import NotFoundError
from ...api.dependencies import require_user_id
from ...api.schemas.auth import (
    CredentialsPayload,
    LoginResponse,
    MessageResponse,
    UserResponse,
)

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: CredentialsPayload,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    await auth_service.register(payload.email, payload.password)
    return MessageResponse(message="User registered")


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: CredentialsPayload,
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    token, user = await auth_service.login(payload.email, payload.password)
    return LoginResponse(token=token, user=UserResponse(email=user.email))


@router.get("/user", response_model=UserResponse)
async def current_user(
    user_id: int = Depends(require_user_id),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    user = await auth_service.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return UserResponse(email=user.email)
