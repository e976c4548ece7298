"""Pydantic schemas for account endpoints."""

from typing import Optional

from pydantic import BaseModel


class CredentialsPayload(BaseModel):
    """Email and password as sent by the register and login forms."""

    email: Optional[str] = None
    password: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class UserResponse(BaseModel):
    email: str


class LoginResponse(BaseModel):
    token: str
    user: UserResponse
