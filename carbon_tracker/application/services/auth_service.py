from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Tuple

import bcrypt
import jwt

from ...domain.errors import (
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    ValidationError,
)
from ...domain.models import User
from ...domain.ports.persistence import UserRepository

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes and newer releases reject longer input.
MAX_PASSWORD_BYTES = 72


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class AuthService:
    """Registers accounts, checks passwords and issues bearer tokens."""

    def __init__(
        self,
        users: UserRepository,
        secret_key: str,
        token_exp_minutes: int = 60,
        bcrypt_rounds: int = 10,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret_key:
            raise RuntimeError("TOKEN_SECRET is not configured.")
        self._users = users
        self._secret_key = secret_key
        self._token_exp_minutes = token_exp_minutes
        self._bcrypt_rounds = bcrypt_rounds
        self._algorithm = algorithm
        self._clock = clock
        # Checked when the email is unknown; both login failures run one bcrypt comparison.
        self._dummy_hash = self._hash_password("not-a-real-password")

    # ------------------------------------------------------------------
    async def register(self, email: Optional[str], password: Optional[str]) -> User:
        if not email or not password:
            raise ValidationError("Email and password required")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        password_hash = await asyncio.to_thread(self._hash_password, password)
        user = await asyncio.to_thread(self._users.create_user, email, password_hash)
        logger.info("Registered user %s", user.id)
        return user

    async def login(self, email: Optional[str], password: Optional[str]) -> Tuple[str, User]:
        if not email or not password:
            raise InvalidCredentialsError()
        user = await asyncio.to_thread(self._users.get_user_by_email, email)
        stored_hash = user.password_hash if user else self._dummy_hash
        matches = await asyncio.to_thread(self._check_password, password, stored_hash)
        if not user or not matches:
            logger.info("Login rejected")
            raise InvalidCredentialsError()
        logger.info("Login succeeded for user %s", user.id)
        return self.create_token(user), user

    def verify(self, token: Optional[str]) -> int:
        """Return the user id embedded in a valid token.

        A token stays valid up to and including its ``exp`` instant.
        """
        if not token:
            raise MissingTokenError()
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError() from exc
        try:
            expires_at = float(payload["exp"])
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as exc:
            raise InvalidTokenError() from exc
        if self._clock().timestamp() > expires_at:
            raise InvalidTokenError()
        return user_id

    def create_token(self, user: User) -> str:
        now = self._clock()
        # Numeric claims keep sub-second precision so expiry lands exactly on iat + lifetime.
        payload = {
            "sub": str(user.id),
            "iat": now.timestamp(),
            "exp": (now + timedelta(minutes=self._token_exp_minutes)).timestamp(),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    async def get_user(self, user_id: int) -> Optional[User]:
        return await asyncio.to_thread(self._users.get_user_by_id, user_id)

    # ------------------------------------------------------------------
    def _hash_password(self, password: str) -> str:
        return bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=self._bcrypt_rounds)
        ).decode("utf-8")

    @staticmethod
    def _check_password(password: str, password_hash: str) -> bool:
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
