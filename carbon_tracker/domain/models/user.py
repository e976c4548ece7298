"""User domain model for account authentication."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class User:
    """
    Registered account.

    Attributes:
        id: Unique identifier
        email: User email address (unique)
        password_hash: bcrypt hash of the password, never sent to clients
        created_at: Account creation timestamp
    """

    id: int
    email: str
    password_hash: str
    created_at: datetime

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email}>"
