import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ...domain.errors import DuplicateEmailError
from ...domain.models import Activity, User
from ...domain.ports.persistence import PersistenceGateway


class SQLitePersistence(PersistenceGateway):
    """SQLite-backed implementation of the persistence gateway."""

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._lock = threading.Lock()
        self._initialize()

    def _initialize(self) -> None:
        with self._lock, self._conn:
            self._conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    email TEXT NOT NULL UNIQUE,
                    password_hash TEXT NOT NULL,
                    created_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS activities (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id INTEGER NOT NULL,
                    type TEXT NOT NULL,
                    value REAL,
                    unit TEXT NOT NULL,
                    carbon REAL,
                    created_at TEXT NOT NULL,
                    FOREIGN KEY(user_id) REFERENCES users(id)
                );

                CREATE INDEX IF NOT EXISTS idx_activities_user_id
                    ON activities(user_id);
                """
            )

    def close(self) -> None:
        self._conn.close()

    # UserRepository API ----------------------------------------------------
    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            cur = self._conn.execute("SELECT * FROM users WHERE email = ?", (email,))
            row = cur.fetchone()
        return self._row_to_user(row) if row else None

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            cur = self._conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = cur.fetchone()
        return self._row_to_user(row) if row else None

    def create_user(self, email: str, password_hash: str) -> User:
        now = self._now()
        try:
            with self._lock, self._conn:
                cur = self._conn.execute(
                    "INSERT INTO users (email, password_hash, created_at) VALUES (?, ?, ?)",
                    (email, password_hash, now),
                )
                user_id = cur.lastrowid
                cur = self._conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
                row = cur.fetchone()
        except sqlite3.IntegrityError as exc:
            raise DuplicateEmailError() from exc
        if not row:
            raise RuntimeError("Failed to persist user.")
        return self._row_to_user(row)

    def list_users(self) -> List[User]:
        with self._lock:
            cur = self._conn.execute("SELECT * FROM users ORDER BY id")
            rows = cur.fetchall()
        return [self._row_to_user(row) for row in rows]

    # ActivityRepository API ------------------------------------------------
    def create_activity(
        self,
        owner_id: int,
        activity_type: str,
        value: float,
        unit: str,
        carbon: float,
        timestamp: Optional[datetime] = None,
    ) -> Activity:
        created_at = self._format_datetime(timestamp) if timestamp else self._now()
        with self._lock, self._conn:
            cur = self._conn.execute(
                """
                INSERT INTO activities (user_id, type, value, unit, carbon, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (owner_id, activity_type, value, unit, carbon, created_at),
            )
            activity_id = cur.lastrowid
            cur = self._conn.execute("SELECT * FROM activities WHERE id = ?", (activity_id,))
            row = cur.fetchone()
        if not row:
            raise RuntimeError("Failed to persist activity.")
        return self._row_to_activity(row)

    def list_activities_by_owner(self, owner_id: int) -> List[Activity]:
        with self._lock:
            cur = self._conn.execute(
                "SELECT * FROM activities WHERE user_id = ? ORDER BY id", (owner_id,)
            )
            rows = cur.fetchall()
        return [self._row_to_activity(row) for row in rows]

    # Helpers ----------------------------------------------------------------
    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _format_datetime(value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()

    @staticmethod
    def _parse_datetime(value: str) -> datetime:
        result = datetime.fromisoformat(value)
        if result.tzinfo is None:
            return result.replace(tzinfo=timezone.utc)
        return result.astimezone(timezone.utc)

    def _row_to_user(self, row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            email=row["email"],
            password_hash=row["password_hash"],
            created_at=self._parse_datetime(row["created_at"]),
        )

    def _row_to_activity(self, row: sqlite3.Row) -> Activity:
        return Activity(
            id=row["id"],
            owner_id=row["user_id"],
            type=row["type"],
            value=row["value"],
            unit=row["unit"],
            carbon=row["carbon"],
            timestamp=self._parse_datetime(row["created_at"]),
        )
