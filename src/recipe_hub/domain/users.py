"""Domain models for user accounts."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class Role(str, Enum):
    """Account roles, lowest privilege first."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


@dataclass(frozen=True)
class UserRecord:
    """Public view of a stored user; never carries the password hash."""

    id: UUID
    username: str
    email: str
    role: Role
    is_active: bool = True
    login_count: int = 0
    last_login_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class UserCredentials:
    """A user together with the stored password hash, for login checks."""

    user: UserRecord
    password_hash: str


@dataclass(frozen=True)
class NewUser:
    """Validated data for a user row that has not been inserted yet."""

    username: str
    email: str
    password_hash: str
    role: Role


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful registration or login."""

    user: UserRecord
    token: str
