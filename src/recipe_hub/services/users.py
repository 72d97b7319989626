"""User account lifecycle: registration, login and credential changes."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from recipe_hub.domain.users import (
    AuthResult,
    NewUser,
    Role,
    UserCredentials,
    UserRecord,
)
from recipe_hub.errors import (
    Conflict,
    InternalError,
    NotFound,
    Unauthenticated,
    ValidationError,
)
from recipe_hub.services.passwords import PasswordHasher
from recipe_hub.services.tokens import TokenService

_logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72
USERNAME_LENGTH = (3, 30)


class UserRepository(Protocol):
    """Persistence interface for user accounts."""

    async def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the public view of a user, if present."""

    async def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        """Return a user with its password hash by email."""

    async def get_credentials_by_id(self, user_id: UUID) -> UserCredentials | None:
        """Return a user with its password hash by id."""

    async def find_by_email_or_username(
        self, email: str, username: str
    ) -> list[UserRecord]:
        """Return users colliding on email or username."""

    async def count_users(self, since: datetime | None = None) -> int:
        """Count users, optionally only those created after ``since``."""

    async def create_user(self, new_user: NewUser) -> UserRecord:
        """Insert a user row and return it."""

    async def update_password(self, user_id: UUID, password_hash: str) -> bool:
        """Replace the stored password hash; False when the user is absent."""

    async def record_login(self, user_id: UUID) -> None:
        """Atomically bump the login counter and last login timestamp."""

    async def list_users(self) -> list[UserRecord]:
        """Return all users, newest first."""

    async def set_role(self, user_id: UUID, role: Role) -> UserRecord | None:
        """Update a user's role and return the updated user."""

    async def toggle_active(self, user_id: UUID) -> UserRecord | None:
        """Atomically flip the active flag and return the updated user."""

    async def delete_user(self, user_id: UUID) -> bool:
        """Delete a user; False when the user is absent."""


@dataclass
class UserService:
    """Application service for registration and login."""

    repository: UserRepository
    passwords: PasswordHasher
    tokens: TokenService

    async def register(
        self,
        username: str,
        email: str,
        password: str,
    ) -> AuthResult:
        """Register a user; the very first account becomes an admin."""
        clean_username, clean_email = _normalize_identity(username, email)
        _validate_password(password)
        await self._ensure_unique(clean_email, clean_username)

        existing_users = await self.repository.count_users()
        assigned_role = Role.ADMIN if existing_users == 0 else Role.USER
        user = await self._create(clean_username, clean_email, password, assigned_role)
        _logger.info("Registered user %s with role %s", user.id, user.role.value)
        return AuthResult(user=user, token=self.tokens.issue(user.id))

    async def register_admin(
        self, username: str, email: str, password: str
    ) -> AuthResult:
        """Create an admin account directly (development bootstrap)."""
        clean_username, clean_email = _normalize_identity(username, email)
        _validate_password(password)
        await self._ensure_unique(clean_email, clean_username)
        user = await self._create(clean_username, clean_email, password, Role.ADMIN)
        _logger.info("Created admin account %s", user.id)
        return AuthResult(user=user, token=self.tokens.issue(user.id))

    async def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and issue a token."""
        if not email or not password:
            raise ValidationError("Email and password are required")
        credentials = await self.repository.get_credentials_by_email(
            email.strip().lower()
        )
        if credentials is None or not self.passwords.verify(
            password, credentials.password_hash
        ):
            raise Unauthenticated("Invalid credentials")
        if not credentials.user.is_active:
            raise Unauthenticated("Account is disabled")

        await self.repository.record_login(credentials.user.id)
        user = await self.repository.get_by_id(credentials.user.id)
        if user is None:
            raise Unauthenticated("Invalid credentials")
        _logger.info("Login: %s", user.id)
        return AuthResult(user=user, token=self.tokens.issue(user.id))

    async def change_password(
        self, user_id: UUID, current_password: str, new_password: str
    ) -> None:
        """Replace a user's password after checking the current one."""
        credentials = await self.repository.get_credentials_by_id(user_id)
        if credentials is None:
            raise NotFound("User not found")
        if not self.passwords.verify(current_password, credentials.password_hash):
            raise Unauthenticated("Current password is incorrect")
        _validate_password(new_password)
        password_hash = self._hash(new_password)
        if not await self.repository.update_password(user_id, password_hash):
            raise NotFound("User not found")
        _logger.info("Password changed for user %s", user_id)

    async def get_user(self, user_id: UUID) -> UserRecord:
        """Return a user or raise ``NotFound``."""
        user = await self.repository.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    async def _ensure_unique(self, email: str, username: str) -> None:
        collisions = await self.repository.find_by_email_or_username(email, username)
        for existing in collisions:
            if existing.email == email:
                raise Conflict("email", "Email is already registered")
        if collisions:
            raise Conflict("username", "Username already exists")

    async def _create(
        self, username: str, email: str, password: str, role: Role
    ) -> UserRecord:
        new_user = NewUser(
            username=username,
            email=email,
            password_hash=self._hash(password),
            role=role,
        )
        return await self.repository.create_user(new_user)

    def _hash(self, password: str) -> str:
        try:
            return self.passwords.hash(password)
        except (ValueError, TypeError) as exc:
            _logger.exception("Password hashing failed")
            raise InternalError("Failed to save user", detail=str(exc)) from exc


def _normalize_identity(username: str, email: str) -> tuple[str, str]:
    """Trim the username and lower-case the email."""
    clean_username = (username or "").strip()
    clean_email = (email or "").strip().lower()
    if not clean_username or not clean_email:
        raise ValidationError("Username, email and password are required")
    low, high = USERNAME_LENGTH
    if not low <= len(clean_username) <= high:
        raise ValidationError(f"Username must be between {low} and {high} characters")
    return clean_username, clean_email


def _validate_password(password: str) -> None:
    """Reject passwords bcrypt cannot or should not hash."""
    if not password:
        raise ValidationError("Username, email and password are required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
