"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import AsyncClient, PostgrestAPIError

from recipe_hub.adapters.supabase_rows import UNIQUE_VIOLATION, parse_timestamp
from recipe_hub.domain.users import NewUser, Role, UserCredentials, UserRecord
from recipe_hub.errors import Conflict, InternalError
from recipe_hub.services.users import UserRepository

_PUBLIC_COLUMNS = (
    "id, username, email, role, is_active, login_count, last_login_at, "
    "created_at, updated_at"
)
_CREDENTIAL_COLUMNS = f"{_PUBLIC_COLUMNS}, password_hash"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: AsyncClient

    async def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the public view of a user, if present."""
        response = (
            await self.client.table("users")
            .select(_PUBLIC_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    async def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        """Return a user with its password hash by email."""
        response = (
            await self.client.table("users")
            .select(_CREDENTIAL_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_credentials(response.data[0])

    async def get_credentials_by_id(self, user_id: UUID) -> UserCredentials | None:
        """Return a user with its password hash by id."""
        response = (
            await self.client.table("users")
            .select(_CREDENTIAL_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_credentials(response.data[0])

    async def find_by_email_or_username(
        self, email: str, username: str
    ) -> list[UserRecord]:
        """Return users colliding on email or username."""
        by_email = (
            await self.client.table("users")
            .select(_PUBLIC_COLUMNS)
            .eq("email", email)
            .execute()
        )
        by_username = (
            await self.client.table("users")
            .select(_PUBLIC_COLUMNS)
            .eq("username", username)
            .execute()
        )
        rows = {row["id"]: row for row in (by_email.data or []) + (by_username.data or [])}
        return [_parse_user(row) for row in rows.values()]

    async def count_users(self, since: datetime | None = None) -> int:
        """Count users, optionally only those created after ``since``."""
        query = self.client.table("users").select("id", count="exact").limit(1)
        if since is not None:
            query = query.gte("created_at", since.isoformat())
        response = await query.execute()
        return response.count or 0

    async def create_user(self, new_user: NewUser) -> UserRecord:
        """Insert a user row and return it."""
        try:
            response = (
                await self.client.table("users")
                .insert(
                    {
                        "username": new_user.username,
                        "email": new_user.email,
                        "password_hash": new_user.password_hash,
                        "role": new_user.role.value,
                    }
                )
                .execute()
            )
        except PostgrestAPIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise _conflict_from(exc) from exc
            raise
        if not response.data:
            raise InternalError("Failed to save user")
        return _parse_user(response.data[0])

    async def update_password(self, user_id: UUID, password_hash: str) -> bool:
        """Replace the stored password hash."""
        response = (
            await self.client.table("users")
            .update({"password_hash": password_hash})
            .eq("id", str(user_id))
            .execute()
        )
        return bool(response.data)

    async def record_login(self, user_id: UUID) -> None:
        """Bump login counters in one statement."""
        await self.client.rpc("record_user_login", {"p_user_id": str(user_id)}).execute()

    async def list_users(self) -> list[UserRecord]:
        """Return all users, newest first."""
        response = (
            await self.client.table("users")
            .select(_PUBLIC_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_user(row) for row in response.data or []]

    async def set_role(self, user_id: UUID, role: Role) -> UserRecord | None:
        """Update a user's role and return the updated user."""
        response = (
            await self.client.table("users")
            .update({"role": role.value})
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    async def toggle_active(self, user_id: UUID) -> UserRecord | None:
        """Flip the active flag in one statement."""
        response = await self.client.rpc(
            "toggle_user_active", {"p_user_id": str(user_id)}
        ).execute()
        if response.data is None:
            return None
        return await self.get_by_id(user_id)

    async def delete_user(self, user_id: UUID) -> bool:
        """Delete a user row."""
        response = (
            await self.client.table("users").delete().eq("id", str(user_id)).execute()
        )
        return bool(response.data)


def _parse_user(row: dict[str, object]) -> UserRecord:
    """Parse a user row into the public domain model."""
    return UserRecord(
        id=UUID(str(row["id"])),
        username=str(row.get("username", "")),
        email=str(row.get("email", "")),
        role=Role(row.get("role") or Role.USER.value),
        is_active=bool(row.get("is_active", True)),
        login_count=int(row.get("login_count") or 0),
        last_login_at=parse_timestamp(row.get("last_login_at")),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


def _parse_credentials(row: dict[str, object]) -> UserCredentials:
    return UserCredentials(
        user=_parse_user(row), password_hash=str(row.get("password_hash", ""))
    )


def _conflict_from(exc: PostgrestAPIError) -> Conflict:
    """Map a unique-constraint violation to the field that collided."""
    text = f"{exc.message or ''} {exc.details or ''}"
    if "email" in text:
        return Conflict("email", "Email is already registered")
    return Conflict("username", "Username already exists")
