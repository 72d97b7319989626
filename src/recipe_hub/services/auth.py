"""Request authentication and role authorization.

``AuthGate.authenticate`` resolves an ``Authorization`` header to a user
without touching store state; ``ensure_role`` is the single role check
layered on top of it.
"""

import logging
from collections.abc import Collection
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from recipe_hub.domain.users import Role, UserRecord
from recipe_hub.errors import Forbidden, Unauthenticated
from recipe_hub.services.tokens import TokenService

_logger = logging.getLogger(__name__)

_BEARER_PREFIX = "bearer "


class IdentityLookup(Protocol):
    """Read-only user lookup used by the auth gate."""

    async def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the public view of a user, if present."""


def extract_bearer_token(header: str | None) -> str:
    """Return the token from a ``Bearer <token>`` or bare ``<token>`` header."""
    if header is None:
        raise Unauthenticated("No token provided")
    value = header.strip()
    if value.lower().startswith(_BEARER_PREFIX) or value.lower() == "bearer":
        value = value[len(_BEARER_PREFIX) :].strip()
    if not value:
        raise Unauthenticated("Malformed authorization header")
    return value


@dataclass
class AuthGate:
    """Resolves bearer tokens to authenticated users."""

    tokens: TokenService
    users: IdentityLookup

    async def authenticate(self, authorization: str | None) -> UserRecord:
        """Return the user behind a header or raise an ``Unauthenticated`` error."""
        token = extract_bearer_token(authorization)
        claims = self.tokens.verify(token)
        user = await self.users.get_by_id(claims.user_id)
        if user is None:
            _logger.info("Token for unknown user %s rejected", claims.user_id)
            raise Unauthenticated("User not found")
        if not user.is_active:
            raise Unauthenticated("Account is disabled")
        return user


def ensure_role(user: UserRecord, allowed: Collection[Role]) -> None:
    """Raise ``Forbidden`` unless the user's role is allowed."""
    if user.role not in allowed:
        _logger.info(
            "User %s with role %s denied; requires one of %s",
            user.id,
            user.role.value,
            sorted(role.value for role in allowed),
        )
        raise Forbidden("Insufficient permissions")


ADMIN_ONLY = frozenset({Role.ADMIN})
ADMIN_OR_MODERATOR = frozenset({Role.ADMIN, Role.MODERATOR})
