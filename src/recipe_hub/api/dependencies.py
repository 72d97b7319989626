"""FastAPI dependencies for authentication and role checks."""

from collections.abc import Awaitable, Callable

from fastapi import Depends, Header, Request

from recipe_hub.containers import AppContainer
from recipe_hub.domain.users import Role, UserRecord
from recipe_hub.services.auth import ADMIN_ONLY, ADMIN_OR_MODERATOR, ensure_role


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


async def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> UserRecord:
    """Resolve the bearer token to a user and attach it to the request."""
    user = await container.auth_gate.authenticate(authorization)
    request.state.user = user
    return user


def require_role(*allowed: Role) -> Callable[..., Awaitable[UserRecord]]:
    """Build a dependency that admits only users with one of ``allowed``."""
    allowed_roles = frozenset(allowed)

    async def dependency(user: UserRecord = Depends(get_current_user)) -> UserRecord:
        ensure_role(user, allowed_roles)
        return user

    return dependency


require_admin = require_role(*ADMIN_ONLY)
require_moderator = require_role(*ADMIN_OR_MODERATOR)
