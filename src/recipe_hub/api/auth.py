"""Authentication endpoints."""

from datetime import UTC, datetime
from uuid import UUID

from fastapi import APIRouter, Depends, status

from recipe_hub.api import serializers
from recipe_hub.api.dependencies import get_container, get_current_user, require_admin
from recipe_hub.api.schemas import (
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    RoleUpdateRequest,
)
from recipe_hub.containers import AppContainer
from recipe_hub.domain.users import AuthResult, UserRecord
from recipe_hub.errors import NotFound

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(message: str, result: AuthResult) -> dict[str, object]:
    return {
        "success": True,
        "message": message,
        "token": result.token,
        "user": serializers.user_summary(result.user),
    }


@router.get("/health")
async def auth_health() -> dict[str, object]:
    return {
        "success": True,
        "message": "Auth service is running",
        "timestamp": datetime.now(tz=UTC).isoformat(),
    }


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Create an account and return a token for it."""
    result = await container.user_service.register(
        body.username, str(body.email), body.password
    )
    return _auth_response("User registered successfully", result)


@router.post("/login")
async def login(
    body: LoginRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Exchange email and password for a token."""
    result = await container.user_service.login(body.email, body.password)
    return _auth_response("Login successful", result)


@router.get("/me")
async def me(user: UserRecord = Depends(get_current_user)) -> dict[str, object]:
    """Return the authenticated user."""
    return {"success": True, "user": serializers.user_detail(user)}


@router.patch("/password")
async def change_password(
    body: ChangePasswordRequest,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    await container.user_service.change_password(
        user.id, body.current_password, body.new_password
    )
    return {"success": True, "message": "Password updated successfully"}


@router.post("/register-admin", status_code=status.HTTP_201_CREATED)
async def register_admin(
    body: RegisterRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Bootstrap an admin account; unavailable in production."""
    if container.settings.is_production:
        raise NotFound("Route not found: POST /api/auth/register-admin")
    result = await container.user_service.register_admin(
        body.username, str(body.email), body.password
    )
    return _auth_response("Admin account created successfully", result)


@router.patch("/users/{user_id}/role")
async def update_role(
    user_id: UUID,
    body: RoleUpdateRequest,
    admin: UserRecord = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Change another user's role (admin only)."""
    user = await container.admin_service.change_role(admin, user_id, body.role)
    return {
        "success": True,
        "message": "Role updated successfully",
        "user": serializers.user_detail(user),
    }
