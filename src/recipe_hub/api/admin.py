"""Admin endpoints for user management and system statistics."""

from uuid import UUID

from fastapi import APIRouter, Depends

from recipe_hub.api import serializers
from recipe_hub.api.dependencies import get_container, require_admin, require_moderator
from recipe_hub.api.schemas import RoleUpdateRequest
from recipe_hub.containers import AppContainer
from recipe_hub.domain.users import UserRecord

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users", dependencies=[Depends(require_admin)])
async def list_users(container: AppContainer = Depends(get_container)) -> dict[str, object]:
    """Return every user without password hashes."""
    users = await container.admin_service.list_users()
    return {"success": True, "data": [serializers.user_detail(user) for user in users]}


@router.get("/users/{user_id}", dependencies=[Depends(require_admin)])
async def user_detail(
    user_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    user = await container.admin_service.get_user(user_id)
    return {"success": True, "data": serializers.user_detail(user)}


@router.patch("/users/{user_id}/role")
async def update_role(
    user_id: UUID,
    body: RoleUpdateRequest,
    admin: UserRecord = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    user = await container.admin_service.change_role(admin, user_id, body.role)
    return {
        "success": True,
        "message": "Role updated successfully",
        "data": serializers.user_detail(user),
    }


@router.patch("/users/{user_id}/toggle-status")
async def toggle_status(
    user_id: UUID,
    admin: UserRecord = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Activate or deactivate an account."""
    user = await container.admin_service.toggle_status(admin, user_id)
    state = "activated" if user.is_active else "deactivated"
    return {
        "success": True,
        "message": f"User {state} successfully",
        "data": {
            "id": str(user.id),
            "username": user.username,
            "isActive": user.is_active,
        },
    }


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: UUID,
    admin: UserRecord = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    await container.admin_service.delete_user(admin, user_id)
    return {"success": True, "message": "User deleted successfully"}


@router.get("/stats", dependencies=[Depends(require_moderator)])
async def system_stats(container: AppContainer = Depends(get_container)) -> dict[str, object]:
    """User and content counters (admins and moderators)."""
    stats = await container.admin_service.system_stats()
    return {"success": True, "data": serializers.system_stats(stats)}
