"""Profile endpoints: upsert-on-read and sparse section merges."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from recipe_hub.api import serializers
from recipe_hub.api.dependencies import get_container, get_current_user
from recipe_hub.containers import AppContainer
from recipe_hub.domain.users import UserRecord
from recipe_hub.services.profiles import unwrap_section

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("")
async def get_profile(
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's profile, creating the default one on first read."""
    profile = await container.profile_service.get_or_create(user.id)
    return {"success": True, "profile": serializers.profile(profile)}


@router.patch("/personal")
async def update_personal(
    body: dict[str, Any] = Body(...),
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    profile = await container.profile_service.update_personal(
        user.id, unwrap_section(body, "personalInfo")
    )
    return {
        "success": True,
        "message": "Personal information updated successfully",
        "profile": serializers.profile(profile),
    }


@router.patch("/health")
async def update_health(
    body: dict[str, Any] = Body(...),
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    profile = await container.profile_service.update_health(
        user.id, unwrap_section(body, "healthInfo")
    )
    return {
        "success": True,
        "message": "Health information updated successfully",
        "profile": serializers.profile(profile),
    }


@router.patch("/preferences")
async def update_preferences(
    body: dict[str, Any] = Body(...),
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    profile = await container.profile_service.update_preferences(
        user.id, unwrap_section(body, "preferences")
    )
    return {
        "success": True,
        "message": "Preferences updated successfully",
        "profile": serializers.profile(profile),
    }


@router.get("/bmi")
async def get_bmi(
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return BMI and its category; requires weight and height."""
    report = await container.profile_service.bmi_report(user.id)
    return {"success": True, **serializers.bmi_report(report)}


@router.get("/stats")
async def get_stats(
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    stats = await container.profile_service.stats(user.id)
    return {"success": True, "stats": serializers.profile_stats(stats)}
