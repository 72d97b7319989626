"""Profile reads and sparse-merge updates.

Each update is reduced to a dict of stored column values containing only the
fields present in the request, then applied with a single upsert keyed on the
user id. Absent fields are never reset; list fields are replaced wholesale.
BMI is derived by the store from weight and height.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from recipe_hub.domain.profiles import (
    BmiReport,
    CookingSkill,
    ProfileStats,
    UserProfile,
    bmi_category,
    compute_bmi,
    profile_completion,
)
from recipe_hub.errors import ValidationError

_logger = logging.getLogger(__name__)

_PERSONAL_NUMBER_FIELDS = {
    "age": "age",
    "weight": "weight",
    "height": "height",
    "dailyCalorieGoal": "daily_calorie_goal",
}
_PERSONAL_TEXT_FIELDS = {
    "gender": "gender",
    "activityLevel": "activity_level",
    "goal": "goal",
    "avatar": "avatar",
}
_HEALTH_LIST_FIELDS = {
    "allergies": "allergies",
    "dietaryRestrictions": "dietary_restrictions",
    "healthConditions": "health_conditions",
    "healthGoals": "health_goals",
}
_PREFERENCE_LIST_FIELDS = {
    "favoriteCuisines": "favorite_cuisines",
    "dislikedIngredients": "disliked_ingredients",
}
_NUMBER_LABELS = {
    "age": "Age",
    "weight": "Weight",
    "height": "Height",
    "dailyCalorieGoal": "Daily calorie goal",
}


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    async def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user, if present."""

    async def upsert_profile(
        self, user_id: UUID, fields: dict[str, object]
    ) -> UserProfile:
        """Insert a default profile with ``fields`` or update only ``fields``."""


@dataclass
class ProfileService:
    """Application service for profile reads and partial updates."""

    repository: ProfileRepository

    async def get_or_create(self, user_id: UUID) -> UserProfile:
        """Return the user's profile, creating the default one if absent."""
        profile = await self.repository.get_profile(user_id)
        if profile is not None:
            return profile
        _logger.info("Creating default profile for user %s", user_id)
        return await self.repository.upsert_profile(
            user_id, {"last_updated": _now_iso()}
        )

    async def update_personal(
        self, user_id: UUID, data: Mapping[str, object]
    ) -> UserProfile:
        """Merge personal info; weight/height changes refresh the stored BMI."""
        fields = build_personal_fields(data)
        now = _now_iso()
        fields["personal_last_updated"] = now
        fields["last_updated"] = now
        return await self.repository.upsert_profile(user_id, fields)

    async def update_health(
        self, user_id: UUID, data: Mapping[str, object]
    ) -> UserProfile:
        """Merge health info lists."""
        fields = build_health_fields(data)
        fields["last_updated"] = _now_iso()
        return await self.repository.upsert_profile(user_id, fields)

    async def update_preferences(
        self, user_id: UUID, data: Mapping[str, object]
    ) -> UserProfile:
        """Merge food preferences."""
        fields = build_preference_fields(data)
        fields["last_updated"] = _now_iso()
        return await self.repository.upsert_profile(user_id, fields)

    async def bmi_report(self, user_id: UUID) -> BmiReport:
        """Return BMI and category; weight and height must both be set."""
        profile = await self.repository.get_profile(user_id)
        if profile is None:
            raise ValidationError("Weight and height are required to calculate BMI")
        personal = profile.personal_info
        bmi = compute_bmi(personal.weight, personal.height)
        if bmi is None:
            raise ValidationError("Weight and height are required to calculate BMI")
        return BmiReport(
            bmi=bmi,
            category=bmi_category(bmi),
            weight=personal.weight,
            height=personal.height,
        )

    async def stats(self, user_id: UUID) -> ProfileStats:
        """Return completeness stats without creating a profile."""
        profile = await self.repository.get_profile(user_id)
        if profile is None:
            return ProfileStats(
                has_personal_info=False,
                has_health_info=False,
                profile_completion=0,
                bmi=None,
                last_updated=None,
            )
        personal = profile.personal_info
        health = profile.health_info
        return ProfileStats(
            has_personal_info=bool(personal.age or personal.weight or personal.height),
            has_health_info=bool(health.allergies or health.health_goals),
            profile_completion=profile_completion(profile),
            bmi=compute_bmi(personal.weight, personal.height),
            last_updated=profile.last_updated,
        )


def unwrap_section(body: Mapping[str, object], key: str) -> Mapping[str, object]:
    """Accept both ``{"personalInfo": {...}}`` and the bare section object."""
    nested = body.get(key)
    if isinstance(nested, Mapping):
        return nested
    return body


def build_personal_fields(data: Mapping[str, object]) -> dict[str, object]:
    """Return stored columns for the personal-info fields present in ``data``."""
    fields: dict[str, object] = {}
    errors: list[str] = []
    for key, column in _PERSONAL_NUMBER_FIELDS.items():
        if key not in data:
            continue
        number = _coerce_number(data[key])
        if number is None:
            errors.append(f"{_NUMBER_LABELS[key]} must be a valid number")
            continue
        fields[column] = number
    for key, column in _PERSONAL_TEXT_FIELDS.items():
        if key not in data:
            continue
        value = data[key]
        if value is None:
            value = ""
        if not isinstance(value, str):
            errors.append(f"{key} must be a string")
            continue
        fields[column] = value.strip()
    if errors:
        raise ValidationError.from_messages(errors)
    return fields


def build_health_fields(data: Mapping[str, object]) -> dict[str, object]:
    """Return stored columns for the health lists present in ``data``."""
    return _list_fields(data, _HEALTH_LIST_FIELDS)


def build_preference_fields(data: Mapping[str, object]) -> dict[str, object]:
    """Return stored columns for the preferences present in ``data``."""
    fields = _list_fields(data, _PREFERENCE_LIST_FIELDS)
    skill = data.get("cookingSkills")
    if skill:
        try:
            fields["cooking_skills"] = CookingSkill(str(skill).strip().lower()).value
        except ValueError as exc:
            allowed = ", ".join(item.value for item in CookingSkill)
            raise ValidationError.from_messages(
                [f"cookingSkills must be one of {allowed}"]
            ) from exc
    return fields


def clean_string_list(values: list[object]) -> list[str]:
    """Keep non-empty strings, trimmed, in their original order."""
    return [item.strip() for item in values if isinstance(item, str) and item.strip()]


def _list_fields(
    data: Mapping[str, object], mapping: dict[str, str]
) -> dict[str, object]:
    fields: dict[str, object] = {}
    for key, column in mapping.items():
        value = data.get(key)
        if isinstance(value, list):
            fields[column] = clean_string_list(value)
    return fields


def _coerce_number(value: object) -> float | int | None:
    """Return a non-negative finite number, or None when the value is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip()) if value.strip() else 0
        except ValueError:
            return None
    elif value is None:
        number = 0
    else:
        return None
    if not math.isfinite(number) or number < 0:
        return None
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def _now_iso() -> str:
    return datetime.now(tz=UTC).isoformat()
