"""Supabase repository for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import AsyncClient

from recipe_hub.adapters.supabase_rows import parse_timestamp, text_list
from recipe_hub.domain.profiles import (
    CookingSkill,
    HealthInfo,
    PersonalInfo,
    Preferences,
    UserProfile,
)
from recipe_hub.errors import InternalError
from recipe_hub.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the ``user_profiles`` table."""

    client: AsyncClient

    async def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile for a user."""
        response = (
            await self.client.table("user_profiles")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    async def upsert_profile(
        self, user_id: UUID, fields: dict[str, object]
    ) -> UserProfile:
        """Insert with column defaults, or update only the supplied columns.

        ``bmi`` is a generated column and is recomputed by the database.
        """
        response = (
            await self.client.table("user_profiles")
            .upsert({"user_id": str(user_id), **fields}, on_conflict="user_id")
            .execute()
        )
        if not response.data:
            raise InternalError("Failed to save profile")
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> UserProfile:
    """Parse a profile row into a domain model."""
    bmi = row.get("bmi")
    return UserProfile(
        user_id=UUID(str(row["user_id"])),
        personal_info=PersonalInfo(
            age=_number(row.get("age")),
            weight=_number(row.get("weight")),
            height=_number(row.get("height")),
            gender=str(row.get("gender") or ""),
            activity_level=str(row.get("activity_level") or ""),
            daily_calorie_goal=_number(row.get("daily_calorie_goal")),
            goal=str(row.get("goal") or "maintain"),
            avatar=str(row.get("avatar") or ""),
            last_updated=parse_timestamp(row.get("personal_last_updated")),
        ),
        health_info=HealthInfo(
            allergies=text_list(row.get("allergies")),
            dietary_restrictions=text_list(row.get("dietary_restrictions")),
            health_conditions=text_list(row.get("health_conditions")),
            health_goals=text_list(row.get("health_goals")),
        ),
        preferences=Preferences(
            favorite_cuisines=text_list(row.get("favorite_cuisines")),
            disliked_ingredients=text_list(row.get("disliked_ingredients")),
            cooking_skills=CookingSkill(row.get("cooking_skills") or "beginner"),
        ),
        bmi=float(bmi) if bmi is not None else None,
        last_updated=parse_timestamp(row.get("last_updated")),
        created_at=parse_timestamp(row.get("created_at")),
    )


def _number(raw: object) -> float:
    if raw is None:
        return 0
    number = float(raw)
    return int(number) if number.is_integer() else number
