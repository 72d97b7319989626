"""Domain models and derived values for user profiles."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class CookingSkill(str, Enum):
    """Self-reported cooking skill."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class PersonalInfo:
    """Body metrics and goals; weight in kg, height in cm."""

    age: float = 0
    weight: float = 0
    height: float = 0
    gender: str = ""
    activity_level: str = ""
    daily_calorie_goal: float = 0
    goal: str = "maintain"
    avatar: str = ""
    last_updated: datetime | None = None


@dataclass(frozen=True)
class HealthInfo:
    """Health-related lists."""

    allergies: list[str] = field(default_factory=list)
    dietary_restrictions: list[str] = field(default_factory=list)
    health_conditions: list[str] = field(default_factory=list)
    health_goals: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Preferences:
    """Food preferences."""

    favorite_cuisines: list[str] = field(default_factory=list)
    disliked_ingredients: list[str] = field(default_factory=list)
    cooking_skills: CookingSkill = CookingSkill.BEGINNER


@dataclass(frozen=True)
class UserProfile:
    """Canonical per-user profile, keyed by user id."""

    user_id: UUID
    personal_info: PersonalInfo
    health_info: HealthInfo
    preferences: Preferences
    bmi: float | None = None
    last_updated: datetime | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class BmiReport:
    """BMI with its category and the inputs it was derived from."""

    bmi: float
    category: str
    weight: float
    height: float


@dataclass(frozen=True)
class ProfileStats:
    """Profile completeness summary."""

    has_personal_info: bool
    has_health_info: bool
    profile_completion: int
    bmi: float | None
    last_updated: datetime | None


def compute_bmi(weight: float | None, height: float | None) -> float | None:
    """Return weight(kg) / height(m)^2, or None when either input is missing."""
    if not weight or not height or weight <= 0 or height <= 0:
        return None
    height_m = height / 100
    return weight / (height_m * height_m)


def bmi_category(bmi: float) -> str:
    """Return the WHO category label for a BMI value."""
    if bmi < 18.5:  # noqa: PLR2004
        return "Underweight"
    if bmi < 25:  # noqa: PLR2004
        return "Normal weight"
    if bmi < 30:  # noqa: PLR2004
        return "Overweight"
    return "Obesity"


def profile_completion(profile: UserProfile) -> int:
    """Return the percentage of the eight tracked fields that are filled in."""
    personal = profile.personal_info
    health = profile.health_info
    tracked = [
        personal.age,
        personal.weight,
        personal.height,
        personal.gender,
        personal.activity_level,
        health.allergies,
        health.health_conditions,
        health.health_goals,
    ]
    filled = sum(1 for value in tracked if value)
    return round(filled / len(tracked) * 100)
