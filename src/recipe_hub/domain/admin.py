"""Admin domain models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SystemStats:
    """Content and user counters for the admin dashboard."""

    total_users: int
    total_recipes: int
    total_questions: int
    recent_users: int
    generated_at: datetime
