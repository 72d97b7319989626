"""Admin service for user management and system statistics."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from recipe_hub.domain.admin import SystemStats
from recipe_hub.domain.users import Role, UserRecord
from recipe_hub.errors import NotFound, ValidationError
from recipe_hub.services.questions import QuestionRepository
from recipe_hub.services.recipes import RecipeRepository
from recipe_hub.services.users import UserRepository

_logger = logging.getLogger(__name__)

RECENT_USERS_WINDOW = timedelta(days=30)


@dataclass
class AdminService:
    """Service for admin dashboards and account management."""

    user_repository: UserRepository
    recipe_repository: RecipeRepository
    question_repository: QuestionRepository

    async def list_users(self) -> list[UserRecord]:
        """Return all users, newest first."""
        return await self.user_repository.list_users()

    async def get_user(self, user_id: UUID) -> UserRecord:
        """Return one user or raise ``NotFound``."""
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    async def change_role(
        self, actor: UserRecord, user_id: UUID, role: Role
    ) -> UserRecord:
        """Set a user's role; admins cannot demote themselves."""
        if actor.id == user_id and role is not Role.ADMIN:
            raise ValidationError("You cannot change your own admin role")
        user = await self.user_repository.set_role(user_id, role)
        if user is None:
            raise NotFound("User not found")
        _logger.info("Role of user %s set to %s by %s", user_id, role.value, actor.id)
        return user

    async def toggle_status(self, actor: UserRecord, user_id: UUID) -> UserRecord:
        """Activate or deactivate another user's account."""
        if actor.id == user_id:
            raise ValidationError("You cannot deactivate your own account")
        user = await self.user_repository.toggle_active(user_id)
        if user is None:
            raise NotFound("User not found")
        _logger.info(
            "User %s is now %s", user_id, "active" if user.is_active else "inactive"
        )
        return user

    async def delete_user(self, actor: UserRecord, user_id: UUID) -> None:
        """Delete another user's account."""
        if actor.id == user_id:
            raise ValidationError("You cannot delete your own account")
        if not await self.user_repository.delete_user(user_id):
            raise NotFound("User not found")
        _logger.info("User %s deleted by %s", user_id, actor.id)

    async def system_stats(self) -> SystemStats:
        """Return user and content counters."""
        now = datetime.now(tz=UTC)
        total_users, total_recipes, total_questions, recent_users = await asyncio.gather(
            self.user_repository.count_users(),
            self.recipe_repository.count_recipes(),
            self.question_repository.count_questions(),
            self.user_repository.count_users(since=now - RECENT_USERS_WINDOW),
        )
        return SystemStats(
            total_users=total_users,
            total_recipes=total_recipes,
            total_questions=total_questions,
            recent_users=recent_users,
            generated_at=now,
        )
