"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import AsyncClient

from recipe_hub.adapters.supabase_profile_repository import SupabaseProfileRepository
from recipe_hub.adapters.supabase_question_repository import (
    SupabaseQuestionRepository,
)
from recipe_hub.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from recipe_hub.adapters.supabase_user_repository import SupabaseUserRepository
from recipe_hub.config import Settings
from recipe_hub.services.admin import AdminService
from recipe_hub.services.auth import AuthGate
from recipe_hub.services.passwords import PasswordHasher
from recipe_hub.services.profiles import ProfileService
from recipe_hub.services.questions import QuestionService
from recipe_hub.services.recipes import RecipeService
from recipe_hub.services.tokens import TokenService
from recipe_hub.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_gate: AuthGate
    user_service: UserService
    profile_service: ProfileService
    recipe_service: RecipeService
    question_service: QuestionService
    admin_service: AdminService
    check_store: Callable[[], Awaitable[None]]
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = AsyncClient(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)
    recipe_repository = SupabaseRecipeRepository(supabase_client)
    question_repository = SupabaseQuestionRepository(supabase_client)
    tokens = TokenService(
        secret=resolved_settings.jwt_secret,
        expires_in=timedelta(days=resolved_settings.jwt_expires_in_days),
        algorithm=resolved_settings.jwt_algorithm,
    )
    passwords = PasswordHasher(rounds=resolved_settings.bcrypt_rounds)

    async def check_store() -> None:
        await user_repository.count_users()

    async def close_resources() -> None:
        await supabase_client.postgrest.aclose()

    return AppContainer(
        settings=resolved_settings,
        auth_gate=AuthGate(tokens=tokens, users=user_repository),
        user_service=UserService(user_repository, passwords, tokens),
        profile_service=ProfileService(profile_repository),
        recipe_service=RecipeService(recipe_repository),
        question_service=QuestionService(question_repository, recipe_repository),
        admin_service=AdminService(
            user_repository=user_repository,
            recipe_repository=recipe_repository,
            question_repository=question_repository,
        ),
        check_store=check_store,
        close_resources=close_resources,
    )
