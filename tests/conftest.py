"""Shared test fixtures."""

import itertools
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from recipe_hub.api.app import create_app
from recipe_hub.config import Settings
from recipe_hub.containers import AppContainer
from recipe_hub.domain.profiles import (
    CookingSkill,
    HealthInfo,
    PersonalInfo,
    Preferences,
    UserProfile,
    compute_bmi,
)
from recipe_hub.domain.questions import Answer, Question
from recipe_hub.domain.recipes import Category, LikeResult, Recipe
from recipe_hub.domain.users import NewUser, Role, UserCredentials, UserRecord
from recipe_hub.errors import Conflict
from recipe_hub.services.admin import AdminService
from recipe_hub.services.auth import AuthGate
from recipe_hub.services.passwords import PasswordHasher
from recipe_hub.services.profiles import ProfileRepository, ProfileService
from recipe_hub.services.questions import QuestionRepository, QuestionService
from recipe_hub.services.recipes import RecipeRepository, RecipeService
from recipe_hub.services.tokens import TokenService
from recipe_hub.services.users import UserRepository, UserService

TEST_JWT_SECRET = "test-secret-with-at-least-thirty-two-bytes"
FAST_BCRYPT_ROUNDS = 4

_clock = itertools.count()


def _tick() -> datetime:
    """Strictly increasing timestamps so newest-first ordering is stable."""
    return datetime(2026, 1, 1, tzinfo=UTC) + timedelta(seconds=next(_clock))


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)
    hashes: dict[UUID, str] = field(default_factory=dict)

    async def get_by_id(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    async def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        for user in self.users.values():
            if user.email == email:
                return UserCredentials(user=user, password_hash=self.hashes[user.id])
        return None

    async def get_credentials_by_id(self, user_id: UUID) -> UserCredentials | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        return UserCredentials(user=user, password_hash=self.hashes[user_id])

    async def find_by_email_or_username(
        self, email: str, username: str
    ) -> list[UserRecord]:
        return [
            user
            for user in self.users.values()
            if user.email == email or user.username == username
        ]

    async def count_users(self, since: datetime | None = None) -> int:
        if since is None:
            return len(self.users)
        return sum(
            1
            for user in self.users.values()
            if user.created_at is not None and user.created_at >= since
        )

    async def create_user(self, new_user: NewUser) -> UserRecord:
        for existing in self.users.values():
            if existing.email == new_user.email:
                raise Conflict("email", "Email is already registered")
            if existing.username == new_user.username:
                raise Conflict("username", "Username already exists")
        now = _tick()
        user = UserRecord(
            id=uuid4(),
            username=new_user.username,
            email=new_user.email,
            role=new_user.role,
            created_at=now,
            updated_at=now,
        )
        self.users[user.id] = user
        self.hashes[user.id] = new_user.password_hash
        return user

    async def update_password(self, user_id: UUID, password_hash: str) -> bool:
        if user_id not in self.users:
            return False
        self.hashes[user_id] = password_hash
        return True

    async def record_login(self, user_id: UUID) -> None:
        user = self.users.get(user_id)
        if user is not None:
            self.users[user_id] = replace(
                user, login_count=user.login_count + 1, last_login_at=_tick()
            )

    async def list_users(self) -> list[UserRecord]:
        return sorted(
            self.users.values(), key=lambda user: user.created_at, reverse=True
        )

    async def set_role(self, user_id: UUID, role: Role) -> UserRecord | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        self.users[user_id] = replace(user, role=role)
        return self.users[user_id]

    async def toggle_active(self, user_id: UUID) -> UserRecord | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        self.users[user_id] = replace(user, is_active=not user.is_active)
        return self.users[user_id]

    async def delete_user(self, user_id: UUID) -> bool:
        self.hashes.pop(user_id, None)
        return self.users.pop(user_id, None) is not None


_PROFILE_DEFAULTS: dict[str, object] = {
    "age": 0,
    "weight": 0,
    "height": 0,
    "gender": "",
    "activity_level": "",
    "daily_calorie_goal": 0,
    "goal": "maintain",
    "avatar": "",
    "personal_last_updated": None,
    "allergies": [],
    "dietary_restrictions": [],
    "health_conditions": [],
    "health_goals": [],
    "favorite_cuisines": [],
    "disliked_ingredients": [],
    "cooking_skills": "beginner",
    "last_updated": None,
}


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """Stores profile rows as column dicts; BMI behaves like a generated column."""

    rows: dict[UUID, dict[str, object]] = field(default_factory=dict)
    upserts: list[dict[str, object]] = field(default_factory=list)

    async def get_profile(self, user_id: UUID) -> UserProfile | None:
        row = self.rows.get(user_id)
        return _profile_from_row(user_id, row) if row is not None else None

    async def upsert_profile(
        self, user_id: UUID, fields: dict[str, object]
    ) -> UserProfile:
        self.upserts.append(dict(fields))
        row = self.rows.setdefault(user_id, {**_PROFILE_DEFAULTS, "created_at": _tick()})
        row.update(fields)
        return _profile_from_row(user_id, row)


def _timestamp(value: object) -> datetime | None:
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return value if isinstance(value, datetime) else None


def _profile_from_row(user_id: UUID, row: dict[str, object]) -> UserProfile:
    weight = row["weight"]
    height = row["height"]
    return UserProfile(
        user_id=user_id,
        personal_info=PersonalInfo(
            age=row["age"],
            weight=weight,
            height=height,
            gender=row["gender"],
            activity_level=row["activity_level"],
            daily_calorie_goal=row["daily_calorie_goal"],
            goal=row["goal"],
            avatar=row["avatar"],
            last_updated=_timestamp(row["personal_last_updated"]),
        ),
        health_info=HealthInfo(
            allergies=list(row["allergies"]),
            dietary_restrictions=list(row["dietary_restrictions"]),
            health_conditions=list(row["health_conditions"]),
            health_goals=list(row["health_goals"]),
        ),
        preferences=Preferences(
            favorite_cuisines=list(row["favorite_cuisines"]),
            disliked_ingredients=list(row["disliked_ingredients"]),
            cooking_skills=CookingSkill(row["cooking_skills"]),
        ),
        bmi=compute_bmi(weight, height),
        last_updated=_timestamp(row["last_updated"]),
        created_at=_timestamp(row.get("created_at")),
    )


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository; like toggles are applied in one step."""

    recipes: dict[UUID, Recipe] = field(default_factory=dict)

    async def create_recipe(
        self, author_id: UUID, author_name: str, payload: dict[str, object]
    ) -> Recipe:
        now = _tick()
        recipe = Recipe(
            id=uuid4(),
            author_id=author_id,
            author_name=author_name,
            created_at=now,
            updated_at=now,
            **payload,
        )
        self.recipes[recipe.id] = recipe
        return recipe

    async def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        return self.recipes.get(recipe_id)

    async def list_recipes(
        self, category: Category | None, offset: int, limit: int
    ) -> tuple[list[Recipe], int]:
        matches = [
            recipe
            for recipe in self._newest_first()
            if category is None or recipe.category is category
        ]
        return matches[offset : offset + limit], len(matches)

    async def search_recipes(
        self, query: str, offset: int, limit: int
    ) -> tuple[list[Recipe], int]:
        needle = query.lower()
        matches = [
            recipe
            for recipe in self._newest_first()
            if needle in recipe.title.lower() or needle in recipe.description.lower()
        ]
        return matches[offset : offset + limit], len(matches)

    async def list_by_author(self, author_id: UUID) -> list[Recipe]:
        return [r for r in self._newest_first() if r.author_id == author_id]

    async def list_all(self) -> list[Recipe]:
        return self._newest_first()

    async def update_recipe(
        self, recipe_id: UUID, payload: dict[str, object]
    ) -> Recipe | None:
        recipe = self.recipes.get(recipe_id)
        if recipe is None:
            return None
        self.recipes[recipe_id] = replace(recipe, updated_at=_tick(), **payload)
        return self.recipes[recipe_id]

    async def delete_recipe(self, recipe_id: UUID) -> bool:
        return self.recipes.pop(recipe_id, None) is not None

    async def toggle_like(self, recipe_id: UUID, user_id: UUID) -> LikeResult | None:
        recipe = self.recipes.get(recipe_id)
        if recipe is None:
            return None
        if user_id in recipe.likes:
            likes = [liker for liker in recipe.likes if liker != user_id]
        else:
            likes = [*recipe.likes, user_id]
        self.recipes[recipe_id] = replace(recipe, likes=likes, likes_count=len(likes))
        return LikeResult(likes_count=len(likes), has_liked=user_id in likes)

    async def count_recipes(self) -> int:
        return len(self.recipes)

    def _newest_first(self) -> list[Recipe]:
        return sorted(
            self.recipes.values(), key=lambda recipe: recipe.created_at, reverse=True
        )


@dataclass
class InMemoryQuestionRepository(QuestionRepository):
    """In-memory questions; resolve and delete are conditional on the author."""

    questions: dict[UUID, Question] = field(default_factory=dict)

    async def create_question(
        self, recipe_id: UUID, author_id: UUID, author_name: str, text: str
    ) -> Question:
        now = _tick()
        question = Question(
            id=uuid4(),
            recipe_id=recipe_id,
            author_id=author_id,
            author_name=author_name,
            question=text,
            created_at=now,
            updated_at=now,
        )
        self.questions[question.id] = question
        return question

    async def get_question(self, question_id: UUID) -> Question | None:
        return self.questions.get(question_id)

    async def list_for_recipe(self, recipe_id: UUID) -> list[Question]:
        return [q for q in await self.list_all() if q.recipe_id == recipe_id]

    async def list_all(self) -> list[Question]:
        return sorted(
            self.questions.values(), key=lambda question: question.created_at, reverse=True
        )

    async def add_answer(
        self, question_id: UUID, author_id: UUID, author_name: str, text: str
    ) -> bool:
        question = self.questions.get(question_id)
        if question is None:
            return False
        answer = Answer(
            id=uuid4(),
            author_id=author_id,
            author_name=author_name,
            answer=text,
            created_at=_tick(),
        )
        self.questions[question_id] = replace(
            question, answers=[*question.answers, answer]
        )
        return True

    async def resolve_question(
        self, question_id: UUID, author_id: UUID
    ) -> Question | None:
        question = self.questions.get(question_id)
        if question is None or question.author_id != author_id:
            return None
        self.questions[question_id] = replace(question, is_resolved=True)
        return self.questions[question_id]

    async def delete_question(self, question_id: UUID, author_id: UUID) -> bool:
        question = self.questions.get(question_id)
        if question is None or question.author_id != author_id:
            return False
        del self.questions[question_id]
        return True

    async def count_questions(self) -> int:
        return len(self.questions)


def make_user(role: Role = Role.USER, username: str | None = None) -> UserRecord:
    """Build a user record that is not stored anywhere."""
    name = username or f"user-{uuid4().hex[:8]}"
    return UserRecord(id=uuid4(), username=name, email=f"{name}@example.com", role=role)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register(
    client: TestClient, username: str, password: str = "secret123"
) -> dict[str, object]:
    """Register through the API and return the response body."""
    response = client.post(
        "/api/auth/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=FAST_BCRYPT_ROUNDS,
        environment="test",
    )


@pytest.fixture
def passwords() -> PasswordHasher:
    return PasswordHasher(rounds=FAST_BCRYPT_ROUNDS)


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(secret=TEST_JWT_SECRET)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def question_repository() -> InMemoryQuestionRepository:
    return InMemoryQuestionRepository()


@pytest.fixture
def container(
    settings: Settings,
    passwords: PasswordHasher,
    tokens: TokenService,
    user_repository: InMemoryUserRepository,
    recipe_repository: InMemoryRecipeRepository,
    question_repository: InMemoryQuestionRepository,
) -> AppContainer:
    async def check_store() -> None:
        await user_repository.count_users()

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_gate=AuthGate(tokens=tokens, users=user_repository),
        user_service=UserService(user_repository, passwords, tokens),
        profile_service=ProfileService(InMemoryProfileRepository()),
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


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))
