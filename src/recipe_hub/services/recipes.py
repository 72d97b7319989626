"""Recipe CRUD, listing, search and likes."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from recipe_hub.domain.recipes import Category, LikeResult, Recipe, RecipePage
from recipe_hub.domain.users import UserRecord
from recipe_hub.errors import Forbidden, NotFound, ValidationError

_logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "ingredients",
        "instructions",
        "preparation_time",
        "servings",
        "difficulty",
        "category",
        "image",
    }
)


class RecipeRepository(Protocol):
    """Persistence interface for recipes and their likes."""

    async def create_recipe(
        self, author_id: UUID, author_name: str, payload: dict[str, object]
    ) -> Recipe:
        """Insert a recipe and return it."""

    async def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe by id, if present."""

    async def list_recipes(
        self, category: Category | None, offset: int, limit: int
    ) -> tuple[list[Recipe], int]:
        """Return a newest-first page of recipes and the total count."""

    async def search_recipes(
        self, query: str, offset: int, limit: int
    ) -> tuple[list[Recipe], int]:
        """Case-insensitive substring search over title and description."""

    async def list_by_author(self, author_id: UUID) -> list[Recipe]:
        """Return a user's recipes, newest first."""

    async def list_all(self) -> list[Recipe]:
        """Return every recipe, newest first."""

    async def update_recipe(
        self, recipe_id: UUID, payload: dict[str, object]
    ) -> Recipe | None:
        """Update the given columns and return the recipe."""

    async def delete_recipe(self, recipe_id: UUID) -> bool:
        """Delete a recipe; False when it is absent."""

    async def toggle_like(self, recipe_id: UUID, user_id: UUID) -> LikeResult | None:
        """Atomically add or remove a like; None when the recipe is absent."""

    async def count_recipes(self) -> int:
        """Return the number of recipes."""


@dataclass
class RecipeService:
    """Application service for recipes."""

    repository: RecipeRepository

    async def create(self, author: UserRecord, payload: dict[str, object]) -> Recipe:
        """Create a recipe authored by ``author``."""
        title = str(payload.get("title") or "").strip()
        description = str(payload.get("description") or "").strip()
        if not title or not description:
            raise ValidationError("Title and description are required")
        recipe = await self.repository.create_recipe(
            author.id,
            author.username,
            {**payload, "title": title, "description": description},
        )
        _logger.info("Recipe %s created by %s", recipe.id, author.id)
        return recipe

    async def get(self, recipe_id: UUID) -> Recipe:
        """Return a recipe or raise ``NotFound``."""
        recipe = await self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise NotFound("Recipe not found")
        return recipe

    async def community(
        self, page: int = 1, limit: int = 10, category: Category | None = None
    ) -> RecipePage:
        """Return a page of community recipes, optionally for one category."""
        page, limit = _clamp_page(page, limit)
        recipes, total = await self.repository.list_recipes(
            category, (page - 1) * limit, limit
        )
        return RecipePage(recipes=recipes, page=page, limit=limit, total=total)

    async def search(self, query: str | None, page: int = 1, limit: int = 10) -> RecipePage:
        """Search titles and descriptions; a blank query is rejected."""
        term = (query or "").strip()
        if not term:
            raise ValidationError("Search term is required")
        page, limit = _clamp_page(page, limit)
        recipes, total = await self.repository.search_recipes(
            term, (page - 1) * limit, limit
        )
        return RecipePage(recipes=recipes, page=page, limit=limit, total=total)

    async def my_recipes(self, author: UserRecord) -> list[Recipe]:
        """Return the caller's recipes."""
        return await self.repository.list_by_author(author.id)

    async def list_all(self) -> list[Recipe]:
        """Return every recipe (moderation view)."""
        return await self.repository.list_all()

    async def update(
        self, actor: UserRecord, recipe_id: UUID, payload: dict[str, object]
    ) -> Recipe:
        """Update allowed fields; only the author may edit."""
        recipe = await self.get(recipe_id)
        _ensure_can_manage(actor, recipe, "edit")
        changes = {key: value for key, value in payload.items() if key in UPDATABLE_FIELDS}
        for key in ("title", "description"):
            if key in changes:
                text = str(changes[key] or "").strip()
                if not text:
                    raise ValidationError("Title and description are required")
                changes[key] = text
        if not changes:
            return recipe
        updated = await self.repository.update_recipe(recipe_id, changes)
        if updated is None:
            raise NotFound("Recipe not found")
        _logger.info("Recipe %s updated by %s (%s)", recipe_id, actor.id, actor.role.value)
        return updated

    async def delete(self, actor: UserRecord, recipe_id: UUID) -> None:
        """Delete a recipe; only the author may delete."""
        recipe = await self.get(recipe_id)
        _ensure_can_manage(actor, recipe, "delete")
        if not await self.repository.delete_recipe(recipe_id):
            raise NotFound("Recipe not found")
        _logger.info("Recipe %s deleted by %s (%s)", recipe_id, actor.id, actor.role.value)

    async def toggle_like(self, recipe_id: UUID, user: UserRecord) -> LikeResult:
        """Like the recipe, or remove the like if the user already liked it."""
        result = await self.repository.toggle_like(recipe_id, user.id)
        if result is None:
            raise NotFound("Recipe not found")
        return result


def _ensure_can_manage(actor: UserRecord, recipe: Recipe, action: str) -> None:
    if recipe.author_id == actor.id:
        return
    raise Forbidden(f"You do not have permission to {action} this recipe")


def _clamp_page(page: int, limit: int) -> tuple[int, int]:
    return max(page, 1), min(max(limit, 1), 100)
