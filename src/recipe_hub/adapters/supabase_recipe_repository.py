"""Supabase implementation for recipes and likes."""

from dataclasses import dataclass
from uuid import UUID

from supabase import AsyncClient

from recipe_hub.adapters.supabase_rows import imatch_pattern, parse_timestamp
from recipe_hub.domain.recipes import (
    Category,
    Difficulty,
    Ingredient,
    InstructionStep,
    LikeResult,
    Recipe,
)
from recipe_hub.errors import InternalError
from recipe_hub.services.recipes import RecipeRepository

_RECIPE_COLUMNS = "*, recipe_likes(user_id)"


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed repository for recipes."""

    client: AsyncClient

    async def create_recipe(
        self, author_id: UUID, author_name: str, payload: dict[str, object]
    ) -> Recipe:
        """Create a recipe and return it."""
        response = (
            await self.client.table("recipes")
            .insert(
                {
                    **_to_row(payload),
                    "author_id": str(author_id),
                    "author_name": author_name,
                }
            )
            .execute()
        )
        if not response.data:
            raise InternalError("Failed to create recipe")
        return _parse_recipe(response.data[0])

    async def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe by id, if present."""
        response = (
            await self.client.table("recipes")
            .select(_RECIPE_COLUMNS)
            .eq("id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    async def list_recipes(
        self, category: Category | None, offset: int, limit: int
    ) -> tuple[list[Recipe], int]:
        """Return a newest-first page of recipes and the total count."""
        query = self.client.table("recipes").select(_RECIPE_COLUMNS, count="exact")
        if category is not None:
            query = query.eq("category", category.value)
        response = (
            await query.order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        recipes = [_parse_recipe(row) for row in response.data or []]
        return recipes, response.count or 0

    async def search_recipes(
        self, query: str, offset: int, limit: int
    ) -> tuple[list[Recipe], int]:
        """Case-insensitive substring search over title and description."""
        pattern = imatch_pattern(query)
        response = (
            await self.client.table("recipes")
            .select(_RECIPE_COLUMNS, count="exact")
            .or_(f"title.imatch.{pattern},description.imatch.{pattern}")
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        recipes = [_parse_recipe(row) for row in response.data or []]
        return recipes, response.count or 0

    async def list_by_author(self, author_id: UUID) -> list[Recipe]:
        """Return a user's recipes, newest first."""
        response = (
            await self.client.table("recipes")
            .select(_RECIPE_COLUMNS)
            .eq("author_id", str(author_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    async def list_all(self) -> list[Recipe]:
        """Return every recipe, newest first."""
        response = (
            await self.client.table("recipes")
            .select(_RECIPE_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    async def update_recipe(
        self, recipe_id: UUID, payload: dict[str, object]
    ) -> Recipe | None:
        """Update the given columns and return the recipe."""
        response = (
            await self.client.table("recipes")
            .update(_to_row(payload))
            .eq("id", str(recipe_id))
            .execute()
        )
        if not response.data:
            return None
        return await self.get_recipe(recipe_id)

    async def delete_recipe(self, recipe_id: UUID) -> bool:
        """Delete a recipe; likes and questions cascade."""
        response = (
            await self.client.table("recipes").delete().eq("id", str(recipe_id)).execute()
        )
        return bool(response.data)

    async def toggle_like(self, recipe_id: UUID, user_id: UUID) -> LikeResult | None:
        """Toggle a like inside the ``toggle_recipe_like`` function."""
        response = await self.client.rpc(
            "toggle_recipe_like",
            {"p_recipe_id": str(recipe_id), "p_user_id": str(user_id)},
        ).execute()
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        if not data:
            return None
        return LikeResult(
            likes_count=int(data["likes_count"]), has_liked=bool(data["has_liked"])
        )

    async def count_recipes(self) -> int:
        """Return the number of recipes."""
        response = (
            await self.client.table("recipes").select("id", count="exact").limit(1).execute()
        )
        return response.count or 0


def _to_row(payload: dict[str, object]) -> dict[str, object]:
    """Convert domain values in a payload to JSON-ready column values."""
    row: dict[str, object] = {}
    for key, value in payload.items():
        if isinstance(value, Difficulty | Category):
            row[key] = value.value
        elif key == "ingredients" and isinstance(value, list):
            row[key] = [_ingredient_row(item) for item in value]
        elif key == "instructions" and isinstance(value, list):
            row[key] = [_step_row(item) for item in value]
        else:
            row[key] = value
    return row


def _ingredient_row(item: object) -> dict[str, object]:
    if isinstance(item, Ingredient):
        return {"name": item.name, "quantity": item.quantity, "unit": item.unit}
    return dict(item)  # type: ignore[call-overload]


def _step_row(item: object) -> dict[str, object]:
    if isinstance(item, InstructionStep):
        return {"step": item.step, "description": item.description}
    return dict(item)  # type: ignore[call-overload]


def _parse_recipe(row: dict[str, object]) -> Recipe:
    """Parse a recipe row (with embedded likes) into a domain model."""
    likes = [UUID(str(like["user_id"])) for like in row.get("recipe_likes") or []]
    return Recipe(
        id=UUID(str(row["id"])),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        author_id=UUID(str(row["author_id"])),
        author_name=str(row.get("author_name") or ""),
        ingredients=[
            Ingredient(
                name=str(item.get("name") or ""),
                quantity=str(item.get("quantity") or ""),
                unit=str(item.get("unit") or ""),
            )
            for item in row.get("ingredients") or []
        ],
        instructions=[
            InstructionStep(
                step=int(item.get("step") or 0),
                description=str(item.get("description") or ""),
            )
            for item in row.get("instructions") or []
        ],
        preparation_time=_int_or(row.get("preparation_time"), 30),
        servings=_int_or(row.get("servings"), 4),
        difficulty=Difficulty(row.get("difficulty") or Difficulty.MEDIUM.value),
        category=Category(row.get("category") or Category.GENERAL.value),
        image=str(row.get("image") or ""),
        likes=likes,
        likes_count=int(row.get("likes_count") or 0),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


def _int_or(raw: object, default: int) -> int:
    """Column value as int; ``default`` only when the column is null or absent."""
    return default if raw is None else int(raw)
