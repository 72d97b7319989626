"""Recipe endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from recipe_hub.api import serializers
from recipe_hub.api.dependencies import get_container, get_current_user, require_moderator
from recipe_hub.api.schemas import RecipeCreate, RecipeUpdate
from recipe_hub.containers import AppContainer
from recipe_hub.domain.recipes import Category, RecipePage
from recipe_hub.domain.users import UserRecord
from recipe_hub.errors import ValidationError

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


def _page_response(page: RecipePage) -> dict[str, object]:
    return {
        "success": True,
        "recipes": [serializers.recipe(item) for item in page.recipes],
        "pagination": serializers.pagination(page),
    }


def _parse_category(raw: str | None) -> Category | None:
    value = (raw or "").strip()
    if not value:
        return None
    try:
        return Category(value)
    except ValueError as exc:
        allowed = ", ".join(item.value for item in Category)
        raise ValidationError.from_messages(
            [f"category must be one of {allowed}"]
        ) from exc


@router.get("/all")
async def list_all_recipes(
    _: UserRecord = Depends(require_moderator),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Every recipe, for moderation."""
    recipes = await container.recipe_service.list_all()
    return {
        "success": True,
        "data": [serializers.recipe(item) for item in recipes],
        "count": len(recipes),
    }


@router.get("/community")
async def community_recipes(
    page: int = 1,
    limit: int = 10,
    category: str | None = None,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Newest-first paginated listing, optionally filtered by category."""
    result = await container.recipe_service.community(
        page, limit, _parse_category(category)
    )
    return _page_response(result)


@router.get("/my-recipes")
async def my_recipes(
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    recipes = await container.recipe_service.my_recipes(user)
    return {"success": True, "recipes": [serializers.recipe(item) for item in recipes]}


@router.get("/search")
async def search_recipes(
    q: str | None = None,
    page: int = 1,
    limit: int = 10,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Case-insensitive substring search on title and description."""
    result = await container.recipe_service.search(q, page, limit)
    return _page_response(result)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_recipe(
    body: RecipeCreate,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    recipe = await container.recipe_service.create(user, body.to_payload())
    return {
        "success": True,
        "message": "Recipe created successfully",
        "recipe": serializers.recipe(recipe),
    }


@router.get("/{recipe_id}")
async def get_recipe(
    recipe_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    recipe = await container.recipe_service.get(recipe_id)
    return {"success": True, "recipe": serializers.recipe(recipe)}


@router.post("/{recipe_id}/like")
async def toggle_like(
    recipe_id: UUID,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Like the recipe, or undo an existing like."""
    result = await container.recipe_service.toggle_like(recipe_id, user)
    return {
        "success": True,
        "likesCount": result.likes_count,
        "hasLiked": result.has_liked,
    }


@router.put("/{recipe_id}")
async def update_recipe(
    recipe_id: UUID,
    body: RecipeUpdate,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    recipe = await container.recipe_service.update(user, recipe_id, body.to_payload())
    return {
        "success": True,
        "message": "Recipe updated successfully",
        "recipe": serializers.recipe(recipe),
    }


@router.delete("/{recipe_id}")
async def delete_recipe(
    recipe_id: UUID,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Delete a recipe; only its author may do so."""
    await container.recipe_service.delete(user, recipe_id)
    return {"success": True, "message": "Recipe deleted successfully"}
