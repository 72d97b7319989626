"""Wire representations of domain objects (camelCase JSON)."""

from datetime import datetime

from recipe_hub.domain.admin import SystemStats
from recipe_hub.domain.profiles import BmiReport, ProfileStats, UserProfile
from recipe_hub.domain.questions import Answer, Question
from recipe_hub.domain.recipes import Recipe, RecipePage
from recipe_hub.domain.users import UserRecord


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def user_summary(user: UserRecord) -> dict[str, object]:
    """Identity returned by the auth endpoints."""
    return {
        "id": str(user.id),
        "username": user.username,
        "email": user.email,
        "role": user.role.value,
    }


def user_detail(user: UserRecord) -> dict[str, object]:
    """Full public view of a user; never includes the password hash."""
    return {
        **user_summary(user),
        "isActive": user.is_active,
        "loginCount": user.login_count,
        "lastLogin": _iso(user.last_login_at),
        "createdAt": _iso(user.created_at),
        "updatedAt": _iso(user.updated_at),
    }


def profile(item: UserProfile) -> dict[str, object]:
    personal = item.personal_info
    health = item.health_info
    preferences = item.preferences
    return {
        "userId": str(item.user_id),
        "personalInfo": {
            "age": personal.age,
            "weight": personal.weight,
            "height": personal.height,
            "gender": personal.gender,
            "activityLevel": personal.activity_level,
            "dailyCalorieGoal": personal.daily_calorie_goal,
            "goal": personal.goal,
            "avatar": personal.avatar,
            "lastUpdated": _iso(personal.last_updated),
        },
        "healthInfo": {
            "allergies": list(health.allergies),
            "dietaryRestrictions": list(health.dietary_restrictions),
            "healthConditions": list(health.health_conditions),
            "healthGoals": list(health.health_goals),
        },
        "preferences": {
            "favoriteCuisines": list(preferences.favorite_cuisines),
            "dislikedIngredients": list(preferences.disliked_ingredients),
            "cookingSkills": preferences.cooking_skills.value,
        },
        "bmi": item.bmi,
        "lastUpdated": _iso(item.last_updated),
        "createdAt": _iso(item.created_at),
    }


def bmi_report(report: BmiReport) -> dict[str, object]:
    """BMI is rendered with one decimal, as a string."""
    return {
        "bmi": f"{report.bmi:.1f}",
        "category": report.category,
        "weight": report.weight,
        "height": report.height,
    }


def profile_stats(stats: ProfileStats) -> dict[str, object]:
    return {
        "hasPersonalInfo": stats.has_personal_info,
        "hasHealthInfo": stats.has_health_info,
        "profileCompletion": stats.profile_completion,
        "bmi": stats.bmi,
        "lastUpdated": _iso(stats.last_updated),
    }


def recipe(item: Recipe) -> dict[str, object]:
    return {
        "id": str(item.id),
        "title": item.title,
        "description": item.description,
        "author": str(item.author_id),
        "authorName": item.author_name,
        "ingredients": [
            {"name": line.name, "quantity": line.quantity, "unit": line.unit}
            for line in item.ingredients
        ],
        "instructions": [
            {"step": step.step, "description": step.description}
            for step in item.instructions
        ],
        "preparationTime": item.preparation_time,
        "servings": item.servings,
        "difficulty": item.difficulty.value,
        "category": item.category.value,
        "image": item.image,
        "likes": [str(user_id) for user_id in item.likes],
        "likesCount": item.likes_count,
        "createdAt": _iso(item.created_at),
        "updatedAt": _iso(item.updated_at),
    }


def pagination(page: RecipePage) -> dict[str, object]:
    return {
        "currentPage": page.page,
        "totalPages": page.total_pages,
        "totalRecipes": page.total,
        "hasNextPage": page.has_next_page,
        "hasPrevPage": page.has_prev_page,
    }


def answer(item: Answer) -> dict[str, object]:
    return {
        "id": str(item.id),
        "author": str(item.author_id),
        "authorName": item.author_name,
        "answer": item.answer,
        "createdAt": _iso(item.created_at),
    }


def question(item: Question) -> dict[str, object]:
    return {
        "id": str(item.id),
        "recipe": str(item.recipe_id),
        "recipeTitle": item.recipe_title,
        "author": str(item.author_id),
        "authorName": item.author_name,
        "question": item.question,
        "answers": [answer(entry) for entry in item.answers],
        "isResolved": item.is_resolved,
        "createdAt": _iso(item.created_at),
        "updatedAt": _iso(item.updated_at),
    }


def system_stats(stats: SystemStats) -> dict[str, object]:
    return {
        "totalUsers": stats.total_users,
        "totalRecipes": stats.total_recipes,
        "totalQuestions": stats.total_questions,
        "recentUsers": stats.recent_users,
        "timestamp": stats.generated_at.isoformat(),
    }
