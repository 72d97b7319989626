"""Domain models for recipes."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class Difficulty(str, Enum):
    """Recipe difficulty, stored with the client app's labels."""

    EASY = "Fácil"
    MEDIUM = "Medio"
    HARD = "Difícil"


class Category(str, Enum):
    """Recipe category, stored with the client app's labels."""

    BREAKFAST = "Desayuno"
    LUNCH = "Almuerzo"
    DINNER = "Cena"
    DESSERT = "Postre"
    SNACK = "Snack"
    DRINK = "Bebida"
    GENERAL = "General"


@dataclass(frozen=True)
class Ingredient:
    """Ingredient line."""

    name: str
    quantity: str = ""
    unit: str = ""


@dataclass(frozen=True)
class InstructionStep:
    """Numbered preparation step."""

    step: int
    description: str


@dataclass(frozen=True)
class Recipe:
    """A community recipe with its like set."""

    id: UUID
    title: str
    description: str
    author_id: UUID
    author_name: str
    ingredients: list[Ingredient] = field(default_factory=list)
    instructions: list[InstructionStep] = field(default_factory=list)
    preparation_time: int = 30
    servings: int = 4
    difficulty: Difficulty = Difficulty.MEDIUM
    category: Category = Category.GENERAL
    image: str = ""
    likes: list[UUID] = field(default_factory=list)
    likes_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class RecipePage:
    """One page of recipes plus the total match count."""

    recipes: list[Recipe]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        """Number of pages for the current limit."""
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next_page(self) -> bool:
        """Whether a later page exists."""
        return self.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        """Whether an earlier page exists."""
        return self.page > 1


@dataclass(frozen=True)
class LikeResult:
    """State of a recipe's likes after a toggle."""

    likes_count: int
    has_liked: bool
