"""Domain models for recipe Q&A."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Answer:
    """An answer appended to a question."""

    id: UUID
    author_id: UUID
    author_name: str
    answer: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class Question:
    """A question about a recipe; resolved only by its author."""

    id: UUID
    recipe_id: UUID
    author_id: UUID
    author_name: str
    question: str
    answers: list[Answer] = field(default_factory=list)
    is_resolved: bool = False
    recipe_title: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
