"""Recipe Q&A: questions, answers and author-only resolution."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from recipe_hub.domain.questions import Question
from recipe_hub.domain.users import UserRecord
from recipe_hub.errors import AppError, Forbidden, NotFound, ValidationError
from recipe_hub.services.recipes import RecipeRepository

_logger = logging.getLogger(__name__)


class QuestionRepository(Protocol):
    """Persistence interface for questions and their answers."""

    async def create_question(
        self, recipe_id: UUID, author_id: UUID, author_name: str, text: str
    ) -> Question:
        """Insert a question and return it."""

    async def get_question(self, question_id: UUID) -> Question | None:
        """Return a question with its answers, if present."""

    async def list_for_recipe(self, recipe_id: UUID) -> list[Question]:
        """Return questions for a recipe, newest first."""

    async def list_all(self) -> list[Question]:
        """Return every question, newest first."""

    async def add_answer(
        self, question_id: UUID, author_id: UUID, author_name: str, text: str
    ) -> bool:
        """Append an answer; False when the question is absent."""

    async def resolve_question(
        self, question_id: UUID, author_id: UUID
    ) -> Question | None:
        """Mark resolved only if ``author_id`` asked it; None when nothing matched."""

    async def delete_question(self, question_id: UUID, author_id: UUID) -> bool:
        """Delete only if ``author_id`` asked it; False when nothing matched."""

    async def count_questions(self) -> int:
        """Return the number of questions."""


@dataclass
class QuestionService:
    """Application service for recipe questions."""

    repository: QuestionRepository
    recipe_repository: RecipeRepository

    async def list_for_recipe(self, recipe_id: UUID) -> list[Question]:
        """Return the questions asked about a recipe."""
        return await self.repository.list_for_recipe(recipe_id)

    async def list_all(self) -> list[Question]:
        """Return every question (moderation view)."""
        return await self.repository.list_all()

    async def ask(self, author: UserRecord, recipe_id: UUID, text: str) -> Question:
        """Create a question about an existing recipe."""
        cleaned = (text or "").strip()
        if not cleaned:
            raise ValidationError("Recipe id and question are required")
        if await self.recipe_repository.get_recipe(recipe_id) is None:
            raise NotFound("Recipe not found")
        question = await self.repository.create_question(
            recipe_id, author.id, author.username, cleaned
        )
        _logger.info("Question %s asked on recipe %s", question.id, recipe_id)
        return question

    async def answer(
        self, author: UserRecord, question_id: UUID, text: str
    ) -> Question:
        """Append an answer; any authenticated user may answer."""
        cleaned = (text or "").strip()
        if not cleaned:
            raise ValidationError("Answer is required")
        added = await self.repository.add_answer(
            question_id, author.id, author.username, cleaned
        )
        if not added:
            raise NotFound("Question not found")
        question = await self.repository.get_question(question_id)
        if question is None:
            raise NotFound("Question not found")
        return question

    async def resolve(self, actor: UserRecord, question_id: UUID) -> Question:
        """Mark a question resolved; only its author may do so."""
        resolved = await self.repository.resolve_question(question_id, actor.id)
        if resolved is not None:
            _logger.info("Question %s resolved", question_id)
            return resolved
        raise await self._rejection(
            question_id, "Only the author can mark the question as resolved"
        )

    async def delete(self, actor: UserRecord, question_id: UUID) -> None:
        """Delete a question; only its author may do so."""
        if await self.repository.delete_question(question_id, actor.id):
            _logger.info("Question %s deleted", question_id)
            return
        raise await self._rejection(
            question_id, "You do not have permission to delete this question"
        )

    async def _rejection(self, question_id: UUID, message: str) -> AppError:
        """Tell a missing question apart from one owned by someone else."""
        if await self.repository.get_question(question_id) is None:
            return NotFound("Question not found")
        return Forbidden(message)
