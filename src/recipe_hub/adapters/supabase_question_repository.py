"""Supabase repository for recipe questions and answers."""

from dataclasses import dataclass
from uuid import UUID

from supabase import AsyncClient, PostgrestAPIError

from recipe_hub.adapters.supabase_rows import FOREIGN_KEY_VIOLATION, parse_timestamp
from recipe_hub.domain.questions import Answer, Question
from recipe_hub.errors import InternalError
from recipe_hub.services.questions import QuestionRepository

_QUESTION_COLUMNS = "*, question_answers(*), recipes(title)"


@dataclass
class SupabaseQuestionRepository(QuestionRepository):
    """Supabase implementation for ``questions`` and ``question_answers``."""

    client: AsyncClient

    async def create_question(
        self, recipe_id: UUID, author_id: UUID, author_name: str, text: str
    ) -> Question:
        response = (
            await self.client.table("questions")
            .insert(
                {
                    "recipe_id": str(recipe_id),
                    "author_id": str(author_id),
                    "author_name": author_name,
                    "question": text,
                }
            )
            .execute()
        )
        if not response.data:
            raise InternalError("Failed to create question")
        return _parse_question(response.data[0])

    async def get_question(self, question_id: UUID) -> Question | None:
        response = (
            await self.client.table("questions")
            .select(_QUESTION_COLUMNS)
            .eq("id", str(question_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_question(response.data[0])

    async def list_for_recipe(self, recipe_id: UUID) -> list[Question]:
        response = (
            await self.client.table("questions")
            .select(_QUESTION_COLUMNS)
            .eq("recipe_id", str(recipe_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_question(row) for row in response.data or []]

    async def list_all(self) -> list[Question]:
        response = (
            await self.client.table("questions")
            .select(_QUESTION_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_question(row) for row in response.data or []]

    async def add_answer(
        self, question_id: UUID, author_id: UUID, author_name: str, text: str
    ) -> bool:
        """Insert an answer row; a missing question fails the foreign key."""
        try:
            response = (
                await self.client.table("question_answers")
                .insert(
                    {
                        "question_id": str(question_id),
                        "author_id": str(author_id),
                        "author_name": author_name,
                        "answer": text,
                    }
                )
                .execute()
            )
        except PostgrestAPIError as exc:
            if exc.code == FOREIGN_KEY_VIOLATION:
                return False
            raise
        return bool(response.data)

    async def resolve_question(
        self, question_id: UUID, author_id: UUID
    ) -> Question | None:
        response = (
            await self.client.table("questions")
            .update({"is_resolved": True})
            .eq("id", str(question_id))
            .eq("author_id", str(author_id))
            .execute()
        )
        if not response.data:
            return None
        return await self.get_question(question_id)

    async def delete_question(self, question_id: UUID, author_id: UUID) -> bool:
        response = (
            await self.client.table("questions")
            .delete()
            .eq("id", str(question_id))
            .eq("author_id", str(author_id))
            .execute()
        )
        return bool(response.data)

    async def count_questions(self) -> int:
        response = (
            await self.client.table("questions")
            .select("id", count="exact")
            .limit(1)
            .execute()
        )
        return response.count or 0


def _parse_question(row: dict[str, object]) -> Question:
    """Parse a question row with embedded answers and recipe title."""
    answers = sorted(
        (_parse_answer(item) for item in row.get("question_answers") or []),
        key=lambda answer: answer.created_at.isoformat() if answer.created_at else "",
    )
    recipe = row.get("recipes")
    recipe_title = recipe.get("title") if isinstance(recipe, dict) else None
    return Question(
        id=UUID(str(row["id"])),
        recipe_id=UUID(str(row["recipe_id"])),
        author_id=UUID(str(row["author_id"])),
        author_name=str(row.get("author_name") or ""),
        question=str(row.get("question") or ""),
        answers=answers,
        is_resolved=bool(row.get("is_resolved", False)),
        recipe_title=recipe_title,
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


def _parse_answer(row: dict[str, object]) -> Answer:
    return Answer(
        id=UUID(str(row["id"])),
        author_id=UUID(str(row["author_id"])),
        author_name=str(row.get("author_name") or ""),
        answer=str(row.get("answer") or ""),
        created_at=parse_timestamp(row.get("created_at")),
    )
