"""Recipe Q&A endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from recipe_hub.api import serializers
from recipe_hub.api.dependencies import get_container, get_current_user, require_moderator
from recipe_hub.api.schemas import AnswerCreate, QuestionCreate
from recipe_hub.containers import AppContainer
from recipe_hub.domain.users import UserRecord

router = APIRouter(prefix="/api/questions", tags=["questions"])


@router.get("/recipe/{recipe_id}")
async def questions_for_recipe(
    recipe_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    questions = await container.question_service.list_for_recipe(recipe_id)
    return {
        "success": True,
        "questions": [serializers.question(item) for item in questions],
    }


@router.get("/all")
async def all_questions(
    _: UserRecord = Depends(require_moderator),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    questions = await container.question_service.list_all()
    return {"success": True, "data": [serializers.question(item) for item in questions]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def ask_question(
    body: QuestionCreate,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    question = await container.question_service.ask(user, body.recipe_id, body.question)
    return {
        "success": True,
        "message": "Question created successfully",
        "question": serializers.question(question),
    }


@router.post("/{question_id}/answers")
async def answer_question(
    question_id: UUID,
    body: AnswerCreate,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Append an answer; any signed-in user may answer."""
    question = await container.question_service.answer(user, question_id, body.answer)
    return {
        "success": True,
        "message": "Answer added successfully",
        "question": serializers.question(question),
    }


@router.patch("/{question_id}/resolve")
async def resolve_question(
    question_id: UUID,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    question = await container.question_service.resolve(user, question_id)
    return {
        "success": True,
        "message": "Question marked as resolved",
        "question": serializers.question(question),
    }


@router.delete("/{question_id}")
async def delete_question(
    question_id: UUID,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    await container.question_service.delete(user, question_id)
    return {"success": True, "message": "Question deleted successfully"}
