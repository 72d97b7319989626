"""Tests for recipe Q&A."""

import asyncio
from uuid import uuid4

import pytest

from recipe_hub.errors import Forbidden, NotFound, ValidationError
from recipe_hub.services.questions import QuestionService
from tests.conftest import (
    InMemoryQuestionRepository,
    InMemoryRecipeRepository,
    make_user,
)


@pytest.fixture
def service(
    question_repository: InMemoryQuestionRepository,
    recipe_repository: InMemoryRecipeRepository,
) -> QuestionService:
    return QuestionService(question_repository, recipe_repository)


def _recipe(recipe_repository: InMemoryRecipeRepository):
    author = make_user()
    return asyncio.run(
        recipe_repository.create_recipe(
            author.id, author.username, {"title": "Soup", "description": "Warm"}
        )
    )


def test_ask_requires_existing_recipe(service: QuestionService) -> None:
    with pytest.raises(NotFound):
        asyncio.run(service.ask(make_user(), uuid4(), "How long?"))


def test_ask_requires_text(
    service: QuestionService, recipe_repository: InMemoryRecipeRepository
) -> None:
    recipe = _recipe(recipe_repository)

    with pytest.raises(ValidationError):
        asyncio.run(service.ask(make_user(), recipe.id, "   "))


def test_answers_are_appended_in_order(
    service: QuestionService, recipe_repository: InMemoryRecipeRepository
) -> None:
    recipe = _recipe(recipe_repository)
    asker = make_user()
    question = asyncio.run(service.ask(asker, recipe.id, "  Can I freeze it? "))

    asyncio.run(service.answer(make_user(), question.id, "Yes"))
    updated = asyncio.run(service.answer(make_user(), question.id, "For a month"))

    assert question.question == "Can I freeze it?"
    assert [answer.answer for answer in updated.answers] == ["Yes", "For a month"]


def test_answer_missing_question_is_not_found(service: QuestionService) -> None:
    with pytest.raises(NotFound):
        asyncio.run(service.answer(make_user(), uuid4(), "Yes"))


def test_only_author_resolves(
    service: QuestionService,
    recipe_repository: InMemoryRecipeRepository,
    question_repository: InMemoryQuestionRepository,
) -> None:
    recipe = _recipe(recipe_repository)
    asker = make_user()
    question = asyncio.run(service.ask(asker, recipe.id, "Spicy?"))

    with pytest.raises(Forbidden):
        asyncio.run(service.resolve(make_user(), question.id))
    assert question_repository.questions[question.id].is_resolved is False

    resolved = asyncio.run(service.resolve(asker, question.id))
    assert resolved.is_resolved is True


def test_resolve_missing_question_is_not_found(service: QuestionService) -> None:
    with pytest.raises(NotFound):
        asyncio.run(service.resolve(make_user(), uuid4()))


def test_only_author_deletes(
    service: QuestionService,
    recipe_repository: InMemoryRecipeRepository,
    question_repository: InMemoryQuestionRepository,
) -> None:
    recipe = _recipe(recipe_repository)
    asker = make_user()
    question = asyncio.run(service.ask(asker, recipe.id, "Oven temperature?"))

    with pytest.raises(Forbidden):
        asyncio.run(service.delete(make_user(), question.id))

    asyncio.run(service.delete(asker, question.id))
    assert question.id not in question_repository.questions


def test_list_for_recipe_is_newest_first(
    service: QuestionService, recipe_repository: InMemoryRecipeRepository
) -> None:
    recipe = _recipe(recipe_repository)
    other = _recipe(recipe_repository)
    asker = make_user()
    asyncio.run(service.ask(asker, recipe.id, "First"))
    asyncio.run(service.ask(asker, recipe.id, "Second"))
    asyncio.run(service.ask(asker, other.id, "Elsewhere"))

    questions = asyncio.run(service.list_for_recipe(recipe.id))

    assert [question.question for question in questions] == ["Second", "First"]
