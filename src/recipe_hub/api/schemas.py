"""Pydantic request bodies for the REST API."""

from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

from recipe_hub.domain.recipes import Category, Difficulty, Ingredient, InstructionStep
from recipe_hub.domain.users import Role


class RegisterRequest(BaseModel):
    """Registration payload; any requested role is ignored."""

    username: str
    email: EmailStr
    password: str


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(alias="currentPassword")
    new_password: str = Field(alias="newPassword")


class RoleUpdateRequest(BaseModel):
    role: Role = Field(validation_alias=AliasChoices("role", "newRole"))


class IngredientIn(BaseModel):
    name: str
    quantity: str = ""
    unit: str = ""

    @field_validator("quantity", "unit", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> object:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return "" if value is None else value


class InstructionIn(BaseModel):
    step: int
    description: str


class RecipeFields(BaseModel):
    """Shared recipe fields; only fields sent by the client are applied."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = None
    description: str | None = None
    ingredients: list[IngredientIn] | None = None
    instructions: list[InstructionIn] | None = None
    preparation_time: int | None = Field(default=None, alias="preparationTime", ge=0)
    servings: int | None = Field(default=None, ge=1)
    difficulty: Difficulty | None = None
    category: Category | None = None
    image: str | None = None

    @field_validator("instructions", mode="before")
    @classmethod
    def _number_plain_steps(cls, value: object) -> object:
        """Accept a list of plain strings and number the steps in order."""
        if isinstance(value, list):
            return [
                {"step": index, "description": item} if isinstance(item, str) else item
                for index, item in enumerate(value, start=1)
            ]
        return value

    def to_payload(self) -> dict[str, object]:
        """Return the fields the client set, as domain values."""
        payload: dict[str, object] = {}
        for key, value in self.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            payload[key] = value
        if "ingredients" in payload and self.ingredients is not None:
            payload["ingredients"] = [
                Ingredient(name=item.name.strip(), quantity=item.quantity, unit=item.unit)
                for item in self.ingredients
                if item.name.strip()
            ]
        if "instructions" in payload and self.instructions is not None:
            payload["instructions"] = [
                InstructionStep(step=item.step, description=item.description.strip())
                for item in self.instructions
                if item.description.strip()
            ]
        return payload


class RecipeCreate(RecipeFields):
    """New recipe; unspecified fields take the column defaults."""

    def to_payload(self) -> dict[str, object]:
        payload = super().to_payload()
        payload.setdefault("servings", 4)
        payload.setdefault("preparation_time", 30)
        return payload


class RecipeUpdate(RecipeFields):
    pass


class QuestionCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    recipe_id: UUID = Field(validation_alias=AliasChoices("recipeId", "recipe_id"))
    question: str = ""


class AnswerCreate(BaseModel):
    answer: str = ""
