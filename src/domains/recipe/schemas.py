from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import constr, field_validator

from core.pagination import Pagination
from core.schemas import CamelModel
from domains.recipe.filters import normalize_values

NonEmptyText = constr(strip_whitespace=True, min_length=1)


# --- Request ---
class CreateRecipeRequest(CamelModel):
    title: constr(strip_whitespace=True, min_length=1, max_length=200)
    description: NonEmptyText
    ingredients: list[str]
    tags: list[str] = []
    instructions: NonEmptyText

    @field_validator("ingredients", "tags", mode="after")
    @classmethod
    def normalize(cls, v: list[str]) -> list[str]:
        return normalize_values(v)


class UpdateRecipeRequest(CamelModel):
    title: Optional[constr(strip_whitespace=True, min_length=1, max_length=200)] = None
    description: Optional[NonEmptyText] = None
    ingredients: Optional[list[str]] = None
    tags: Optional[list[str]] = None
    instructions: Optional[NonEmptyText] = None

    @field_validator("ingredients", "tags", mode="after")
    @classmethod
    def normalize(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return None
        return normalize_values(v)


# --- Response ---
class CreatorSummary(CamelModel):
    id: UUID
    username: str


class RecipeSummary(CamelModel):
    id: UUID
    title: str
    description: str
    ingredients: list[str]
    tags: list[str]
    created_by: CreatorSummary
    created_at: datetime
    updated_at: datetime | None = None


class RecipeResponse(RecipeSummary):
    instructions: str


class RecipeListResponse(CamelModel):
    recipes: list[RecipeSummary]
    pagination: Pagination


class SaveRecipeResponse(CamelModel):
    message: str
    saved: bool
