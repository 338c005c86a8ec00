from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, constr, field_validator

from core.pagination import Pagination
from core.schemas import CamelModel
from domains.recipe.schemas import RecipeSummary


# --- Request ---
class RegisterRequest(CamelModel):
    username: constr(strip_whitespace=True, min_length=3, max_length=30)
    email: EmailStr
    password: constr(min_length=6, max_length=128)
    dietary_preferences: list[str] = []

    @field_validator("email", mode="after")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("dietary_preferences", mode="after")
    @classmethod
    def normalize_preferences(cls, v: list[str]) -> list[str]:
        return [p.strip().lower() for p in v if p and p.strip()]


class LogInRequest(CamelModel):
    email: EmailStr
    password: constr(min_length=1, max_length=128)

    @field_validator("email", mode="after")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.strip().lower()


# --- Response ---
class RegisterResponse(CamelModel):
    message: str = "User registered successfully"
    token: str


class LogInResponse(CamelModel):
    message: str = "Login successful"
    username: str
    token: str


class MeResponse(CamelModel):
    id: UUID
    username: str
    email: str
    dietary_preferences: list[str]
    saved_recipes: list[UUID]
    following: list[UUID]
    created_at: datetime


class PublicUserInfo(CamelModel):
    id: UUID
    username: str
    saved_recipes: list[UUID]
    created_at: datetime


class UserProfileResponse(CamelModel):
    user_info: PublicUserInfo
    user_recipes: list[RecipeSummary]
    pagination: Pagination


class UserSearchItem(CamelModel):
    id: UUID
    username: str
    created_at: datetime


class UserSearchResponse(CamelModel):
    users: list[UserSearchItem]


class FollowResponse(CamelModel):
    message: str
    following: bool
