from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import get_access_token
from core.database import get_db
from domains.recipe.repository import RecipeRepository
from domains.recipe.service import RecipeQueryService, RecipeService
from domains.user.repository import UserRepository
from domains.user.service import UserService
from domains.user.models import User


# --- recipes (public reads) ---
def get_recipe_repo(session: AsyncSession = Depends(get_db)) -> RecipeRepository:
    return RecipeRepository(session)


def get_recipe_query_service(
    recipe_repo: RecipeRepository = Depends(get_recipe_repo),
) -> RecipeQueryService:
    return RecipeQueryService(recipe_repo)


# --- users ---
def get_user_repo(session: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(session)


def get_user_service(
    user_repo: UserRepository = Depends(get_user_repo),
    recipe_query: RecipeQueryService = Depends(get_recipe_query_service),
) -> UserService:
    return UserService(user_repo, recipe_query)


async def get_current_user(
    access_token: str = Depends(get_access_token),
    user_service: UserService = Depends(get_user_service),
) -> User:
    return await user_service.get_user_by_token(access_token)


# --- recipes (authenticated writes) ---
def get_recipe_service(
    user: User = Depends(get_current_user),
    recipe_repo: RecipeRepository = Depends(get_recipe_repo),
    user_repo: UserRepository = Depends(get_user_repo),
) -> RecipeService:
    return RecipeService(user=user, recipe_repo=recipe_repo, user_repo=user_repo)
