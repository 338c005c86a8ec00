from uuid import UUID

from sqlalchemy import select, delete, func, distinct
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import defer

from core.exception.exceptions import DatabaseException
from core.logger import get_logger
from domains.recipe.filters import MatchMode, RecipeFilter, TokenConstraint
from domains.recipe.models import Recipe, RecipeIngredient, RecipeTag
from domains.user.models import User, saved_recipes
from util.ids import is_reference, parse_reference

logger = get_logger(__name__)


def _token_condition(row_model, constraint: TokenConstraint):
    tokens = list(dict.fromkeys(constraint.tokens))
    matching = select(row_model.recipe_id).where(row_model.name.in_(tokens))

    if constraint.mode is MatchMode.ALL:
        matching = matching.group_by(row_model.recipe_id).having(
            func.count(distinct(row_model.name)) == len(tokens)
        )

    return Recipe.id.in_(matching)


def _creator_condition(created_by: str):
    # usernames are at most 30 characters, so a UUID-shaped value is always an id
    if is_reference(created_by):
        return Recipe.created_by == parse_reference(created_by)
    return Recipe.created_by.in_(select(User.id).where(User.username == created_by))


def compile_filter(recipe_filter: RecipeFilter) -> list:
    conditions = []
    if recipe_filter.ingredients is not None:
        conditions.append(_token_condition(RecipeIngredient, recipe_filter.ingredients))
    if recipe_filter.tags is not None:
        conditions.append(_token_condition(RecipeTag, recipe_filter.tags))
    if recipe_filter.created_by is not None:
        conditions.append(_creator_condition(recipe_filter.created_by))
    return conditions


class RecipeRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def save_recipe(self, recipe: Recipe) -> Recipe:
        try:
            self.session.add(recipe)
            await self.session.commit()
            return recipe
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("recipe_save_failed", error=str(e))
            raise DatabaseException(detail="Failed to save recipe")

    async def get_recipe(self, recipe_id: UUID) -> tuple[Recipe, str] | None:
        try:
            stmt = (
                select(Recipe, User.username)
                .join(User, Recipe.created_by == User.id)
                .where(Recipe.id == recipe_id)
                .execution_options(populate_existing=True)
            )
            result = await self.session.execute(stmt)
            row = result.first()
            return (row[0], row[1]) if row else None
        except SQLAlchemyError as e:
            logger.error("recipe_lookup_failed", recipe_id=str(recipe_id), error=str(e))
            raise DatabaseException(detail="Failed to load recipe")

    async def recipe_exists(self, recipe_id: UUID) -> bool:
        try:
            stmt = select(Recipe.id).where(Recipe.id == recipe_id)
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            logger.error("recipe_lookup_failed", recipe_id=str(recipe_id), error=str(e))
            raise DatabaseException(detail="Failed to load recipe")

    async def find_recipes(
        self, recipe_filter: RecipeFilter, skip: int, limit: int
    ) -> list[tuple[Recipe, str]]:
        try:
            stmt = (
                select(Recipe, User.username)
                .join(User, Recipe.created_by == User.id)
                .where(*compile_filter(recipe_filter))
                .options(defer(Recipe.instructions))
                .order_by(Recipe.created_at.desc(), Recipe.id.desc())
                .offset(skip)
                .limit(limit)
            )
            result = await self.session.execute(stmt)
            return [(row[0], row[1]) for row in result.all()]
        except SQLAlchemyError as e:
            logger.error("recipe_query_failed", filter=recipe_filter.as_mapping(), error=str(e))
            raise DatabaseException(detail="Failed to query recipes")

    async def count_recipes(self, recipe_filter: RecipeFilter) -> int:
        try:
            stmt = select(func.count()).select_from(Recipe).where(*compile_filter(recipe_filter))
            result = await self.session.execute(stmt)
            return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error("recipe_count_failed", filter=recipe_filter.as_mapping(), error=str(e))
            raise DatabaseException(detail="Failed to count recipes")

    async def update_recipe(self, recipe: Recipe) -> Recipe:
        try:
            self.session.add(recipe)
            await self.session.commit()
            return recipe
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("recipe_update_failed", recipe_id=str(recipe.id), error=str(e))
            raise DatabaseException(detail="Failed to update recipe")

    async def delete_recipe(self, recipe: Recipe) -> None:
        try:
            # saved references are removed with the recipe
            await self.session.execute(
                delete(saved_recipes).where(saved_recipes.c.recipe_id == recipe.id)
            )
            await self.session.delete(recipe)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("recipe_delete_failed", recipe_id=str(recipe.id), error=str(e))
            raise DatabaseException(detail="Failed to delete recipe")
