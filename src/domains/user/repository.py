from uuid import UUID

from sqlalchemy import select, insert, delete, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio.session import AsyncSession

from core.exception.exceptions import ConflictException, DatabaseException, UnexpectedException
from core.logger import get_logger
from domains.user.exceptions import DuplicateEmailException, DuplicateUsernameException
from domains.user.models import User, saved_recipes, user_follows

logger = get_logger(__name__)

SEARCH_LIMIT = 50


def _unique_violation(error: IntegrityError) -> ConflictException:
    message = str(error.orig).lower()
    if "email" in message:
        return DuplicateEmailException()
    if "username" in message:
        return DuplicateUsernameException()
    return ConflictException()


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def save_user(self, user: User) -> User:
        try:
            self.session.add(user)
            await self.session.commit()
            return user
        except IntegrityError as e:
            # the unique indexes are the final word on duplicates
            await self.session.rollback()
            logger.warning("user_unique_violation", error=str(e.orig))
            raise _unique_violation(e)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("user_save_failed", error=str(e))
            raise DatabaseException(detail="Failed to save user")

    async def _get_one(self, *where_conditions) -> User | None:
        try:
            stmt = select(User).where(*where_conditions)
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("user_lookup_failed", error=str(e))
            raise DatabaseException(detail="Failed to load user")
        except Exception as e:
            logger.error("user_lookup_failed", error=str(e))
            raise UnexpectedException()

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._get_one(User.email == email)

    async def get_user_by_username(self, username: str) -> User | None:
        return await self._get_one(User.username == username)

    async def get_user_by_id(self, user_id: UUID) -> User | None:
        return await self._get_one(User.id == user_id)

    async def search_users(self, query: str, limit: int = SEARCH_LIMIT) -> list[User]:
        try:
            stmt = (
                select(User)
                .where(func.lower(User.username).contains(query.lower(), autoescape=True))
                .order_by(User.username)
                .limit(limit)
            )
            result = await self.session.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("user_search_failed", query=query, error=str(e))
            raise DatabaseException(detail="Failed to search users")

    # --- saved recipes ---
    async def get_saved_recipe_ids(self, user_id: UUID) -> list[UUID]:
        try:
            stmt = (
                select(saved_recipes.c.recipe_id)
                .where(saved_recipes.c.user_id == user_id)
                .order_by(saved_recipes.c.created_at)
            )
            result = await self.session.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("saved_recipes_lookup_failed", user_id=str(user_id), error=str(e))
            raise DatabaseException(detail="Failed to load saved recipes")

    async def has_saved_recipe(self, user_id: UUID, recipe_id: UUID) -> bool:
        try:
            stmt = select(saved_recipes.c.recipe_id).where(
                saved_recipes.c.user_id == user_id,
                saved_recipes.c.recipe_id == recipe_id,
            )
            result = await self.session.execute(stmt)
            return result.first() is not None
        except SQLAlchemyError as e:
            logger.error("saved_recipes_lookup_failed", user_id=str(user_id), error=str(e))
            raise DatabaseException(detail="Failed to load saved recipes")

    async def add_saved_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        await self._write(
            insert(saved_recipes).values(user_id=user_id, recipe_id=recipe_id),
            "Failed to save recipe for user",
        )

    async def remove_saved_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        await self._write(
            delete(saved_recipes).where(
                saved_recipes.c.user_id == user_id,
                saved_recipes.c.recipe_id == recipe_id,
            ),
            "Failed to remove saved recipe",
        )

    # --- following ---
    async def get_following_ids(self, user_id: UUID) -> list[UUID]:
        try:
            stmt = (
                select(user_follows.c.followee_id)
                .where(user_follows.c.follower_id == user_id)
                .order_by(user_follows.c.created_at)
            )
            result = await self.session.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("following_lookup_failed", user_id=str(user_id), error=str(e))
            raise DatabaseException(detail="Failed to load followed users")

    async def is_following(self, follower_id: UUID, followee_id: UUID) -> bool:
        try:
            stmt = select(user_follows.c.followee_id).where(
                user_follows.c.follower_id == follower_id,
                user_follows.c.followee_id == followee_id,
            )
            result = await self.session.execute(stmt)
            return result.first() is not None
        except SQLAlchemyError as e:
            logger.error("following_lookup_failed", user_id=str(follower_id), error=str(e))
            raise DatabaseException(detail="Failed to load followed users")

    async def add_following(self, follower_id: UUID, followee_id: UUID) -> None:
        await self._write(
            insert(user_follows).values(follower_id=follower_id, followee_id=followee_id),
            "Failed to follow user",
        )

    async def remove_following(self, follower_id: UUID, followee_id: UUID) -> None:
        await self._write(
            delete(user_follows).where(
                user_follows.c.follower_id == follower_id,
                user_follows.c.followee_id == followee_id,
            ),
            "Failed to unfollow user",
        )

    async def _write(self, stmt, failure_detail: str) -> None:
        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("user_relation_write_failed", error=str(e))
            raise DatabaseException(detail=failure_detail)
