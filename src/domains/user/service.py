from core import security
from core.logger import get_logger
from core.exception.exceptions import TokenForbiddenException
from domains.recipe.service import RecipeQueryService
from domains.user.exceptions import (
    DuplicateEmailException,
    DuplicateUsernameException,
    EmptySearchQueryException,
    InvalidCredentialsException,
    NoUsersFoundException,
    SelfFollowException,
    TargetUserNotFoundException,
    UnknownTokenSubjectException,
    UserNotFoundException,
)
from domains.user.repository import UserRepository
from domains.user.schemas import (
    FollowResponse,
    LogInRequest,
    LogInResponse,
    MeResponse,
    PublicUserInfo,
    RegisterRequest,
    RegisterResponse,
    UserProfileResponse,
    UserSearchItem,
    UserSearchResponse,
)
from domains.user.models import User
from util.ids import is_reference, parse_reference

logger = get_logger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepository, recipe_query: RecipeQueryService):
        self.user_repo = user_repo
        self.recipe_query = recipe_query

    async def get_user_by_token(self, access_token: str) -> User:
        user_id = security.decode_jwt(access_token=access_token)

        if not is_reference(user_id):
            raise TokenForbiddenException()

        user: User | None = await self.user_repo.get_user_by_id(parse_reference(user_id))

        if not user:
            logger.warning("token_subject_missing", user_id=user_id)
            raise UnknownTokenSubjectException()
        return user

    async def register(self, request: RegisterRequest) -> RegisterResponse:
        # friendly pre-checks; the unique indexes still back them up on insert
        if await self.user_repo.get_user_by_email(request.email):
            raise DuplicateEmailException()

        if await self.user_repo.get_user_by_username(request.username):
            raise DuplicateUsernameException()

        user = User(
            username=request.username,
            email=request.email,
            password=security.hash_password(request.password),
            dietary_preferences=request.dietary_preferences,
        )
        saved_user = await self.user_repo.save_user(user)
        logger.info("user_registered", user_id=str(saved_user.id), username=saved_user.username)

        return RegisterResponse(token=security.create_jwt(user_id=str(saved_user.id)))

    async def log_in(self, request: LogInRequest) -> LogInResponse:
        user = await self.user_repo.get_user_by_email(request.email)

        if not user or not security.verify_password(request.password, user.password):
            logger.warning("login_failed", email=request.email)
            raise InvalidCredentialsException()

        logger.info("user_logged_in", user_id=str(user.id))
        return LogInResponse(
            username=user.username,
            token=security.create_jwt(user_id=str(user.id)),
        )

    async def get_me(self, user: User) -> MeResponse:
        return MeResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            dietary_preferences=list(user.dietary_preferences or []),
            saved_recipes=await self.user_repo.get_saved_recipe_ids(user.id),
            following=await self.user_repo.get_following_ids(user.id),
            created_at=user.created_at,
        )

    async def get_profile(self, username: str, page: str | int | None = None) -> UserProfileResponse:
        user = await self.user_repo.get_user_by_username(username)

        if not user:
            logger.warning("user_not_found", username=username)
            raise UserNotFoundException()

        recipes = await self.recipe_query.list_recipes_by_creator(user.id, page=page)

        return UserProfileResponse(
            user_info=PublicUserInfo(
                id=user.id,
                username=user.username,
                saved_recipes=await self.user_repo.get_saved_recipe_ids(user.id),
                created_at=user.created_at,
            ),
            user_recipes=recipes.recipes,
            pagination=recipes.pagination,
        )

    async def search_users(self, query: str | None) -> UserSearchResponse:
        if not query or not query.strip():
            raise EmptySearchQueryException()

        users = await self.user_repo.search_users(query.strip())
        logger.info("users_searched", query=query, count=len(users))

        if not users:
            raise NoUsersFoundException()

        return UserSearchResponse(users=[UserSearchItem.model_validate(u) for u in users])

    async def toggle_follow(self, user: User, target_id: str) -> FollowResponse:
        target_reference = parse_reference(target_id, label="user id")

        if target_reference == user.id:
            raise SelfFollowException()

        target = await self.user_repo.get_user_by_id(target_reference)
        if not target:
            logger.warning("follow_target_missing", target_id=str(target_reference))
            raise TargetUserNotFoundException()

        if await self.user_repo.is_following(user.id, target.id):
            await self.user_repo.remove_following(user.id, target.id)
            logger.info("user_unfollowed", user_id=str(user.id), target_id=str(target.id))
            return FollowResponse(message=f"Unfollowed {target.username}", following=False)

        await self.user_repo.add_following(user.id, target.id)
        logger.info("user_followed", user_id=str(user.id), target_id=str(target.id))
        return FollowResponse(message=f"Followed {target.username}", following=True)
