from datetime import datetime, timezone

from core.logger import get_logger
from core.pagination import PageRequest, paginate
from domains.recipe.exception import EmptyIngredientsException, RecipeNotFoundException
from domains.recipe.filters import build_recipe_filter, normalize_tokens, parse_flag
from domains.recipe.models import Recipe
from domains.recipe.ownership import ensure_owner
from domains.recipe.repository import RecipeRepository
from domains.recipe.schemas import (
    CreateRecipeRequest,
    CreatorSummary,
    RecipeListResponse,
    RecipeResponse,
    RecipeSummary,
    SaveRecipeResponse,
    UpdateRecipeRequest,
)
from domains.user.models import User
from domains.user.repository import UserRepository
from util.ids import parse_reference

logger = get_logger(__name__)


def to_summary(recipe: Recipe, creator_username: str) -> RecipeSummary:
    return RecipeSummary(
        id=recipe.id,
        title=recipe.title,
        description=recipe.description,
        ingredients=list(recipe.ingredients),
        tags=list(recipe.tags),
        created_by=CreatorSummary(id=recipe.created_by, username=creator_username),
        created_at=recipe.created_at,
        updated_at=recipe.updated_at,
    )


def to_response(recipe: Recipe, creator_username: str) -> RecipeResponse:
    return RecipeResponse(
        **to_summary(recipe, creator_username).model_dump(),
        instructions=recipe.instructions,
    )


class RecipeQueryService:
    def __init__(self, recipe_repo: RecipeRepository):
        self.recipe_repo = recipe_repo

    async def list_recipes(
        self,
        ingredients: str | None = None,
        ingredients_any: str | bool | None = None,
        tags: str | None = None,
        tags_any: str | bool | None = None,
        created_by: str | None = None,
        page: str | int | None = None,
    ) -> RecipeListResponse:
        recipe_filter = build_recipe_filter(
            ingredients=normalize_tokens(ingredients),
            ingredients_any=parse_flag(ingredients_any),
            tags=normalize_tokens(tags),
            tags_any=parse_flag(tags_any),
            created_by=created_by,
        )
        page_request = PageRequest.from_raw(page)

        # count and page are two independent reads; a concurrent write between
        # them can leave total_recipes one step off the returned page
        total_count = await self.recipe_repo.count_recipes(recipe_filter)

        if page_request.skip and page_request.skip >= total_count:
            rows = []
        else:
            rows = await self.recipe_repo.find_recipes(
                recipe_filter, skip=page_request.skip, limit=page_request.limit
            )

        logger.info(
            "recipes_queried",
            filter=recipe_filter.as_mapping(),
            page=page_request.page,
            returned=len(rows),
            total=total_count,
        )

        return RecipeListResponse(
            recipes=[to_summary(recipe, username) for recipe, username in rows],
            pagination=paginate(page_request, total_count, len(rows)),
        )

    async def list_recipes_by_creator(self, user_id, page: str | int | None = None) -> RecipeListResponse:
        return await self.list_recipes(created_by=str(user_id), page=page)

    async def get_recipe(self, recipe_id: str) -> RecipeResponse:
        reference = parse_reference(recipe_id, label="recipe id")
        found = await self.recipe_repo.get_recipe(reference)

        if not found:
            raise RecipeNotFoundException()

        recipe, username = found
        return to_response(recipe, username)


class RecipeService:
    def __init__(self, user: User, recipe_repo: RecipeRepository, user_repo: UserRepository):
        self.user = user
        self.recipe_repo = recipe_repo
        self.user_repo = user_repo

    async def create_recipe(self, request: CreateRecipeRequest) -> RecipeResponse:
        if not request.ingredients:
            raise EmptyIngredientsException()

        recipe = Recipe(
            title=request.title,
            description=request.description,
            instructions=request.instructions,
            created_by=self.user.id,
            updated_at=None,
            # loaded collections, so an empty list is still readable after commit
            ingredient_rows=[],
            tag_rows=[],
        )
        recipe.ingredients = request.ingredients
        recipe.tags = request.tags

        saved = await self.recipe_repo.save_recipe(recipe)
        logger.info("recipe_created", recipe_id=str(saved.id), user_id=str(self.user.id))
        return to_response(saved, self.user.username)

    async def _get_owned_recipe(self, recipe_id: str) -> Recipe:
        reference = parse_reference(recipe_id, label="recipe id")
        found = await self.recipe_repo.get_recipe(reference)

        if not found:
            raise RecipeNotFoundException()

        recipe, _ = found
        ensure_owner(recipe, self.user.id)
        return recipe

    async def update_recipe(self, recipe_id: str, request: UpdateRecipeRequest) -> RecipeResponse:
        recipe = await self._get_owned_recipe(recipe_id)
        changes = request.model_dump(exclude_unset=True, exclude_none=True)

        if not changes:
            return to_response(recipe, self.user.username)

        if "ingredients" in changes and not changes["ingredients"]:
            raise EmptyIngredientsException()

        for field in ("title", "description", "instructions"):
            if field in changes:
                setattr(recipe, field, changes[field])
        if "ingredients" in changes:
            recipe.ingredients = changes["ingredients"]
        if "tags" in changes:
            recipe.tags = changes["tags"]

        recipe.updated_at = datetime.now(timezone.utc)

        updated = await self.recipe_repo.update_recipe(recipe)
        logger.info("recipe_updated", recipe_id=str(updated.id), fields=sorted(changes))
        return to_response(updated, self.user.username)

    async def delete_recipe(self, recipe_id: str) -> None:
        recipe = await self._get_owned_recipe(recipe_id)
        await self.recipe_repo.delete_recipe(recipe)
        logger.info("recipe_deleted", recipe_id=str(recipe.id), user_id=str(self.user.id))

    async def toggle_save(self, recipe_id: str) -> SaveRecipeResponse:
        reference = parse_reference(recipe_id, label="recipe id")

        if not await self.recipe_repo.recipe_exists(reference):
            raise RecipeNotFoundException()

        if await self.user_repo.has_saved_recipe(self.user.id, reference):
            await self.user_repo.remove_saved_recipe(self.user.id, reference)
            logger.info("recipe_unsaved", recipe_id=str(reference), user_id=str(self.user.id))
            return SaveRecipeResponse(message="Recipe removed from saved recipes", saved=False)

        await self.user_repo.add_saved_recipe(self.user.id, reference)
        logger.info("recipe_saved", recipe_id=str(reference), user_id=str(self.user.id))
        return SaveRecipeResponse(message="Recipe saved", saved=True)
