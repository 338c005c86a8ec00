from fastapi import APIRouter, Depends, Query

from core.di import get_recipe_query_service, get_recipe_service
from core.exception.exceptions import MalformedReferenceException, UnauthorizedException
from core.schemas import MessageResponse
from domains.recipe.exception import (
    EmptyIngredientsException,
    NotRecipeOwnerException,
    RecipeNotFoundException,
)
from domains.recipe.schemas import (
    CreateRecipeRequest,
    RecipeListResponse,
    RecipeResponse,
    SaveRecipeResponse,
    UpdateRecipeRequest,
)
from domains.recipe.service import RecipeQueryService, RecipeService
from util.docs import create_error_response

router = APIRouter()


@router.get(
    "",
    status_code=200,
    summary="Query recipes",
    response_model=RecipeListResponse,
)
async def list_recipes(
    ingredients: str | None = Query(None, description="Comma-separated ingredient names"),
    ingredients_any: str | None = Query(None, alias="any", description="'true' matches recipes with any of the ingredients"),
    tags: str | None = Query(None, description="Comma-separated tags"),
    tags_any: str | None = Query(None, alias="tagsAny", description="'true' matches any of the tags"),
    created_by: str | None = Query(None, alias="createdBy", description="Creator id or username"),
    page: str | None = Query(None, description="1-based page number"),
    service: RecipeQueryService = Depends(get_recipe_query_service),
):
    """
    Ingredients and tags both default to ALL-of matching; `any=true` / `tagsAny=true`
    switch the respective field to ANY-of. Matching ignores case.
    """
    return await service.list_recipes(
        ingredients=ingredients,
        ingredients_any=ingredients_any,
        tags=tags,
        tags_any=tags_any,
        created_by=created_by,
        page=page,
    )


@router.get(
    "/{recipe_id}",
    status_code=200,
    summary="Get one recipe",
    response_model=RecipeResponse,
    responses=create_error_response(RecipeNotFoundException, MalformedReferenceException),
)
async def get_recipe(
    recipe_id: str,
    service: RecipeQueryService = Depends(get_recipe_query_service),
):
    return await service.get_recipe(recipe_id)


@router.post(
    "",
    status_code=201,
    summary="Create a recipe",
    response_model=RecipeResponse,
    responses=create_error_response(EmptyIngredientsException, UnauthorizedException),
)
async def create_recipe(
    request: CreateRecipeRequest,
    service: RecipeService = Depends(get_recipe_service),
):
    return await service.create_recipe(request)


@router.put(
    "/{recipe_id}",
    status_code=200,
    summary="Update a recipe (creator only)",
    response_model=RecipeResponse,
    responses=create_error_response(
        RecipeNotFoundException, NotRecipeOwnerException, MalformedReferenceException
    ),
)
async def update_recipe(
    recipe_id: str,
    request: UpdateRecipeRequest,
    service: RecipeService = Depends(get_recipe_service),
):
    return await service.update_recipe(recipe_id, request)


@router.delete(
    "/{recipe_id}",
    status_code=200,
    summary="Delete a recipe (creator only)",
    response_model=MessageResponse,
    responses=create_error_response(
        RecipeNotFoundException, NotRecipeOwnerException, MalformedReferenceException
    ),
)
async def delete_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
):
    await service.delete_recipe(recipe_id)
    return MessageResponse(message="Recipe deleted")


@router.post(
    "/{recipe_id}/save",
    status_code=200,
    summary="Toggle a recipe in the caller's saved recipes",
    response_model=SaveRecipeResponse,
    responses=create_error_response(RecipeNotFoundException, MalformedReferenceException),
)
async def toggle_save(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
):
    return await service.toggle_save(recipe_id)
