from core.exception.exceptions import (
    HaveNotPermissionException,
    InvalidRequestException,
    NotFoundException,
)


class RecipeNotFoundException(NotFoundException):
    def __init__(self, detail: str = "Recipe not found"):
        super().__init__(detail=detail, code="RECIPE_NOT_FOUND")


class NotRecipeOwnerException(HaveNotPermissionException):
    def __init__(self, detail: str = "Only the recipe creator can modify this recipe"):
        super().__init__(detail=detail)


class EmptyIngredientsException(InvalidRequestException):
    def __init__(self, detail: str = "A recipe needs at least one ingredient"):
        super().__init__(detail=detail)
