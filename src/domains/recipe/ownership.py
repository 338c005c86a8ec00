import uuid

from core.logger import get_logger
from domains.recipe.exception import NotRecipeOwnerException

logger = get_logger(__name__)


def canonical_id(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, uuid.UUID):
        return str(value)
    text = str(value).strip()
    try:
        return str(uuid.UUID(text))
    except ValueError:
        return text


def authorize(recipe, caller_id) -> bool:
    """True when ``caller_id`` is the recorded creator of ``recipe``."""
    owner = canonical_id(getattr(recipe, "created_by", None))
    caller = canonical_id(caller_id)
    if not owner or not caller:
        return False
    return owner == caller


def ensure_owner(recipe, caller_id) -> None:
    if not authorize(recipe, caller_id):
        logger.warning(
            "recipe_ownership_denied",
            recipe_id=str(getattr(recipe, "id", None)),
            user_id=str(caller_id),
        )
        raise NotRecipeOwnerException()
