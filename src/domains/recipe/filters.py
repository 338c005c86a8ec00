"""
Recipe query filters.

Raw query strings are normalized into token lists, then composed into a single
immutable ``RecipeFilter``. The repository compiles that value into SQL; the
``matches`` method evaluates the same semantics in memory.
"""
from enum import Enum
from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict


class MatchMode(str, Enum):
    ALL = "all"
    ANY = "any"


def normalize_tokens(raw: str | None) -> list[str]:
    if not raw:
        return []
    return normalize_values(raw.split(","))


def normalize_values(values: Iterable[str] | None) -> list[str]:
    if values is None:
        return []
    tokens = (value.strip().lower() for value in values if value is not None)
    return [token for token in tokens if token]


def parse_flag(raw) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return str(raw).strip().lower() == "true"


class TokenConstraint(BaseModel):
    model_config = ConfigDict(frozen=True)

    tokens: tuple[str, ...]
    mode: MatchMode = MatchMode.ALL

    @property
    def operator(self) -> str:
        return "$all" if self.mode is MatchMode.ALL else "$in"

    def matches(self, stored: Iterable[str]) -> bool:
        stored_set = set(stored)
        if self.mode is MatchMode.ALL:
            return set(self.tokens) <= stored_set
        return not stored_set.isdisjoint(self.tokens)


class RecipeFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    ingredients: TokenConstraint | None = None
    tags: TokenConstraint | None = None
    created_by: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.ingredients is None and self.tags is None and self.created_by is None

    def as_mapping(self) -> dict:
        mapping = {}
        if self.ingredients is not None:
            mapping["ingredients"] = {self.ingredients.operator: list(self.ingredients.tokens)}
        if self.tags is not None:
            mapping["tags"] = {self.tags.operator: list(self.tags.tokens)}
        if self.created_by is not None:
            mapping["createdBy"] = self.created_by
        return mapping

    def matches(
        self,
        ingredients: Iterable[str] = (),
        tags: Iterable[str] = (),
        creator: Iterable[str] | str | None = None,
    ) -> bool:
        """Evaluate the filter against one recipe's stored values.

        ``creator`` may be a single reference or several equivalent ones
        (for example the creator id and username); one exact hit is enough.
        """
        if self.ingredients is not None and not self.ingredients.matches(ingredients):
            return False
        if self.tags is not None and not self.tags.matches(tags):
            return False
        if self.created_by is not None:
            if creator is None:
                return False
            references = [creator] if isinstance(creator, str) else [str(c) for c in creator]
            if self.created_by not in references:
                return False
        return True


def _constraint(tokens: Sequence[str], any_mode: bool) -> TokenConstraint | None:
    # an empty list must not turn into "match everything" or "match nothing"
    if not tokens:
        return None
    return TokenConstraint(
        tokens=tuple(tokens),
        mode=MatchMode.ANY if any_mode else MatchMode.ALL,
    )


def build_recipe_filter(
    ingredients: Sequence[str] = (),
    ingredients_any: bool = False,
    tags: Sequence[str] = (),
    tags_any: bool = False,
    created_by: str | None = None,
) -> RecipeFilter:
    creator = created_by.strip() if created_by else None
    return RecipeFilter(
        ingredients=_constraint(ingredients, ingredients_any),
        tags=_constraint(tags, tags_any),
        created_by=creator or None,
    )
