import pytest
from pydantic import ValidationError

from domains.recipe.filters import (
    MatchMode,
    RecipeFilter,
    TokenConstraint,
    build_recipe_filter,
    normalize_tokens,
    normalize_values,
    parse_flag,
)


# --- normalizer ---
@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, []),
        ("", []),
        ("   ", []),
        (",,", []),
        ("Salt", ["salt"]),
        (" Flour , SUGAR,,eggs ", ["flour", "sugar", "eggs"]),
        ("salt,salt", ["salt", "salt"]),
    ],
)
def test_normalize_tokens(raw, expected):
    assert normalize_tokens(raw) == expected


def test_normalize_values_for_json_lists():
    assert normalize_values(["  Flour", "", "SUGAR ", "   "]) == ["flour", "sugar"]
    assert normalize_values(None) == []


@pytest.mark.parametrize(
    "raw, expected",
    [(None, False), ("", False), ("false", False), ("TRUE", True), (" true ", True), ("1", False), (True, True), (False, False)],
)
def test_parse_flag(raw, expected):
    assert parse_flag(raw) is expected


# --- builder ---
def test_empty_inputs_build_an_empty_filter():
    recipe_filter = build_recipe_filter()

    assert recipe_filter.is_empty
    assert recipe_filter.as_mapping() == {}


def test_modes_default_to_all():
    recipe_filter = build_recipe_filter(ingredients=["flour"], tags=["dessert"])

    assert recipe_filter.ingredients.mode is MatchMode.ALL
    assert recipe_filter.tags.mode is MatchMode.ALL
    assert recipe_filter.as_mapping() == {
        "ingredients": {"$all": ["flour"]},
        "tags": {"$all": ["dessert"]},
    }


def test_any_flags_switch_each_field_independently():
    recipe_filter = build_recipe_filter(
        ingredients=["flour", "pepper"], ingredients_any=True, tags=["quick"], tags_any=False
    )

    assert recipe_filter.ingredients.mode is MatchMode.ANY
    assert recipe_filter.tags.mode is MatchMode.ALL
    assert recipe_filter.as_mapping()["ingredients"] == {"$in": ["flour", "pepper"]}


def test_mode_flag_without_tokens_is_inert():
    recipe_filter = build_recipe_filter(ingredients_any=True, tags_any=True)

    assert recipe_filter.ingredients is None
    assert recipe_filter.tags is None
    assert recipe_filter.is_empty


def test_created_by_is_trimmed_and_blank_is_absent():
    assert build_recipe_filter(created_by="  alice ").created_by == "alice"
    assert build_recipe_filter(created_by="   ").created_by is None


def test_filter_value_is_immutable():
    recipe_filter = build_recipe_filter(ingredients=["salt"])

    with pytest.raises(ValidationError):
        recipe_filter.created_by = "mallory"


def test_each_build_returns_an_independent_value():
    first = build_recipe_filter(ingredients=["salt"])
    second = build_recipe_filter(tags=["vegan"])

    assert first.tags is None
    assert second.ingredients is None


# --- semantics ---
STORED = ["flour", "sugar", "eggs"]


@pytest.mark.parametrize(
    "query, mode, expected",
    [
        (("flour", "sugar"), MatchMode.ALL, True),
        (("flour", "pepper"), MatchMode.ALL, False),
        (("flour", "pepper"), MatchMode.ANY, True),
        (("pepper", "salt"), MatchMode.ANY, False),
        (("flour", "flour"), MatchMode.ALL, True),
    ],
)
def test_token_constraint_semantics(query, mode, expected):
    assert TokenConstraint(tokens=query, mode=mode).matches(STORED) is expected


def test_missing_dimension_matches_everything_on_that_axis():
    recipe_filter = build_recipe_filter(ingredients=["flour"])

    assert recipe_filter.matches(ingredients=STORED, tags=[])
    assert recipe_filter.matches(ingredients=STORED, tags=["anything"])


def test_dimensions_combine_with_and():
    recipe_filter = build_recipe_filter(ingredients=["flour"], tags=["dessert"], created_by="alice")

    assert recipe_filter.matches(STORED, ["dessert"], creator=["some-id", "alice"])
    assert not recipe_filter.matches(STORED, ["dinner"], creator="alice")
    assert not recipe_filter.matches(STORED, ["dessert"], creator="bob")
    assert not recipe_filter.matches(STORED, ["dessert"], creator=None)


def test_query_is_case_insensitive_after_normalization():
    recipe_filter = build_recipe_filter(ingredients=normalize_tokens("SALT"))

    assert recipe_filter.matches(ingredients=["salt", "pepper"])


def test_empty_filter_matches_anything():
    assert RecipeFilter().matches()
