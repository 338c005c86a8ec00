import uuid

import pytest

RECIPES_URL = "/api/v1/recipes"

CAKE = {
    "title": "Cake",
    "description": "Simple sponge",
    "ingredients": ["flour", "sugar", "eggs"],
    "tags": ["dessert", "baking"],
    "instructions": "Mix and bake",
}


async def create(client, payload, headers=None):
    response = await client.post(RECIPES_URL, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def titles(response):
    return [recipe["title"] for recipe in response.json()["recipes"]]


@pytest.mark.asyncio
async def test_create_recipe_api(authorized_client, test_user):
    """[API] POST /api/v1/recipes normalizes tokens and returns camelCase fields"""
    # Given
    payload = {**CAKE, "ingredients": [" Flour", "SUGAR", "", "eggs"], "tags": ["Dessert"]}

    # When
    response = await authorized_client.post(RECIPES_URL, json=payload)

    # Then
    assert response.status_code == 201
    data = response.json()
    assert data["ingredients"] == ["flour", "sugar", "eggs"]
    assert data["tags"] == ["dessert"]
    assert data["createdBy"] == {"id": str(test_user.id), "username": "chef_tester"}
    assert data["updatedAt"] is None
    assert "createdAt" in data
    assert data["instructions"] == "Mix and bake"


@pytest.mark.asyncio
async def test_create_recipe_without_token(client):
    response = await client.post(RECIPES_URL, json=CAKE)

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_create_recipe_with_bad_token(client):
    response = await client.post(
        RECIPES_URL, json=CAKE, headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 403
    assert response.json()["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_create_recipe_validation_error(authorized_client):
    response = await authorized_client.post(RECIPES_URL, json={"title": "No body"})

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["errors"]


@pytest.mark.asyncio
async def test_create_recipe_with_blank_ingredients(authorized_client):
    response = await authorized_client.post(RECIPES_URL, json={**CAKE, "ingredients": [" ", ""]})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_query_by_ingredients(authorized_client):
    """[API] default ALL matching, `any=true` switches to ANY, case is ignored"""
    # Given
    await create(authorized_client, CAKE)
    await create(
        authorized_client,
        {**CAKE, "title": "Steak", "ingredients": ["beef", "salt", "pepper"], "tags": ["dinner"]},
    )

    # When / Then
    response = await authorized_client.get(RECIPES_URL, params={"ingredients": "flour,sugar", "any": "false"})
    assert titles(response) == ["Cake"]

    response = await authorized_client.get(RECIPES_URL, params={"ingredients": "flour,pepper"})
    assert titles(response) == []
    assert response.json()["pagination"]["totalRecipes"] == 0

    response = await authorized_client.get(RECIPES_URL, params={"ingredients": "flour,pepper", "any": "true"})
    assert titles(response) == ["Steak", "Cake"]

    response = await authorized_client.get(RECIPES_URL, params={"ingredients": "SALT"})
    assert titles(response) == ["Steak"]


@pytest.mark.asyncio
async def test_query_by_tags_and_creator(authorized_client, test_user, other_headers):
    await create(authorized_client, CAKE)
    await create(
        authorized_client,
        {**CAKE, "title": "Cookies", "tags": ["snack"]},
        headers=other_headers,
    )

    response = await authorized_client.get(RECIPES_URL, params={"tags": "dessert,snack"})
    assert titles(response) == []

    response = await authorized_client.get(RECIPES_URL, params={"tags": "dessert,snack", "tagsAny": "true"})
    assert titles(response) == ["Cookies", "Cake"]

    response = await authorized_client.get(RECIPES_URL, params={"createdBy": "other_cook"})
    assert titles(response) == ["Cookies"]

    response = await authorized_client.get(RECIPES_URL, params={"createdBy": str(test_user.id)})
    assert titles(response) == ["Cake"]


@pytest.mark.asyncio
async def test_list_omits_instructions(client, auth_headers):
    await create(client, CAKE, headers=auth_headers)

    response = await client.get(RECIPES_URL)

    assert response.status_code == 200
    recipe = response.json()["recipes"][0]
    assert "instructions" not in recipe
    assert recipe["createdBy"]["username"] == "chef_tester"


@pytest.mark.asyncio
async def test_pagination_envelope(client, auth_headers):
    """[API] out-of-range pages are empty with accurate metadata"""
    await create(client, CAKE, headers=auth_headers)

    response = await client.get(RECIPES_URL, params={"page": "1"})
    assert response.json()["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "hasPreviousPage": False,
        "totalRecipes": 1,
        "hasNextPage": False,
    }

    response = await client.get(RECIPES_URL, params={"page": "3"})
    assert response.status_code == 200
    body = response.json()
    assert body["recipes"] == []
    assert body["pagination"]["currentPage"] == 3
    assert body["pagination"]["hasPreviousPage"] is True
    assert body["pagination"]["hasNextPage"] is False

    response = await client.get(RECIPES_URL, params={"page": "zero"})
    assert response.json()["pagination"]["currentPage"] == 1


@pytest.mark.asyncio
async def test_get_recipe_by_id(client, auth_headers):
    created = await create(client, CAKE, headers=auth_headers)

    response = await client.get(f"{RECIPES_URL}/{created['id']}")

    assert response.status_code == 200
    assert response.json()["instructions"] == "Mix and bake"


@pytest.mark.asyncio
async def test_get_recipe_malformed_or_missing(client):
    response = await client.get(f"{RECIPES_URL}/not-a-uuid")
    assert response.status_code == 400
    assert response.json()["code"] == "MALFORMED_REFERENCE"

    response = await client.get(f"{RECIPES_URL}/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json()["code"] == "RECIPE_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_recipe_owner_only(authorized_client, other_headers):
    """[API] only the creator can update; others get 403 and nothing changes"""
    # Given
    created = await create(authorized_client, CAKE)
    url = f"{RECIPES_URL}/{created['id']}"

    # When
    forbidden = await authorized_client.put(url, json={"title": "Hacked"}, headers=other_headers)
    updated = await authorized_client.put(url, json={"title": "Better Cake", "tags": ["Party"]})

    # Then
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == "FORBIDDEN"

    assert updated.status_code == 200
    data = updated.json()
    assert data["title"] == "Better Cake"
    assert data["tags"] == ["party"]
    assert data["ingredients"] == CAKE["ingredients"]
    assert data["updatedAt"] is not None

    response = await authorized_client.get(RECIPES_URL, params={"tags": "party"})
    assert titles(response) == ["Better Cake"]


@pytest.mark.asyncio
async def test_delete_recipe_owner_only(authorized_client, other_headers):
    created = await create(authorized_client, CAKE)
    url = f"{RECIPES_URL}/{created['id']}"

    forbidden = await authorized_client.delete(url, headers=other_headers)
    assert forbidden.status_code == 403

    deleted = await authorized_client.delete(url)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Recipe deleted"}

    assert (await authorized_client.get(url)).status_code == 404
    assert (await authorized_client.delete(url)).status_code == 404


@pytest.mark.asyncio
async def test_save_toggle_shows_up_in_me(authorized_client):
    """[API] POST /save toggles, GET /me reflects the saved list"""
    created = await create(authorized_client, CAKE)
    url = f"{RECIPES_URL}/{created['id']}/save"

    first = await authorized_client.post(url)
    assert first.status_code == 200
    assert first.json() == {"message": "Recipe saved", "saved": True}

    me = await authorized_client.get("/api/v1/me")
    assert me.json()["savedRecipes"] == [created["id"]]

    second = await authorized_client.post(url)
    assert second.json() == {"message": "Recipe removed from saved recipes", "saved": False}

    me = await authorized_client.get("/api/v1/me")
    assert me.json()["savedRecipes"] == []


@pytest.mark.asyncio
async def test_save_unknown_recipe(authorized_client):
    response = await authorized_client.post(f"{RECIPES_URL}/{uuid.uuid4()}/save")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_deleted_recipe_leaves_saved_lists(authorized_client, other_headers):
    created = await create(authorized_client, CAKE)
    await authorized_client.post(f"{RECIPES_URL}/{created['id']}/save", headers=other_headers)

    await authorized_client.delete(f"{RECIPES_URL}/{created['id']}")

    me = await authorized_client.get("/api/v1/me", headers=other_headers)
    assert me.json()["savedRecipes"] == []


@pytest.mark.asyncio
async def test_cake_without_tags_end_to_end(authorized_client):
    """[API] a body without tags is created and found by ingredient queries"""
    # Given
    payload = {"title": "Cake", "description": "d", "ingredients": ["Flour", "Sugar"], "instructions": "mix"}

    # When
    response = await authorized_client.post(RECIPES_URL, json=payload)

    # Then
    assert response.status_code == 201
    assert response.json()["ingredients"] == ["flour", "sugar"]
    assert response.json()["tags"] == []

    response = await authorized_client.get(RECIPES_URL, params={"ingredients": "flour,sugar", "any": "false"})
    assert titles(response) == ["Cake"]

    response = await authorized_client.get(RECIPES_URL, params={"ingredients": "flour,pepper", "any": "false"})
    assert titles(response) == []

    response = await authorized_client.get(RECIPES_URL, params={"ingredients": "flour,pepper", "any": "true"})
    assert titles(response) == ["Cake"]


@pytest.mark.asyncio
async def test_huge_page_number_is_an_empty_page(client, auth_headers):
    await create(client, CAKE, headers=auth_headers)

    response = await client.get(RECIPES_URL, params={"page": "99999999999999999999"})

    assert response.status_code == 200
    body = response.json()
    assert body["recipes"] == []
    assert body["pagination"]["totalRecipes"] == 1
    assert body["pagination"]["hasNextPage"] is False


@pytest.mark.asyncio
async def test_empty_update_keeps_recipe_unchanged(authorized_client):
    created = await create(authorized_client, CAKE)

    response = await authorized_client.put(f"{RECIPES_URL}/{created['id']}", json={})

    assert response.status_code == 200
    assert response.json()["title"] == "Cake"
    assert response.json()["updatedAt"] is None
