"""Tests for recipe endpoints."""

from uuid import uuid4

from fastapi.testclient import TestClient

from tests.conftest import auth_header, register

RECIPE = {
    "title": "Arepas",
    "description": "Corn cakes",
    "ingredients": [{"name": "corn flour", "quantity": 2, "unit": "cups"}],
    "instructions": ["Mix", "Cook"],
    "preparationTime": 20,
    "difficulty": "Fácil",
    "category": "Desayuno",
}


def _create(client: TestClient, token: str, **overrides) -> dict[str, object]:
    response = client.post(
        "/api/recipes", headers=auth_header(token), json={**RECIPE, **overrides}
    )
    assert response.status_code == 201, response.text
    return response.json()["recipe"]


def test_create_recipe(client: TestClient) -> None:
    token = register(client, "alice")["token"]

    recipe = _create(client, token)

    assert recipe["authorName"] == "alice"
    assert recipe["ingredients"] == [
        {"name": "corn flour", "quantity": "2", "unit": "cups"}
    ]
    assert recipe["instructions"] == [
        {"step": 1, "description": "Mix"},
        {"step": 2, "description": "Cook"},
    ]
    assert recipe["servings"] == 4
    assert recipe["likesCount"] == 0


def test_create_requires_auth(client: TestClient) -> None:
    assert client.post("/api/recipes", json=RECIPE).status_code == 401


def test_create_rejects_unknown_category(client: TestClient) -> None:
    token = register(client, "alice")["token"]

    response = client.post(
        "/api/recipes", headers=auth_header(token), json={**RECIPE, "category": "Brunch"}
    )

    assert response.status_code == 400


def test_like_toggle_roundtrip(client: TestClient) -> None:
    token = register(client, "alice")["token"]
    recipe = _create(client, token)

    liked = client.post(f"/api/recipes/{recipe['id']}/like", headers=auth_header(token))
    unliked = client.post(f"/api/recipes/{recipe['id']}/like", headers=auth_header(token))
    fetched = client.get(f"/api/recipes/{recipe['id']}")

    assert liked.json() == {"success": True, "likesCount": 1, "hasLiked": True}
    assert unliked.json() == {"success": True, "likesCount": 0, "hasLiked": False}
    assert fetched.json()["recipe"]["likes"] == []


def test_like_missing_recipe(client: TestClient) -> None:
    token = register(client, "alice")["token"]

    response = client.post(f"/api/recipes/{uuid4()}/like", headers=auth_header(token))

    assert response.status_code == 404


def test_community_pagination(client: TestClient) -> None:
    token = register(client, "alice")["token"]
    for index in range(3):
        _create(client, token, title=f"Recipe {index}")

    response = client.get("/api/recipes/community", params={"page": 1, "limit": 2})

    body = response.json()
    assert [recipe["title"] for recipe in body["recipes"]] == ["Recipe 2", "Recipe 1"]
    assert body["pagination"] == {
        "currentPage": 1,
        "totalPages": 2,
        "totalRecipes": 3,
        "hasNextPage": True,
        "hasPrevPage": False,
    }


def test_community_category_filter(client: TestClient) -> None:
    token = register(client, "alice")["token"]
    _create(client, token, title="Breakfast")
    _create(client, token, title="Dinner", category="Cena")

    response = client.get("/api/recipes/community", params={"category": "Cena"})

    assert [recipe["title"] for recipe in response.json()["recipes"]] == ["Dinner"]


def test_search(client: TestClient) -> None:
    token = register(client, "alice")["token"]
    _create(client, token, title="Chocolate cake")
    _create(client, token, title="Bread")

    found = client.get("/api/recipes/search", params={"q": "CHOCO"})
    blank = client.get("/api/recipes/search", params={"q": "  "})

    assert [recipe["title"] for recipe in found.json()["recipes"]] == ["Chocolate cake"]
    assert blank.status_code == 400


def test_delete_is_author_only(client: TestClient) -> None:
    admin_token = register(client, "alice")["token"]
    author_token = register(client, "bobby")["token"]
    recipe = _create(client, author_token)

    forbidden = client.delete(
        f"/api/recipes/{recipe['id']}", headers=auth_header(admin_token)
    )
    deleted = client.delete(
        f"/api/recipes/{recipe['id']}", headers=auth_header(author_token)
    )
    missing = client.get(f"/api/recipes/{recipe['id']}")

    assert forbidden.status_code == 403
    assert deleted.status_code == 200
    assert missing.status_code == 404


def test_update_by_author(client: TestClient) -> None:
    token = register(client, "alice")["token"]
    recipe = _create(client, token)

    response = client.put(
        f"/api/recipes/{recipe['id']}",
        headers=auth_header(token),
        json={"servings": 6, "title": "Arepas rellenas"},
    )

    updated = response.json()["recipe"]
    assert updated["servings"] == 6
    assert updated["title"] == "Arepas rellenas"
    assert updated["description"] == "Corn cakes"


def test_my_recipes_and_staff_listing(client: TestClient) -> None:
    admin_token = register(client, "alice")["token"]
    member_token = register(client, "bobby")["token"]
    _create(client, member_token)

    mine = client.get("/api/recipes/my-recipes", headers=auth_header(member_token))
    staff = client.get("/api/recipes/all", headers=auth_header(admin_token))
    denied = client.get("/api/recipes/all", headers=auth_header(member_token))

    assert len(mine.json()["recipes"]) == 1
    assert staff.json()["count"] == 1
    assert denied.status_code == 403
