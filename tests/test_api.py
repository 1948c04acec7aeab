"""End-to-end HTTP tests against the FastAPI app with a stubbed generator."""
import pytest
from fastapi.testclient import TestClient

from api import app
from pantrychef.ai_generation import RecipeGenerator
from pantrychef.database import get_db
from pantrychef.routers.recipes import get_recipe_generator


@pytest.fixture
def generator_box():
    """Holds the generator the app will use; tests swap it per case."""
    return {"generator": None}


@pytest.fixture
def client(session_factory, generator_box):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_recipe_generator] = lambda: generator_box["generator"]
    yield TestClient(app)
    app.dependency_overrides.clear()


def _login(client, username="alice", password="correct-horse"):
    resp = client.post("/api/register", json={"username": username, "password": password})
    assert resp.status_code == 201
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['data']['access_token']}"}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_auth_flow(client):
    headers = _login(client)
    resp = client.get("/api/user", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["username"] == "alice"

    assert client.post("/api/register", json={"username": "alice", "password": "another-pass"}).status_code == 409
    assert client.post("/api/login", json={"username": "alice", "password": "wrong-pass"}).status_code == 401


def test_refresh_token(client):
    client.post("/api/register", json={"username": "carol", "password": "correct-horse"})
    tokens = client.post("/api/login", json={"username": "carol", "password": "correct-horse"}).json()["data"]

    resp = client.post("/api/refresh-token", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 200
    assert resp.json()["data"]["access_token"]

    # An access token is not accepted where a refresh token is expected
    resp = client.post("/api/refresh-token", json={"refresh_token": tokens["access_token"]})
    assert resp.status_code == 401


def test_protected_routes_need_a_token(client):
    assert client.get("/api/inventory").status_code in (401, 403)
    bad = {"Authorization": "Bearer not-a-token"}
    assert client.get("/api/recipes", headers=bad).status_code == 401


def test_inventory_endpoints(client):
    headers = _login(client)
    resp = client.post("/api/inventory", json={"name": "egg", "quantity": 2, "unit": "pcs"}, headers=headers)
    assert resp.status_code == 201
    item = resp.json()["data"]
    assert item["quantity"] == "2"

    resp = client.put(f"/api/inventory/{item['id']}", json={"name": "egg", "quantity": "6", "unit": "pcs"},
                      headers=headers)
    assert resp.json()["data"]["quantity"] == "6"

    bad = client.post("/api/inventory", json={"name": "egg", "quantity": 0, "unit": "pcs"}, headers=headers)
    assert bad.status_code == 422

    assert client.delete(f"/api/inventory/{item['id']}", headers=headers).status_code == 204
    assert client.get(f"/api/inventory/{item['id']}", headers=headers).status_code == 404


def test_generate_favorite_and_delete_flow(client, generator_box, stub_openai, wrapped_payload, recipe_payload):
    generator_box["generator"] = RecipeGenerator(
        stub_openai(content=wrapped_payload(recipe_payload("Omelette"), recipe_payload("Fried Rice")))
    )
    headers = _login(client)
    client.post("/api/inventory", json={"name": "egg", "quantity": "2", "unit": "pcs"}, headers=headers)

    resp = client.post("/api/recipes/generate", headers=headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert (data["requested"], data["dropped"]) == (2, 0)
    first = data["recipes"][0]
    assert first["title"] == "Omelette"
    assert first["cookTime"] == 20
    assert first["isFavorite"] is False
    assert first["ingredients"][2]["unit"] == ""

    listed = client.get("/api/recipes", headers=headers).json()["data"]
    assert {r["title"] for r in listed} == {"Omelette", "Fried Rice"}

    resp = client.put(f"/api/recipes/{first['id']}/favorite", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Added to favorites."
    assert resp.json()["data"]["isFavorite"] is True

    favorites = client.get("/api/recipes/favorites", headers=headers).json()["data"]
    assert [(r["id"], r["isFavorite"]) for r in favorites] == [(first["id"], True)]

    assert client.get(f"/api/recipes/{first['id']}", headers=headers).json()["data"]["isFavorite"] is True
    anonymous = client.get(f"/api/recipes/{first['id']}")
    assert anonymous.status_code == 200
    assert anonymous.json()["data"]["isFavorite"] is False

    resp = client.put(f"/api/recipes/{first['id']}/favorite", headers=headers)
    assert resp.json()["message"] == "Removed from favorites."

    assert client.delete(f"/api/recipes/{first['id']}", headers=headers).status_code == 204
    assert client.get(f"/api/recipes/{first['id']}").status_code == 404
    assert client.put(f"/api/recipes/{first['id']}/favorite", headers=headers).status_code == 404


def test_generate_with_empty_inventory(client, generator_box, stub_openai):
    generator_box["generator"] = RecipeGenerator(stub_openai(content="{}"))
    headers = _login(client)
    resp = client.post("/api/recipes/generate", headers=headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "No inventory items found. Please add some ingredients first."


def test_generate_with_malformed_payload(client, generator_box, stub_openai):
    generator_box["generator"] = RecipeGenerator(stub_openai(content="Here are some recipes!"))
    headers = _login(client)
    client.post("/api/inventory", json={"name": "egg", "quantity": "2", "unit": "pcs"}, headers=headers)

    resp = client.post("/api/recipes/generate", headers=headers)
    assert resp.status_code == 502
    assert client.get("/api/recipes", headers=headers).json()["data"] == []


def test_generate_without_configured_client(client):
    headers = _login(client)
    assert client.post("/api/recipes/generate", headers=headers).status_code == 503


def test_only_owner_can_delete_recipe(client, generator_box, stub_openai, wrapped_payload, recipe_payload):
    generator_box["generator"] = RecipeGenerator(stub_openai(content=wrapped_payload(recipe_payload())))
    alice = _login(client, "alice")
    bob = _login(client, "bob")
    client.post("/api/inventory", json={"name": "egg", "quantity": "2", "unit": "pcs"}, headers=alice)
    recipe_id = client.post("/api/recipes/generate", headers=alice).json()["data"]["recipes"][0]["id"]

    assert client.delete(f"/api/recipes/{recipe_id}", headers=bob).status_code == 404
    assert client.get(f"/api/recipes/{recipe_id}", headers=bob).status_code == 200


def test_logout_ends_only_the_current_session(client):
    client.post("/api/register", json={"username": "dave", "password": "correct-horse"})
    first = client.post("/api/login", json={"username": "dave", "password": "correct-horse"}).json()["data"]
    second = client.post("/api/login", json={"username": "dave", "password": "correct-horse"}).json()["data"]
    headers = {"Authorization": f"Bearer {first['access_token']}"}

    resp = client.post("/api/logout", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["status"] is True

    assert client.get("/api/user", headers=headers).status_code == 401
    assert client.post("/api/logout", headers=headers).status_code == 401
    assert client.post("/api/refresh-token", json={"refresh_token": first["refresh_token"]}).status_code == 401

    other = {"Authorization": f"Bearer {second['access_token']}"}
    assert client.get("/api/user", headers=other).status_code == 200


def test_register_rejects_passwords_bcrypt_would_truncate(client):
    resp = client.post("/api/register", json={"username": "erin", "password": "é" * 40})
    assert resp.status_code == 422
