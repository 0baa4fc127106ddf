"""API tests with STORAGE_BACKEND=memory.

The SQL override from conftest stays installed; with the memory backend
selected no query ever reaches it.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from precision_baker import repository
from precision_baker.settings import settings

RECIPE = {
    "title": "## Sourdough Boule",
    "description": "Open crumb, crackly crust.",
    "ingredients": [{"name": "bread flour", "amount": "4 cups", "weight": "500g"}],
    "instructions": "Mix, fold, proof, bake.",
}


@pytest.fixture
def memory_client(client, monkeypatch):
    monkeypatch.setattr(settings, "storage_backend", "memory")
    monkeypatch.setattr(repository, "_memory_repository", None)
    return client


def test_memory_store_is_seeded(memory_client):
    links = memory_client.get("/api/social-links").json()
    assert len(links) == 6
    assert links[0]["id"] == 1

    featured = memory_client.get("/api/recipes", params={"featured": True}).json()
    assert [r["title"] for r in featured] == ["Perfect Chocolate Chip Cookies", "Vanilla Bean Cupcakes"]


def test_seed_endpoint_reports_already_seeded(memory_client):
    response = memory_client.post("/api/dev/seed")
    assert response.status_code == 200
    assert response.json()["message"] == "Already seeded"


def test_recipe_crud(memory_client):
    response = memory_client.post("/api/recipes", json={**RECIPE, "user_id": 9})
    assert response.status_code == 201
    recipe = response.json()
    assert recipe["id"] == 3
    assert recipe["title"] == "Sourdough Boule"
    assert recipe["featured"] is False

    assert memory_client.get("/api/recipes/3").json()["description"] == RECIPE["description"]
    assert [r["id"] for r in memory_client.get("/api/recipes", params={"userId": 9}).json()] == [3]

    response = memory_client.put("/api/recipes/3", json={"featured": True})
    assert response.status_code == 200
    assert response.json()["featured"] is True
    assert response.json()["instructions"] == RECIPE["instructions"]

    assert memory_client.delete("/api/recipes/3").status_code == 204
    assert memory_client.get("/api/recipes/3").status_code == 404


def test_recipe_missing_rows(memory_client):
    assert memory_client.get("/api/recipes/99").status_code == 404
    assert memory_client.put("/api/recipes/99", json={"featured": True}).status_code == 404
    assert memory_client.delete("/api/recipes/99").status_code == 404


def test_social_link_crud(memory_client):
    response = memory_client.post("/api/social-links", json={
        "platform": "Threads",
        "username": "@precision_baking",
        "url": "#",
        "iconClass": "ri-threads-line",
        "bgColorClass": "secondary",
    })
    assert response.status_code == 201
    link_id = response.json()["id"]
    assert link_id == 7

    response = memory_client.put(f"/api/social-links/{link_id}", json={"url": "https://threads.net"})
    assert response.json()["url"] == "https://threads.net"

    assert memory_client.delete(f"/api/social-links/{link_id}").status_code == 204
    assert memory_client.delete(f"/api/social-links/{link_id}").status_code == 404
    assert memory_client.put(f"/api/social-links/{link_id}", json={"url": "#"}).status_code == 404
    assert len(memory_client.get("/api/social-links").json()) == 6


def test_conversion_history(memory_client):
    response = memory_client.post("/api/conversion-history", json={
        "originalRecipe": "2 cups flour",
        "convertedRecipe": "240g flour",
        "conversionType": "cup-to-gram",
        "scaleFactor": 1,
        "timestamp": "2024-05-01T10:00:00Z",
        "user_id": 0,
    })
    assert response.status_code == 201
    assert response.json()["id"] == 1

    history = memory_client.get("/api/conversion-history", params={"userId": 0}).json()
    assert [h["scaleFactor"] for h in history] == ["1"]


def test_memory_store_is_created_once(monkeypatch):
    monkeypatch.setattr(repository, "_memory_repository", None)

    with ThreadPoolExecutor(max_workers=8) as pool:
        stores = list(pool.map(lambda _: repository.get_memory_repository(), range(16)))

    assert all(store is stores[0] for store in stores)
    assert len(stores[0].get_social_links()) == 6
