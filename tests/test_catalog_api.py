"""Tests for catalog service endpoints"""
import pytest
from fastapi.testclient import TestClient

from services.catalog_service.main import app, get_db
from services.catalog_service.repository import ProductRepository


@pytest.fixture
def products(db_session):
    repo = ProductRepository(db_session)
    turmeric = repo.create_product("Turmeric Powder", "Lakadong turmeric", 150.0, "spices", "/t.jpg", featured=True)
    masala = repo.create_product("Garam Masala", "Roasted whole spice blend", 220.0, "blends", "/g.jpg", discount=20)
    db_session.commit()
    return {"turmeric": turmeric.id, "masala": masala.id}


@pytest.fixture
def client(db_session, products):
    """Test client bound to the in-memory catalog"""
    app.dependency_overrides[get_db] = lambda: db_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "catalog-service", "version": "1.0.0"}


def test_list_products(client):
    response = client.get("/api/products")

    assert response.status_code == 200
    data = response.json()
    assert {p["name"] for p in data} == {"Turmeric Powder", "Garam Masala"}
    masala = next(p for p in data if p["name"] == "Garam Masala")
    assert masala["discounted_price"] == 176
    assert masala["rating"] == 0


def test_filter_by_category(client):
    response = client.get("/api/products", params={"category": "spices"})

    assert [p["name"] for p in response.json()] == ["Turmeric Powder"]


def test_unknown_category_rejected(client):
    response = client.get("/api/products", params={"category": "sauces"})

    assert response.status_code == 422


def test_text_search(client):
    response = client.get("/api/products", params={"q": "roasted"})

    assert [p["name"] for p in response.json()] == ["Garam Masala"]


def test_search_with_featured_filter(client):
    response = client.get("/api/products", params={"q": "spice", "featured": True})

    assert [p["name"] for p in response.json()] == ["Turmeric Powder"]


def test_get_product(client, products):
    response = client.get(f"/api/products/{products['turmeric']}")

    assert response.status_code == 200
    assert response.json()["name"] == "Turmeric Powder"


def test_get_missing_product(client):
    response = client.get("/api/products/nope")

    assert response.status_code == 404


def test_add_reviews_updates_rating(client, products):
    url = f"/api/products/{products['masala']}/reviews"
    client.post(url, json={"user_id": "u1", "name": "Asha", "rating": 5, "comment": "Fragrant"})
    response = client.post(url, json={"user_id": "u2", "name": "Ravi", "rating": 2, "comment": "Too hot"})

    assert response.status_code == 201
    data = response.json()
    assert data["rating"] == 3.5
    assert [r["name"] for r in data["reviews"]] == ["Asha", "Ravi"]


def test_review_validation(client, products):
    url = f"/api/products/{products['masala']}/reviews"

    response = client.post(url, json={"user_id": "u1", "name": "Asha", "rating": 6, "comment": "!"})

    assert response.status_code == 422


def test_review_unknown_product(client):
    response = client.post(
        "/api/products/nope/reviews",
        json={"user_id": "u1", "name": "Asha", "rating": 4, "comment": "Nice"},
    )

    assert response.status_code == 404


def test_products_page(client):
    response = client.get("/products")

    assert response.status_code == 200
    assert response.text.count('class="product-card"') == 2
    assert "20% OFF" in response.text
