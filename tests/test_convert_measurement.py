"""
Tests for POST /api/convert-measurement.
"""


def test_convert_cup_to_tbsp(client):
    response = client.post("/api/convert-measurement", json={
        "quantity": "2",
        "fromUnit": "cup",
        "toUnit": "tbsp",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["result"] == "2 cup = 32.00 tbsp"
    assert data["converted"] == 32.0


def test_convert_with_ingredient(client):
    response = client.post("/api/convert-measurement", json={
        "quantity": "1",
        "fromUnit": "cup",
        "toUnit": "g",
        "ingredient": "flour",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["result"].endswith("g of flour")
    assert abs(data["converted"] - 141.96) < 0.02
    assert data["density"] == 0.6


def test_numeric_quantity_accepted(client):
    response = client.post("/api/convert-measurement", json={
        "quantity": 1.5,
        "fromUnit": "kg",
        "toUnit": "g",
    })
    assert response.status_code == 200
    assert response.json()["result"] == "1.5 kg = 1500.00 g"


def test_empty_ingredient_is_ignored(client):
    response = client.post("/api/convert-measurement", json={
        "quantity": "1",
        "fromUnit": "tbsp",
        "toUnit": "tsp",
        "ingredient": "",
    })
    assert response.status_code == 200
    assert response.json()["result"] == "1 tbsp = 3.00 tsp"


def test_non_numeric_quantity(client):
    response = client.post("/api/convert-measurement", json={
        "quantity": "lots",
        "fromUnit": "cup",
        "toUnit": "g",
    })
    assert response.status_code == 400
    assert "not a number" in response.json()["detail"]


def test_missing_fields(client):
    response = client.post("/api/convert-measurement", json={"quantity": "1"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request data"


def test_unknown_unit(client):
    response = client.post("/api/convert-measurement", json={
        "quantity": "1",
        "fromUnit": "glarps",
        "toUnit": "g",
    })
    assert response.status_code == 400


def test_unsupported_pair(client):
    response = client.post("/api/convert-measurement", json={
        "quantity": "1",
        "fromUnit": "pinch",
        "toUnit": "lb",
    })
    assert response.status_code == 400
    assert "pinch" in response.json()["detail"]


def test_very_large_quantity(client):
    response = client.post("/api/convert-measurement", json={
        "quantity": "1e30",
        "fromUnit": "cup",
        "toUnit": "tbsp",
    })
    assert response.status_code == 200
    assert response.json()["result"].startswith("1e30 cup = ")


def test_quantity_too_large_to_convert(client):
    response = client.post("/api/convert-measurement", json={
        "quantity": "1e400",
        "fromUnit": "cup",
        "toUnit": "g",
    })
    assert response.status_code == 400
    assert "too large" in response.json()["detail"]
