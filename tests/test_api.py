"""
Component tests for the storefront API

Requests go through the real FastAPI routes, the catalog store and the cart
engine; nothing is mocked.
"""
import pytest
from fastapi.testclient import TestClient


class TestCatalogEndpoints:
    def test_list_clothes(self, test_client: TestClient):
        response = test_client.get("/api/clothes")

        assert response.status_code == 200
        data = response.json()
        assert [item["id"] for item in data] == ["a1", "d1", "j1"]
        assert data[1]["tag"] == ["#Dresses", "summer"]
        assert data[0]["maten"] == []

    def test_add_clothes(self, test_client: TestClient):
        # Arrange
        request_data = {
            "id": "s1",
            "naam": "Scarf",
            "merk": "Y",
            "prijs": "15",
            "afbeelding": "scarf.jpg",
            "tag": "#Winter",
        }

        # Act
        response = test_client.post("/api/clothes", json=request_data)

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["bericht"] == "Artikel toegevoegd aan catalogus"
        assert data["catalogusLengte"] == 4
        assert data["item"] == {
            "id": "s1",
            "naam": "Scarf",
            "merk": "Y",
            "prijs": 15.0,
            "afbeelding": "scarf.jpg",
            "kleur": "",
            "maten": [],
            "tag": "#Winter",
            "gender": "unisex",
        }
        assert len(test_client.get("/api/clothes").json()) == 4

    def test_missing_price_is_rejected(self, test_client: TestClient):
        request_data = {"id": "s1", "naam": "Scarf", "merk": "Y", "afbeelding": "scarf.jpg"}

        response = test_client.post("/api/clothes", json=request_data)

        assert response.status_code == 400
        assert "error" in response.json()
        assert len(test_client.get("/api/clothes").json()) == 3

    def test_duplicate_id_is_rejected(self, test_client: TestClient):
        request_data = {"id": "a1", "naam": "Tee", "merk": "X", "prijs": 20, "afbeelding": "img.jpg"}

        response = test_client.post("/api/clothes", json=request_data)

        assert response.status_code == 400
        assert response.json() == {"error": "Item met deze id bestaat al"}

    @pytest.mark.parametrize("price", ["nan", "inf", "-inf", "Infinity"])
    def test_non_finite_price_is_rejected(self, test_client: TestClient, price: str):
        request_data = {"id": "s1", "naam": "Scarf", "merk": "Y", "prijs": price, "afbeelding": "scarf.jpg"}

        response = test_client.post("/api/clothes", json=request_data)

        assert response.status_code == 400
        assert response.json() == {"error": "prijs moet een getal zijn"}
        assert len(test_client.get("/api/clothes").json()) == 3

    def test_numeric_sizes_are_kept_as_text(self, test_client: TestClient):
        request_data = {"id": "sh1", "naam": "Loafer", "merk": "Y", "prijs": 99,
                        "afbeelding": "loafer.jpg", "maten": [38, 40, "41"]}

        response = test_client.post("/api/clothes", json=request_data)

        assert response.status_code == 201
        assert response.json()["item"]["maten"] == ["38", "40", "41"]

    def test_wrongly_typed_field_is_bad_request(self, test_client: TestClient):
        request_data = {"id": "s1", "naam": "Scarf", "merk": "Y", "prijs": 15,
                        "afbeelding": "scarf.jpg", "maten": "M"}

        response = test_client.post("/api/clothes", json=request_data)

        assert response.status_code == 400
        assert "error" in response.json()


class TestCartEndpoints:
    def test_empty_cart(self, test_client: TestClient):
        response = test_client.get("/api/cart")

        assert response.status_code == 200
        assert response.json() == {
            "items": [],
            "itemCount": 0,
            "subtotal": 0,
            "shipping": 0,
            "total": 0,
        }

    def test_add_then_decrement_to_empty(self, test_client: TestClient):
        """Tee at 20: one piece costs 27 with shipping, removing it resets everything."""
        response = test_client.post("/api/cart", json={"itemId": "a1"})

        assert response.status_code == 200
        data = response.json()
        assert data["bericht"] == "Artikel toegevoegd aan mand"
        mand = data["mand"]
        assert mand["itemCount"] == 1
        assert mand["subtotal"] == 20
        assert mand["shipping"] == 7
        assert mand["total"] == 27
        assert mand["items"][0] == {
            "itemId": "a1",
            "naam": "Tee",
            "merk": "X",
            "prijs": 20,
            "aantal": 1,
            "regelTotaal": 20,
            "afbeelding": "img.jpg",
            "size": None,
        }

        response = test_client.patch("/api/cart/a1", json={"delta": -1})

        assert response.status_code == 200
        data = response.json()
        assert data["bericht"] == "Winkelmand bijgewerkt"
        assert data["mand"] == {"items": [], "itemCount": 0, "subtotal": 0, "shipping": 0, "total": 0}

    def test_add_with_quantity_and_size(self, test_client: TestClient):
        response = test_client.post("/api/cart", json={"itemId": "d1", "quantity": 2, "size": "M"})

        line = response.json()["mand"]["items"][0]
        assert line["aantal"] == 2
        assert line["size"] == "M"
        assert line["regelTotaal"] == 39.98

    def test_add_without_item_id(self, test_client: TestClient):
        response = test_client.post("/api/cart", json={"quantity": 1})

        assert response.status_code == 400
        assert response.json() == {"error": "itemId is verplicht"}

    def test_add_unknown_item(self, test_client: TestClient):
        response = test_client.post("/api/cart", json={"itemId": "ghost"})

        assert response.status_code == 404
        assert response.json() == {"error": "Item niet gevonden"}
        assert test_client.get("/api/cart").json()["items"] == []

    def test_patch_requires_integer_delta(self, test_client: TestClient):
        test_client.post("/api/cart", json={"itemId": "a1"})

        for body in ({}, {"delta": "1"}, {"delta": 0.5}):
            response = test_client.patch("/api/cart/a1", json=body)
            assert response.status_code == 400
            assert "error" in response.json()

        assert test_client.get("/api/cart").json()["itemCount"] == 1

    def test_patch_missing_line(self, test_client: TestClient):
        response = test_client.patch("/api/cart/a1", json={"delta": 1})

        assert response.status_code == 404
        assert response.json() == {"error": "Item staat niet in de mand"}

    def test_delete_line(self, test_client: TestClient):
        test_client.post("/api/cart", json={"itemId": "a1", "quantity": 3})
        test_client.post("/api/cart", json={"itemId": "j1"})

        response = test_client.delete("/api/cart/a1")

        assert response.status_code == 200
        data = response.json()
        assert data["bericht"] == "Artikel volledig verwijderd uit mand"
        assert [line["itemId"] for line in data["mand"]["items"]] == ["j1"]
        assert data["mand"]["total"] == 126

    def test_delete_unknown_line(self, test_client: TestClient):
        response = test_client.delete("/api/cart/unknown-id")

        assert response.status_code == 404
        assert "error" in response.json()


class TestFallbacks:
    def test_unmatched_route_returns_not_found_page(self, test_client: TestClient):
        response = test_client.get("/does/not/exist")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")

    def test_unsupported_method_returns_not_found_page(self, test_client: TestClient):
        response = test_client.put("/api/cart", json={})

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")

    def test_health(self, test_client: TestClient):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
