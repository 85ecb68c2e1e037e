"""Tests for the ingredient and grocery list API routes."""

import pytest

from matlista.routers.ingredients import MAX_LINES


class TestParseEndpoint:
    """Tests for POST /api/v1/ingredients/parse."""

    def test_parse_lines(self, client):
        response = client.post(
            "/api/v1/ingredients/parse",
            json={"lines": ["1 1/2 dl grädde", "salt"], "source_meal": "Pasta"},
        )
        assert response.status_code == 200

        cream, salt = response.json()["ingredients"]
        assert cream["quantity"] == pytest.approx(1.5)
        assert cream["unit"] == "dl"
        assert cream["normalized_name"] == "grädde"
        assert cream["display"] == "1.5 dl grädde"
        assert cream["category"] == "dairy"
        assert cream["sources"] == ["Pasta"]
        assert cream["is_staple"] is False

        assert salt["unit"] is None
        assert salt["is_staple"] is True

    def test_parse_keeps_every_line(self, client):
        """Test parsing neither filters nor merges."""
        response = client.post(
            "/api/v1/ingredients/parse", json={"lines": ["2 ägg", "2 ägg", "salt"]}
        )
        assert len(response.json()["ingredients"]) == 3

    def test_too_many_lines(self, client):
        response = client.post(
            "/api/v1/ingredients/parse", json={"lines": ["2 ägg"] * (MAX_LINES + 1)}
        )
        assert response.status_code == 422

    def test_missing_lines(self, client):
        response = client.post("/api/v1/ingredients/parse", json={})
        assert response.status_code == 422


class TestAggregateEndpoint:
    """Tests for POST /api/v1/ingredients/aggregate."""

    def test_aggregate_lines(self, client):
        response = client.post(
            "/api/v1/ingredients/aggregate",
            json={"lines": ["2 dl vispgrädde", "1 dl matlagningsgrädde", "salt"]},
        )
        assert response.status_code == 200

        data = response.json()
        assert len(data["ingredients"]) == 1
        assert data["ingredients"][0]["quantity"] == 3.0
        assert data["ingredients"][0]["display"] == "3 dl vispgrädde"
        assert data["excluded"] == ["salt"]

    def test_keep_staples(self, client):
        response = client.post(
            "/api/v1/ingredients/aggregate",
            json={"lines": ["2 dl grädde", "salt"], "exclude_staples": False},
        )

        data = response.json()
        assert [i["normalized_name"] for i in data["ingredients"]] == ["grädde", "salt"]
        assert data["excluded"] == []

    def test_empty_lines(self, client):
        response = client.post("/api/v1/ingredients/aggregate", json={"lines": []})
        assert response.json() == {"ingredients": [], "excluded": []}


class TestCategoriesEndpoint:
    """Tests for GET /api/v1/grocery/categories."""

    def test_default_language(self, client):
        response = client.get("/api/v1/grocery/categories")
        assert response.status_code == 200

        categories = response.json()
        assert categories[0] == {"id": "produce", "label": "Grönsaker & frukt", "order": 0}
        assert categories[-1]["id"] == "other"

    def test_english_labels(self, client):
        response = client.get("/api/v1/grocery/categories", params={"language": "en"})
        assert response.json()[0]["label"] == "Vegetables & Fruit"

    def test_unknown_language(self, client):
        response = client.get("/api/v1/grocery/categories", params={"language": "de"})
        assert response.status_code == 422


class TestGroceryListEndpoints:
    """Tests for the grocery list routes."""

    def test_add_to_new_list(self, client):
        response = client.post(
            "/api/v1/grocery/add",
            json={
                "list_id": "week-42",
                "ingredients": ["2 dl grädde", "3 morötter", "1 krm salt"],
                "source_meal": "Pasta",
            },
        )
        assert response.status_code == 200

        data = response.json()
        assert data["list_id"] == "week-42"
        assert [i["display_name"] for i in data["items"]] == ["2 dl grädde", "3 morötter"]
        assert list(data["items_by_category"]) == ["produce", "dairy"]
        assert data["open_items_count"] == 2
        assert data["bought_items_count"] == 0

    def test_add_merges_with_existing_items(self, client):
        first = client.post(
            "/api/v1/grocery/add",
            json={"list_id": "week-42", "ingredients": ["2 dl grädde"], "source_meal": "Pasta"},
        ).json()

        response = client.post(
            "/api/v1/grocery/add",
            json={
                "list_id": "week-42",
                "items": first["items"],
                "ingredients": ["1 dl vispgrädde"],
                "source_meal": "Soppa",
            },
        )

        items = response.json()["items"]
        assert len(items) == 1
        assert items[0]["quantity"] == 3.0
        assert items[0]["source_meals"] == ["Pasta", "Soppa"]

    def test_add_custom_item(self, client):
        response = client.post("/api/v1/grocery/custom", json={"text": "Tandkräm"})
        assert response.status_code == 200

        item = response.json()["items"][0]
        assert item["is_custom"] is True
        assert item["category"] == "other"
        assert item["display_name"] == "Tandkräm"

    def test_custom_item_requires_text(self, client):
        response = client.post("/api/v1/grocery/custom", json={"text": ""})
        assert response.status_code == 422

    def test_regenerate(self, client, pancake_lines, omelette_lines):
        response = client.post(
            "/api/v1/grocery/regenerate",
            json={
                "list_id": "week-42",
                "meals": [
                    {"name": "Pannkakor", "ingredients": pancake_lines},
                    {"name": "Omelett", "ingredients": omelette_lines},
                ],
                "custom_items": [
                    {"ingredient_name": "tandkräm", "normalized_name": "tandkräm"},
                ],
            },
        )
        assert response.status_code == 200

        items = response.json()["items"]
        assert [i["normalized_name"] for i in items] == ["tandkräm", "ägg", "mjölk", "mjöl"]
        assert items[1]["quantity"] == 7.0
        assert items[1]["source_meals"] == ["Pannkakor", "Omelett"]

    def test_remove_by_source(self, client, pancake_lines, omelette_lines):
        regenerated = client.post(
            "/api/v1/grocery/regenerate",
            json={
                "list_id": "week-42",
                "meals": [
                    {"name": "Pannkakor", "ingredients": pancake_lines},
                    {"name": "Omelett", "ingredients": omelette_lines},
                ],
            },
        ).json()

        response = client.post(
            "/api/v1/grocery/remove-by-source",
            json={
                "list_id": "week-42",
                "items": regenerated["items"],
                "source_meal": "Omelett",
            },
        )
        assert response.status_code == 200

        data = response.json()
        assert data["removed"] == 2
        assert [i["normalized_name"] for i in data["grocery_list"]["items"]] == ["mjöl"]

    def test_remove_meal_with_comma_in_name(self, client):
        meal = "Pasta, bacon och ägg"
        added = client.post(
            "/api/v1/grocery/add",
            json={"list_id": "week-42", "ingredients": ["2 ägg"], "source_meal": meal},
        ).json()
        assert added["items"][0]["source_meals"] == [meal]

        response = client.post(
            "/api/v1/grocery/remove-by-source",
            json={"list_id": "week-42", "items": added["items"], "source_meal": meal},
        )
        assert response.status_code == 200
        assert response.json()["removed"] == 1

    def test_remove_unknown_source(self, client):
        response = client.post(
            "/api/v1/grocery/remove-by-source",
            json={"list_id": "week-42", "items": [], "source_meal": "Tacos"},
        )
        assert response.status_code == 404

    def test_invalid_quantity_rejected(self, client):
        response = client.post(
            "/api/v1/grocery/add",
            json={
                "items": [
                    {"ingredient_name": "ägg", "normalized_name": "ägg", "quantity": 0},
                ],
                "ingredients": ["2 ägg"],
            },
        )
        assert response.status_code == 422
