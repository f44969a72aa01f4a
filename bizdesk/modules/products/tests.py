"""
Tests para el módulo de Productos y categorías de productos
"""

from decimal import Decimal


class TestProducts:

    def test_create_and_get(self, client, auth_headers, product):
        response = client.get(f"/products/{product['id']}", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["quantity_box"] == 20
        assert Decimal(data["quantity_kg"]) == Decimal("50")
        assert data["is_low_stock"] is False

    def test_duplicate_sku(self, client, auth_headers, product):
        response = client.post("/products/", headers=auth_headers, json={"name": "Otro", "sku": product["sku"]})
        assert response.status_code == 409

    def test_search_by_name_or_sku(self, client, auth_headers, product):
        client.post("/products/", headers=auth_headers, json={"name": "Salmon", "sku": "SAL-001"})

        by_name = client.get("/products/", headers=auth_headers, params={"search": "tila"})
        assert [p["name"] for p in by_name.json()] == ["Tilapia"]

        by_sku = client.get("/products/", headers=auth_headers, params={"search": "sal-"})
        assert [p["sku"] for p in by_sku.json()] == ["SAL-001"]

    def test_update_partial(self, client, auth_headers, product):
        response = client.patch(f"/products/{product['id']}", headers=auth_headers, json={"price_per_box": "45"})
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["price_per_box"]) == Decimal("45")
        assert data["name"] == "Tilapia"

    def test_adjust_stock_floors_at_zero(self, client, auth_headers, product):
        response = client.post(f"/products/{product['id']}/adjust-stock", headers=auth_headers, json={
            "box_adjustment": -50,
            "kg_adjustment": "10",
            "reason": "conteo físico"
        })
        assert response.status_code == 200
        data = response.json()
        assert data["quantity_box"] == 0
        assert Decimal(data["quantity_kg"]) == Decimal("60")

    def test_low_stock(self, client, auth_headers, product):
        client.post(f"/products/{product['id']}/adjust-stock", headers=auth_headers, json={
            "box_adjustment": -16, "reason": "merma"
        })
        response = client.get("/products/low-stock", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total_count"] == 1
        assert data["products"][0]["quantity_box"] == 4

    def test_inactive_product_is_not_low_stock(self, client, auth_headers, product):
        client.patch(f"/products/{product['id']}", headers=auth_headers, json={"is_active": False, "min_stock": 50})
        response = client.get("/products/low-stock", headers=auth_headers)
        assert response.json()["total_count"] == 0

    def test_other_user_gets_403(self, client, other_auth_headers, product):
        response = client.get(f"/products/{product['id']}", headers=other_auth_headers)
        assert response.status_code == 403

    def test_other_user_list_is_empty(self, client, other_auth_headers, product):
        response = client.get("/products/", headers=other_auth_headers)
        assert response.json() == []


class TestProductCategories:

    def test_create_and_filter_products(self, client, auth_headers):
        category = client.post("/product-categories/", headers=auth_headers, json={"category_name": "Mariscos"}).json()
        client.post("/products/", headers=auth_headers, json={"name": "Camarón", "sku": "CAM-1", "category_id": category["id"]})
        client.post("/products/", headers=auth_headers, json={"name": "Arroz", "sku": "ARR-1"})

        response = client.get("/products/", headers=auth_headers, params={"category_id": category["id"]})
        assert [p["name"] for p in response.json()] == ["Camarón"]

    def test_duplicate_name(self, client, auth_headers):
        client.post("/product-categories/", headers=auth_headers, json={"category_name": "Congelados"})
        response = client.post("/product-categories/", headers=auth_headers, json={"category_name": "congelados"})
        assert response.status_code == 409

    def test_delete_in_use_conflict(self, client, auth_headers):
        category = client.post("/product-categories/", headers=auth_headers, json={"category_name": "Frescos"}).json()
        client.post("/products/", headers=auth_headers, json={"name": "Pargo", "sku": "PAR-1", "category_id": category["id"]})

        response = client.delete(f"/product-categories/{category['id']}", headers=auth_headers)
        assert response.status_code == 409

    def test_delete_unused(self, client, auth_headers):
        category = client.post("/product-categories/", headers=auth_headers, json={"category_name": "Vacía"}).json()
        response = client.delete(f"/product-categories/{category['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert client.get("/product-categories/", headers=auth_headers).json() == []
