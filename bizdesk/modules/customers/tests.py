"""
Tests para el módulo de Clientes
"""

import pytest
from decimal import Decimal


class TestCustomers:

    def test_create_starts_with_zero_balance(self, customer):
        assert customer["name"] == "Ama Mensah"
        assert Decimal(customer["balance"]) == Decimal("0")
        assert customer["is_active"] is True

    def test_invalid_email(self, client, auth_headers):
        response = client.post("/customers/", headers=auth_headers, json={"name": "X", "email": "no-es-email"})
        assert response.status_code == 422

    def test_update_and_status_filter(self, client, auth_headers, customer):
        client.post("/customers/", headers=auth_headers, json={"name": "Kofi Boateng"})
        response = client.patch(f"/customers/{customer['id']}", headers=auth_headers, json={"is_active": False})
        assert response.status_code == 200
        assert response.json()["is_active"] is False

        active = client.get("/customers/", headers=auth_headers, params={"status": "active"}).json()
        inactive = client.get("/customers/", headers=auth_headers, params={"status": "inactive"}).json()
        assert [c["name"] for c in active] == ["Kofi Boateng"]
        assert [c["name"] for c in inactive] == ["Ama Mensah"]

    def test_debtors_and_history(self, client, auth_headers, customer, product):
        client.post("/customers/", headers=auth_headers, json={"name": "Kofi Boateng"})
        sale = client.post("/sales/", headers=auth_headers, json={
            "product_id": product["id"],
            "customer_id": customer["id"],
            "boxes_quantity": 2
        }).json()

        debtors = client.get("/customers/", headers=auth_headers, params={"has_balance": True}).json()
        assert [c["id"] for c in debtors] == [customer["id"]]
        assert Decimal(debtors[0]["balance"]) == Decimal("80")

        history = client.get(f"/customers/{customer['id']}/history", headers=auth_headers).json()
        assert [s["id"] for s in history] == [sale["id"]]

    def test_isolated_per_user(self, client, other_auth_headers, customer):
        assert client.get("/customers/", headers=other_auth_headers).json() == []
        response = client.get(f"/customers/{customer['id']}", headers=other_auth_headers)
        assert response.status_code == 403
        response = client.patch(f"/customers/{customer['id']}", headers=other_auth_headers, json={"name": "Otro"})
        assert response.status_code == 403

    @pytest.mark.parametrize("path", ["/customers/", "/customers/00000000-0000-0000-0000-000000000000"])
    def test_requires_auth(self, client, path):
        assert client.get(path).status_code == 401
