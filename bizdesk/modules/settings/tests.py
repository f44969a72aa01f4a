"""
Tests para el módulo de Configuración
"""


class TestSettings:

    def test_missing_key_returns_null(self, client, auth_headers):
        response = client.get("/settings/currency", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"key": "currency", "value": None}

    def test_upsert(self, client, auth_headers):
        created = client.put("/settings/currency", headers=auth_headers, json={"value": "GHS", "category": "general"})
        assert created.status_code == 200

        updated = client.put("/settings/currency", headers=auth_headers, json={"value": "USD", "category": "general"})
        assert updated.json()["id"] == created.json()["id"]
        assert client.get("/settings/currency", headers=auth_headers).json()["value"] == "USD"
        assert len(client.get("/settings/", headers=auth_headers).json()) == 1

    def test_by_category(self, client, auth_headers):
        client.put("/settings/currency", headers=auth_headers, json={"value": "GHS", "category": "general"})
        client.put("/settings/low_stock_alerts", headers=auth_headers, json={"value": "true", "category": "notifications"})

        data = client.get("/settings/category/notifications", headers=auth_headers).json()
        assert [s["key"] for s in data] == ["low_stock_alerts"]

    def test_isolated_per_user(self, client, auth_headers, other_auth_headers):
        client.put("/settings/currency", headers=auth_headers, json={"value": "GHS", "category": "general"})
        assert client.get("/settings/currency", headers=other_auth_headers).json()["value"] is None
        assert client.get("/settings/", headers=other_auth_headers).json() == []
