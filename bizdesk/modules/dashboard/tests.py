"""
Tests para el Dashboard
"""

from decimal import Decimal

from bizdesk.common.mixins import utcnow


class TestDashboard:

    def test_empty(self, client, auth_headers):
        response = client.get("/dashboard/stats", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["period"] == "daily"
        assert data["total_sales"] == 0
        assert Decimal(data["total_profit"]) == Decimal("0")
        assert data["recent_sales"] == []

    def test_summary(self, client, auth_headers, other_auth_headers, product):
        client.post("/sales/", headers=auth_headers, json={
            "product_id": product["id"],
            "client_name": "Mostrador",
            "boxes_quantity": 16,
            "amount_paid": "640"
        })
        category = client.post("/expense-categories/", headers=auth_headers, json={"name": "Hielo"}).json()
        client.post("/expenses/", headers=auth_headers, json={
            "title": "Hielo",
            "category_id": category["id"],
            "amount": "60",
            "expense_date": utcnow().date().isoformat()
        })

        data = client.get("/dashboard/stats", headers=auth_headers, params={"period": "monthly"}).json()
        assert data["total_sales"] == 1
        assert Decimal(data["total_revenue"]) == Decimal("640")
        assert Decimal(data["total_expenses"]) == Decimal("60")
        # 16 cajas × 10 de utilidad - 60 de gastos
        assert Decimal(data["total_profit"]) == Decimal("100")
        assert data["low_stock_count"] == 1
        assert data["low_stock_products"][0]["id"] == product["id"]
        assert len(data["recent_sales"]) == 1

        other = client.get("/dashboard/stats", headers=other_auth_headers).json()
        assert other["total_sales"] == 0
        assert other["low_stock_count"] == 0

    def test_invalid_period(self, client, auth_headers):
        assert client.get("/dashboard/stats", headers=auth_headers, params={"period": "yearly"}).status_code == 422
