"""
Tests para el módulo de Reportes (ventas, inventario y gastos, JSON y CSV)
"""

import csv
import io
from datetime import timedelta
from decimal import Decimal

from bizdesk.common.mixins import utcnow
from bizdesk.modules.reports.utils import format_csv_value


def today_range():
    today = utcnow().date()
    return {"start_date": today.isoformat(), "end_date": today.isoformat()}


def read_csv(response):
    return list(csv.reader(io.StringIO(response.text)))


class TestSalesReport:

    def test_totals(self, client, auth_headers, product):
        client.post("/sales/", headers=auth_headers, json={
            "product_id": product["id"], "client_name": "A", "boxes_quantity": 2, "amount_paid": "80"
        })
        client.post("/sales/", headers=auth_headers, json={
            "product_id": product["id"], "client_name": "B", "boxes_quantity": 1, "amount_paid": "10"
        })

        response = client.get("/api/v1/reports/sales/", headers=auth_headers, params=today_range())
        assert response.status_code == 200
        data = response.json()
        assert data["totals"]["sales_count"] == 2
        assert Decimal(data["totals"]["total_revenue"]) == Decimal("120")
        assert Decimal(data["totals"]["total_paid"]) == Decimal("90")
        assert Decimal(data["totals"]["total_remaining"]) == Decimal("30")
        assert [s["client_name"] for s in data["sales"]] == ["B", "A"]
        assert data["sales"][0]["product_name"] == "Tilapia"

    def test_outside_range(self, client, auth_headers, product):
        client.post("/sales/", headers=auth_headers, json={
            "product_id": product["id"], "client_name": "A", "boxes_quantity": 1
        })
        yesterday = (utcnow().date() - timedelta(days=1)).isoformat()
        data = client.get("/api/v1/reports/sales/", headers=auth_headers, params={
            "start_date": yesterday, "end_date": yesterday
        }).json()
        assert data["sales"] == []

    def test_csv_export(self, client, auth_headers, product):
        client.post("/sales/", headers=auth_headers, json={
            "product_id": product["id"], "client_name": "Ama", "boxes_quantity": 1
        })
        response = client.get("/api/v1/reports/sales/", headers=auth_headers, params={**today_range(), "export": "csv"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]

        rows = read_csv(response)
        assert rows[0][0] == "Venta"
        assert rows[1][2] == "Ama"
        assert len(rows) == 2

    def test_invalid_range(self, client, auth_headers):
        response = client.get("/api/v1/reports/sales/", headers=auth_headers, params={
            "start_date": "2024-05-10", "end_date": "2024-05-01"
        })
        assert response.status_code == 422

    def test_unsupported_export(self, client, auth_headers):
        response = client.get("/api/v1/reports/sales/", headers=auth_headers, params={**today_range(), "export": "pdf"})
        assert response.status_code == 422

    def test_requires_auth(self, client):
        assert client.get("/api/v1/reports/sales/", params=today_range()).status_code == 401


class TestInventoryReport:

    def test_valuation(self, client, auth_headers, other_auth_headers, product):
        data = client.get("/api/v1/reports/inventory/", headers=auth_headers).json()
        assert data["totals"]["product_count"] == 1
        # 20 cajas × 30 + 50 kg × 3
        assert Decimal(data["totals"]["total_value"]) == Decimal("750")
        assert Decimal(data["totals"]["potential_revenue"]) == Decimal("1050")
        assert Decimal(data["totals"]["potential_profit"]) == Decimal("300")
        assert data["products"][0]["is_low_stock"] is False

        assert client.get("/api/v1/reports/inventory/", headers=other_auth_headers).json()["products"] == []

    def test_csv_export(self, client, auth_headers, product):
        response = client.get("/api/v1/reports/inventory/", headers=auth_headers, params={"export": "csv"})
        rows = read_csv(response)
        assert rows[0][:2] == ["Producto", "SKU"]
        assert rows[1][:2] == ["Tilapia", "TIL-001"]
        assert rows[1][-1] == "No"


class TestExpenseReport:

    def test_totals(self, client, auth_headers):
        category = client.post("/expense-categories/", headers=auth_headers, json={"name": "Renta"}).json()
        for amount in ("300", "45.5"):
            client.post("/expenses/", headers=auth_headers, json={
                "title": "Local",
                "category_id": category["id"],
                "amount": amount,
                "expense_date": utcnow().date().isoformat()
            })

        data = client.get("/api/v1/reports/expenses/", headers=auth_headers, params=today_range()).json()
        assert data["totals"]["expense_count"] == 2
        assert Decimal(data["totals"]["total_amount"]) == Decimal("345.5")
        assert data["expenses"][0]["category_name"] == "Renta"


class TestCsvFormatting:

    def test_format_values(self):
        assert format_csv_value(None) == ""
        assert format_csv_value(True) == "Yes"
        assert format_csv_value(Decimal("1.50")) == "1.50"
        assert format_csv_value(utcnow().date().replace(year=2024, month=1, day=2)) == "2024-01-02"
