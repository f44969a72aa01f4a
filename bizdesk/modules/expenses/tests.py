"""
Tests para el módulo de Gastos y sus categorías
"""

import pytest
from datetime import timedelta
from decimal import Decimal

from bizdesk.common.mixins import utcnow
from bizdesk.common.periods import StatsPeriod, period_start


@pytest.fixture
def category(client, auth_headers):
    response = client.post("/expense-categories/", headers=auth_headers, json={"name": "Transporte", "budget": "500"})
    assert response.status_code == 201, response.text
    return response.json()


def create_expense(client, headers, category_id, amount, expense_date=None, title="Gasolina"):
    return client.post("/expenses/", headers=headers, json={
        "title": title,
        "category_id": category_id,
        "amount": amount,
        "expense_date": (expense_date or utcnow().date()).isoformat(),
        "payment_method": "cash"
    })


class TestExpenseCategories:

    def test_duplicate_name_case_insensitive(self, client, auth_headers, category):
        response = client.post("/expense-categories/", headers=auth_headers, json={"name": "transporte"})
        assert response.status_code == 409

    def test_same_name_for_other_user(self, client, other_auth_headers, category):
        response = client.post("/expense-categories/", headers=other_auth_headers, json={"name": "Transporte"})
        assert response.status_code == 201

    def test_update(self, client, auth_headers, category):
        response = client.patch(f"/expense-categories/{category['id']}", headers=auth_headers, json={"budget": "750"})
        assert response.status_code == 200
        assert Decimal(response.json()["budget"]) == Decimal("750")

    def test_cannot_delete_in_use(self, client, auth_headers, category):
        create_expense(client, auth_headers, category["id"], "25")
        response = client.delete(f"/expense-categories/{category['id']}", headers=auth_headers)
        assert response.status_code == 409

    def test_delete_unused(self, client, auth_headers, category):
        assert client.delete(f"/expense-categories/{category['id']}", headers=auth_headers).status_code == 200
        assert client.get("/expense-categories/", headers=auth_headers).json() == []


class TestExpenses:

    def test_create(self, client, auth_headers, category):
        response = create_expense(client, auth_headers, category["id"], "25.50")
        assert response.status_code == 201
        data = response.json()
        assert data["category_name"] == "Transporte"
        assert data["status"] == "paid"
        assert Decimal(data["amount"]) == Decimal("25.50")

    def test_amount_must_be_positive(self, client, auth_headers, category):
        assert create_expense(client, auth_headers, category["id"], "0").status_code == 422

    def test_other_users_category(self, client, other_auth_headers, category):
        assert create_expense(client, other_auth_headers, category["id"], "10").status_code == 403

    def test_date_range_filter(self, client, auth_headers, category):
        today = utcnow().date()
        create_expense(client, auth_headers, category["id"], "10", today - timedelta(days=10), title="Vieja")
        create_expense(client, auth_headers, category["id"], "20", today, title="Nueva")

        data = client.get("/expenses/", headers=auth_headers, params={
            "start_date": (today - timedelta(days=1)).isoformat()
        }).json()
        assert [e["title"] for e in data] == ["Nueva"]

        all_expenses = client.get("/expenses/", headers=auth_headers).json()
        assert [e["title"] for e in all_expenses] == ["Nueva", "Vieja"]

    def test_inverted_range(self, client, auth_headers):
        response = client.get("/expenses/", headers=auth_headers, params={
            "start_date": "2024-05-10", "end_date": "2024-05-01"
        })
        assert response.status_code == 400

    def test_delete(self, client, auth_headers, other_auth_headers, category):
        expense = create_expense(client, auth_headers, category["id"], "10").json()
        assert client.delete(f"/expenses/{expense['id']}", headers=other_auth_headers).status_code == 403
        assert client.delete(f"/expenses/{expense['id']}", headers=auth_headers).status_code == 200
        assert client.get("/expenses/", headers=auth_headers).json() == []

    def test_stats_grouped_by_category(self, client, auth_headers, category):
        food = client.post("/expense-categories/", headers=auth_headers, json={"name": "Comida"}).json()
        create_expense(client, auth_headers, category["id"], "30")
        create_expense(client, auth_headers, category["id"], "12.5")
        create_expense(client, auth_headers, food["id"], "8")

        data = client.get("/expenses/stats", headers=auth_headers, params={"period": "daily"}).json()
        assert data["period"] == "daily"
        assert data["total_count"] == 3
        assert Decimal(data["total_amount"]) == Decimal("50.5")
        assert [c["category_name"] for c in data["by_category"]] == ["Transporte", "Comida"]
        assert data["by_category"][0]["count"] == 2


class TestPeriods:

    def test_period_start(self):
        now = utcnow().replace(year=2024, month=5, day=15, hour=13)
        assert period_start(StatsPeriod.DAILY, now).hour == 0
        assert period_start(StatsPeriod.DAILY, now).day == 15
        assert period_start(StatsPeriod.WEEKLY, now).day == 8
        assert period_start(StatsPeriod.MONTHLY, now).day == 1
