"""
Tests para el módulo de Depósitos
"""

import pytest
from decimal import Decimal


def deposit_payload(**overrides):
    payload = {
        "deposit_type": "bank",
        "account_name": "Negocio de Prueba",
        "account_number": "0011223344",
        "amount": "1500",
        "to_recipient": "GCB Bank"
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def deposit(client, auth_headers):
    response = client.post("/deposits/", headers=auth_headers, json=deposit_payload(deposit_number="DEP-001"))
    assert response.status_code == 201, response.text
    return response.json()


class TestDeposits:

    def test_create(self, deposit, sample_user):
        assert deposit["deposit_number"] == "DEP-001"
        assert deposit["approval"] == "pending"
        assert deposit["created_by"] == str(sample_user.id)
        assert Decimal(deposit["amount"]) == Decimal("1500")

    def test_generated_number(self, client, auth_headers):
        response = client.post("/deposits/", headers=auth_headers, json=deposit_payload())
        assert response.json()["deposit_number"].startswith("dep_")

    def test_duplicate_number(self, client, auth_headers, deposit):
        response = client.post("/deposits/", headers=auth_headers, json=deposit_payload(deposit_number="DEP-001"))
        assert response.status_code == 409

    def test_amount_must_be_positive(self, client, auth_headers):
        response = client.post("/deposits/", headers=auth_headers, json=deposit_payload(amount="-5"))
        assert response.status_code == 422

    def test_get_and_update(self, client, auth_headers, deposit):
        assert client.get("/deposits/DEP-001", headers=auth_headers).json()["id"] == deposit["id"]

        response = client.put("/deposits/DEP-001", headers=auth_headers, json=deposit_payload(approval="approved"))
        assert response.status_code == 200
        assert response.json()["approval"] == "approved"

    def test_remove(self, client, auth_headers, deposit):
        assert client.delete("/deposits/DEP-001", headers=auth_headers).status_code == 200
        assert client.get("/deposits/DEP-001", headers=auth_headers).status_code == 404
        assert client.get("/deposits/", headers=auth_headers).json() == []

    def test_other_user(self, client, other_auth_headers, deposit):
        assert client.get("/deposits/", headers=other_auth_headers).json() == []
        assert client.get("/deposits/DEP-001", headers=other_auth_headers).status_code == 403
        assert client.delete("/deposits/DEP-001", headers=other_auth_headers).status_code == 403
