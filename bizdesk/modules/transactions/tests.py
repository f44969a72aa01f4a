"""
Tests para el módulo de Transacciones
"""

import pytest
from decimal import Decimal


def transaction_payload(**overrides):
    payload = {
        "product_name": "Tilapia",
        "client_name": "Ama Mensah",
        "boxes_quantity": 3,
        "kg_quantity": "0",
        "total_amount": "120",
        "payment_status": "pending",
        "payment_method": "cash"
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def transaction(client, auth_headers):
    response = client.post("/transactions/", headers=auth_headers, json=transaction_payload(transaction_number="TXN-001"))
    assert response.status_code == 201, response.text
    return response.json()


class TestTransactions:

    def test_create_generates_number(self, client, auth_headers, sample_user):
        response = client.post("/transactions/", headers=auth_headers, json=transaction_payload())
        assert response.status_code == 201
        data = response.json()
        assert data["transaction_number"].startswith("txn_")
        assert data["updated_by"] == str(sample_user.id)

    def test_duplicate_number(self, client, auth_headers, transaction):
        response = client.post("/transactions/", headers=auth_headers, json=transaction_payload(transaction_number="TXN-001"))
        assert response.status_code == 409

    def test_filter_by_status_and_debtors(self, client, auth_headers, transaction):
        client.post("/transactions/", headers=auth_headers, json=transaction_payload(
            transaction_number="TXN-002", payment_status="completed"
        ))
        client.post("/transactions/", headers=auth_headers, json=transaction_payload(
            transaction_number="TXN-003", payment_status="partial"
        ))

        completed = client.get("/transactions/", headers=auth_headers, params={"payment_status": "completed"}).json()
        assert [t["transaction_number"] for t in completed] == ["TXN-002"]

        debtors = client.get("/transactions/debtors", headers=auth_headers).json()
        assert sorted(t["transaction_number"] for t in debtors) == ["TXN-001", "TXN-003"]

        assert len(client.get("/transactions/", headers=auth_headers).json()) == 3

    def test_replace(self, client, auth_headers, transaction):
        response = client.put("/transactions/TXN-001", headers=auth_headers, json=transaction_payload(
            total_amount="150", payment_status="completed", payment_method="momo"
        ))
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == transaction["id"]
        assert Decimal(data["total_amount"]) == Decimal("150")
        assert data["payment_status"] == "completed"

    def test_replace_requires_full_body(self, client, auth_headers, transaction):
        response = client.put("/transactions/TXN-001", headers=auth_headers, json={"total_amount": "150"})
        assert response.status_code == 422

    def test_remove(self, client, auth_headers, transaction):
        response = client.delete("/transactions/TXN-001", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["id"] == transaction["id"]
        assert client.delete("/transactions/TXN-001", headers=auth_headers).status_code == 404

    def test_other_user(self, client, other_auth_headers, transaction):
        assert client.get("/transactions/", headers=other_auth_headers).json() == []
        assert client.put("/transactions/TXN-001", headers=other_auth_headers, json=transaction_payload()).status_code == 403
        assert client.delete("/transactions/TXN-001", headers=other_auth_headers).status_code == 403

    def test_linked_sale_must_be_owned(self, client, other_auth_headers, auth_headers, product):
        sale = client.post("/sales/", headers=auth_headers, json={
            "product_id": product["id"], "client_name": "X", "boxes_quantity": 1
        }).json()
        response = client.post("/transactions/", headers=other_auth_headers, json=transaction_payload(sale_id=sale["id"]))
        assert response.status_code == 403
