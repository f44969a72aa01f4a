"""
Tests para el módulo de Ventas y su flujo de auditoría

- Registro de ventas: totales, estado de pago, stock y saldo del cliente
- Abonos y eliminación directa
- Propuestas de cambio/eliminación (no modifican la venta)
- Resolución de auditorías: aprobación, rechazo y transiciones inválidas
- Aislamiento por usuario
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from sqlalchemy.dialects import postgresql

from bizdesk.common.access import record_query
from bizdesk.modules.products.models import Product

from bizdesk.modules.sales.audit import AuditStatus, recorded_change
from bizdesk.modules.sales.models import Sale, SaleAudit
from bizdesk.modules.sales.schemas import QuantityChange, Deletion, Edit


# ===== FIXTURES =====

@pytest.fixture
def sale(client, auth_headers, product, customer):
    """Venta de 10 cajas a 40 (total 400) con abono inicial de 100."""
    response = client.post("/sales/", headers=auth_headers, json={
        "product_id": product["id"],
        "customer_id": customer["id"],
        "boxes_quantity": 10,
        "amount_paid": "100",
        "payment_method": "cash"
    })
    assert response.status_code == 201, response.text
    return response.json()


def get_product(client, headers, product_id):
    return client.get(f"/products/{product_id}", headers=headers).json()


def get_customer(client, headers, customer_id):
    return client.get(f"/customers/{customer_id}", headers=headers).json()


def propose_update(client, headers, sale_id, **changes):
    return client.post(f"/sales/{sale_id}/update-request", headers=headers, json=changes)


def resolve(client, headers, audit_id, decision, reason=None):
    body = {"status": decision}
    if reason:
        body["reason"] = reason
    return client.patch(f"/sales-audit/{audit_id}/status", headers=headers, json=body)


# ===== VENTAS =====

class TestCreateSale:

    def test_totals_and_status(self, sale, customer):
        assert Decimal(sale["subtotal"]) == Decimal("400")
        assert Decimal(sale["total_amount"]) == Decimal("400")
        assert Decimal(sale["amount_paid"]) == Decimal("100")
        assert Decimal(sale["remaining_amount"]) == Decimal("300")
        assert sale["payment_status"] == "partial"
        assert sale["client_name"] == customer["name"]

    def test_profit_defaults_to_price_minus_cost(self, sale):
        assert Decimal(sale["profit_per_box"]) == Decimal("10")
        assert Decimal(sale["profit_per_kg"]) == Decimal("2")

    def test_decrements_stock_and_raises_balance(self, client, auth_headers, sale, product, customer):
        assert get_product(client, auth_headers, product["id"])["quantity_box"] == 10
        assert Decimal(get_customer(client, auth_headers, customer["id"])["balance"]) == Decimal("300")

    def test_stock_never_goes_negative(self, client, auth_headers, product):
        response = client.post("/sales/", headers=auth_headers, json={
            "product_id": product["id"],
            "client_name": "Mostrador",
            "boxes_quantity": 25,
            "amount_paid": "1000"
        })
        assert response.status_code == 201
        assert response.json()["payment_status"] == "completed"
        assert get_product(client, auth_headers, product["id"])["quantity_box"] == 0

    def test_kg_and_tax(self, client, auth_headers, product):
        response = client.post("/sales/", headers=auth_headers, json={
            "product_id": product["id"],
            "client_name": "Mostrador",
            "kg_quantity": "4",
            "tax": "2"
        })
        data = response.json()
        assert Decimal(data["subtotal"]) == Decimal("20")
        assert Decimal(data["total_amount"]) == Decimal("22")
        assert data["payment_status"] == "pending"

    def test_overpayment_rejected(self, client, auth_headers, product):
        response = client.post("/sales/", headers=auth_headers, json={
            "product_id": product["id"],
            "client_name": "Mostrador",
            "boxes_quantity": 1,
            "amount_paid": "41"
        })
        assert response.status_code == 400
        assert get_product(client, auth_headers, product["id"])["quantity_box"] == 20

    def test_requires_client_name_or_customer(self, client, auth_headers, product):
        response = client.post("/sales/", headers=auth_headers, json={"product_id": product["id"], "boxes_quantity": 1})
        assert response.status_code == 400

    def test_other_users_product(self, client, other_auth_headers, product):
        response = client.post("/sales/", headers=other_auth_headers, json={
            "product_id": product["id"],
            "client_name": "X",
            "boxes_quantity": 1
        })
        assert response.status_code == 403


class TestListAndStats:

    def test_newest_first_and_status_filter(self, client, auth_headers, product, sale):
        second = client.post("/sales/", headers=auth_headers, json={
            "product_id": product["id"], "client_name": "B", "boxes_quantity": 1, "amount_paid": "40"
        }).json()

        ids = [s["id"] for s in client.get("/sales/", headers=auth_headers).json()]
        assert ids == [second["id"], sale["id"]]

        completed = client.get("/sales/", headers=auth_headers, params={"payment_status": "completed"}).json()
        assert [s["id"] for s in completed] == [second["id"]]

    def test_daily_stats(self, client, auth_headers, sale):
        response = client.get("/sales/stats", headers=auth_headers, params={"period": "daily"})
        assert response.status_code == 200
        data = response.json()
        assert data["total_sales"] == 1
        assert Decimal(data["total_revenue"]) == Decimal("100")
        assert Decimal(data["average_order_value"]) == Decimal("100")


class TestPayments:

    def test_payment_completes_sale(self, client, auth_headers, sale, customer):
        response = client.post(f"/sales/{sale['id']}/payments", headers=auth_headers, json={
            "amount": "300", "payment_method": "momo"
        })
        assert response.status_code == 200
        data = response.json()
        assert data["payment_status"] == "completed"
        assert Decimal(data["remaining_amount"]) == Decimal("0")
        assert data["payment_method"] == "momo"
        assert Decimal(get_customer(client, auth_headers, customer["id"])["balance"]) == Decimal("0")

    def test_amount_paid_plus_remaining_equals_total(self, client, auth_headers, sale):
        data = client.post(f"/sales/{sale['id']}/payments", headers=auth_headers, json={"amount": "50"}).json()
        assert Decimal(data["amount_paid"]) + Decimal(data["remaining_amount"]) == Decimal(data["total_amount"])
        assert data["payment_status"] == "partial"

    def test_payment_exceeding_remaining(self, client, auth_headers, sale):
        response = client.post(f"/sales/{sale['id']}/payments", headers=auth_headers, json={"amount": "301"})
        assert response.status_code == 400

    def test_payment_must_be_positive(self, client, auth_headers, sale):
        response = client.post(f"/sales/{sale['id']}/payments", headers=auth_headers, json={"amount": "0"})
        assert response.status_code == 422


class TestDirectDelete:

    def test_restores_stock_and_balance(self, client, auth_headers, sale, product, customer):
        response = client.delete(f"/sales/{sale['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert client.get(f"/sales/{sale['id']}", headers=auth_headers).status_code == 404
        assert get_product(client, auth_headers, product["id"])["quantity_box"] == 20
        assert Decimal(get_customer(client, auth_headers, customer["id"])["balance"]) == Decimal("0")

    def test_other_user_cannot_delete(self, client, other_auth_headers, auth_headers, sale):
        response = client.delete(f"/sales/{sale['id']}", headers=other_auth_headers)
        assert response.status_code == 403
        assert client.get(f"/sales/{sale['id']}", headers=auth_headers).status_code == 200


# ===== PROPUESTAS =====

class TestAuditProposal:

    def test_quantity_change_leaves_sale_untouched(self, client, auth_headers, sale):
        response = propose_update(client, auth_headers, sale["id"], boxes_quantity=7, reason="miscount")
        assert response.status_code == 201
        result = response.json()
        assert result["sale_id"] == sale["id"]
        assert result["audit_type"] == "quantity_change"

        assert client.get(f"/sales/{sale['id']}", headers=auth_headers).json() == sale

        audit = client.get(f"/sales-audit/{result['audit_id']}", headers=auth_headers).json()
        assert audit["approval_status"] == "pending"
        assert Decimal(audit["boxes_change"]["before"]) == 10
        assert Decimal(audit["boxes_change"]["after"]) == 7
        assert Decimal(audit["kg_change"]["after"]) == Decimal(sale["kg_quantity"])
        assert audit["reason"] == "miscount"
        assert audit["new_values"]["boxes_quantity"] == 7
        assert audit["new_values"]["payment_method"] == "cash"

    def test_payment_method_only(self, client, auth_headers, sale):
        result = propose_update(client, auth_headers, sale["id"], payment_method="momo", reason="cliente pagó por móvil").json()
        assert result["audit_type"] == "payment_method_change"
        audit = client.get(f"/sales-audit/{result['audit_id']}", headers=auth_headers).json()
        assert audit["payment_method_before"] == "cash"
        assert audit["payment_method_after"] == "momo"
        assert Decimal(audit["boxes_change"]["after"]) == 10

    def test_no_fields_is_edit(self, client, auth_headers, sale):
        result = propose_update(client, auth_headers, sale["id"], reason="revisar").json()
        assert result["audit_type"] == "edit"

    def test_deletion_has_no_after_snapshot(self, client, auth_headers, sale):
        response = client.post(f"/sales/{sale['id']}/delete-request", headers=auth_headers, json={"reason": "duplicate"})
        assert response.status_code == 201
        audit = client.get(f"/sales-audit/{response.json()['audit_id']}", headers=auth_headers).json()
        assert audit["audit_type"] == "deletion"
        assert audit["new_values"] is None
        assert audit["boxes_change"]["after"] is None
        assert audit["old_values"]["boxes_quantity"] == 10
        assert client.get(f"/sales/{sale['id']}", headers=auth_headers).status_code == 200

    @pytest.mark.parametrize("reason", ["", "   "])
    def test_reason_required(self, client, auth_headers, sale, reason):
        response = propose_update(client, auth_headers, sale["id"], boxes_quantity=7, reason=reason)
        assert response.status_code == 422

    def test_other_user_denied_without_audit(self, client, auth_headers, other_auth_headers, sale):
        response = propose_update(client, other_auth_headers, sale["id"], boxes_quantity=1, reason="x")
        assert response.status_code == 403
        response = client.post(f"/sales/{sale['id']}/delete-request", headers=other_auth_headers, json={"reason": "x"})
        assert response.status_code == 403
        assert client.get("/sales-audit/", headers=auth_headers).json()["total"] == 0
        assert client.get("/sales-audit/", headers=other_auth_headers).json()["total"] == 0

    def test_unknown_sale(self, client, auth_headers):
        response = propose_update(client, auth_headers, "00000000-0000-0000-0000-000000000000", boxes_quantity=1, reason="x")
        assert response.status_code == 404

    def test_unauthenticated(self, client, sale):
        response = propose_update(client, {}, sale["id"], boxes_quantity=1, reason="x")
        assert response.status_code == 401


# ===== RESOLUCIÓN =====

class TestAuditResolver:

    def test_approve_quantity_change(self, client, auth_headers, sale, product, sample_user):
        audit_id = propose_update(client, auth_headers, sale["id"], boxes_quantity=7, reason="miscount").json()["audit_id"]

        response = resolve(client, auth_headers, audit_id, "approved")
        assert response.status_code == 200
        audit = response.json()
        assert audit["approval_status"] == "approved"
        assert audit["approved_by"] == str(sample_user.id)
        assert audit["approved_timestamp"] is not None

        updated = client.get(f"/sales/{sale['id']}", headers=auth_headers).json()
        assert updated["boxes_quantity"] == 7
        # 3 cajas menos vendidas vuelven al stock
        assert get_product(client, auth_headers, product["id"])["quantity_box"] == 13

    def test_approve_payment_method_change(self, client, auth_headers, sale):
        audit_id = propose_update(client, auth_headers, sale["id"], payment_method="momo", reason="x").json()["audit_id"]
        resolve(client, auth_headers, audit_id, "approved")
        assert client.get(f"/sales/{sale['id']}", headers=auth_headers).json()["payment_method"] == "momo"

    def test_approve_deletion(self, client, auth_headers, sale, product, customer):
        audit_id = client.post(
            f"/sales/{sale['id']}/delete-request", headers=auth_headers, json={"reason": "duplicate"}
        ).json()["audit_id"]

        audit = resolve(client, auth_headers, audit_id, "approved").json()
        assert audit["sale_id"] is None
        assert audit["old_values"]["sale_number"] == sale["sale_number"]
        assert audit["old_values"]["box_price"] == 40
        assert audit["old_values"]["kg_price"] == 5
        assert client.get(f"/sales/{sale['id']}", headers=auth_headers).status_code == 404
        assert get_product(client, auth_headers, product["id"])["quantity_box"] == 20
        assert Decimal(get_customer(client, auth_headers, customer["id"])["balance"]) == Decimal("0")

    def test_reject_deletion_keeps_sale(self, client, auth_headers, sale):
        audit_id = client.post(
            f"/sales/{sale['id']}/delete-request", headers=auth_headers, json={"reason": "duplicate"}
        ).json()["audit_id"]

        audit = resolve(client, auth_headers, audit_id, "rejected", reason="not a duplicate").json()
        assert audit["approval_status"] == "rejected"
        assert audit["approval_reason"] == "not a duplicate"
        assert audit["approved_timestamp"] is not None
        assert client.get(f"/sales/{sale['id']}", headers=auth_headers).json() == sale

    def test_reject_quantity_change_keeps_sale(self, client, auth_headers, sale, product):
        audit_id = propose_update(client, auth_headers, sale["id"], boxes_quantity=2, reason="x").json()["audit_id"]
        resolve(client, auth_headers, audit_id, "rejected")
        assert client.get(f"/sales/{sale['id']}", headers=auth_headers).json() == sale
        assert get_product(client, auth_headers, product["id"])["quantity_box"] == 10

    def test_approve_edit_is_recorded_without_side_effect(self, client, auth_headers, sale):
        audit_id = propose_update(client, auth_headers, sale["id"], reason="nota").json()["audit_id"]
        audit = resolve(client, auth_headers, audit_id, "approved").json()
        assert audit["approval_status"] == "approved"
        assert client.get(f"/sales/{sale['id']}", headers=auth_headers).json() == sale

    def test_cannot_resolve_twice(self, client, auth_headers, sale, product):
        audit_id = propose_update(client, auth_headers, sale["id"], boxes_quantity=7, reason="x").json()["audit_id"]
        resolve(client, auth_headers, audit_id, "approved")

        response = resolve(client, auth_headers, audit_id, "rejected")
        assert response.status_code == 409
        response = resolve(client, auth_headers, audit_id, "approved")
        assert response.status_code == 409

        audit = client.get(f"/sales-audit/{audit_id}", headers=auth_headers).json()
        assert audit["approval_status"] == "approved"
        assert get_product(client, auth_headers, product["id"])["quantity_box"] == 13

    def test_other_user_cannot_resolve(self, client, auth_headers, other_auth_headers, sale):
        audit_id = propose_update(client, auth_headers, sale["id"], boxes_quantity=1, reason="x").json()["audit_id"]

        response = resolve(client, other_auth_headers, audit_id, "approved")
        assert response.status_code == 403

        audit = client.get(f"/sales-audit/{audit_id}", headers=auth_headers).json()
        assert audit["approval_status"] == "pending"
        assert audit["approved_by"] is None
        assert client.get(f"/sales/{sale['id']}", headers=auth_headers).json()["boxes_quantity"] == 10

    def test_invalid_decision(self, client, auth_headers, sale):
        audit_id = propose_update(client, auth_headers, sale["id"], boxes_quantity=1, reason="x").json()["audit_id"]
        response = resolve(client, auth_headers, audit_id, "pending")
        assert response.status_code == 422

    def test_list_newest_first(self, client, auth_headers, sale):
        first = propose_update(client, auth_headers, sale["id"], boxes_quantity=9, reason="a").json()["audit_id"]
        second = propose_update(client, auth_headers, sale["id"], payment_method="momo", reason="b").json()["audit_id"]
        data = client.get("/sales-audit/", headers=auth_headers).json()
        assert data["total"] == 2
        assert [a["id"] for a in data["audits"]] == [second, first]


class TestAuditStateMachine:

    def test_pending_transitions(self):
        assert AuditStatus.PENDING.transition(AuditStatus.APPROVED) == AuditStatus.APPROVED
        assert AuditStatus.PENDING.transition(AuditStatus.REJECTED) == AuditStatus.REJECTED

    @pytest.mark.parametrize("terminal", [AuditStatus.APPROVED, AuditStatus.REJECTED])
    def test_terminal_states_reject_transitions(self, terminal):
        from fastapi import HTTPException

        with pytest.raises(HTTPException) as exc:
            terminal.transition(AuditStatus.APPROVED)
        assert exc.value.status_code == 409

    def test_recorded_change_variants(self):
        quantity = SaleAudit(audit_type="quantity_change", boxes_before=10, boxes_after=7,
                             kg_before=Decimal("0"), kg_after=Decimal("1.5"))
        change = recorded_change(quantity)
        assert isinstance(change, QuantityChange)
        assert change.boxes_after == 7
        assert change.kg_after == Decimal("1.5")

        assert isinstance(recorded_change(SaleAudit(audit_type="deletion")), Deletion)
        assert isinstance(recorded_change(SaleAudit(audit_type="edit")), Edit)


class TestSaleRemovalDetachesAudits:

    def test_second_deletion_after_sale_removed(self, client, auth_headers, sale, product):
        first = client.post(f"/sales/{sale['id']}/delete-request", headers=auth_headers, json={"reason": "a"}).json()
        second = client.post(f"/sales/{sale['id']}/delete-request", headers=auth_headers, json={"reason": "b"}).json()

        assert resolve(client, auth_headers, first["audit_id"], "approved").status_code == 200

        pending = client.get(f"/sales-audit/{second['audit_id']}", headers=auth_headers).json()
        assert pending["sale_id"] is None
        assert pending["approval_status"] == "pending"

        response = resolve(client, auth_headers, second["audit_id"], "approved")
        assert response.status_code == 409
        # el stock solo se repone una vez
        assert get_product(client, auth_headers, product["id"])["quantity_box"] == 20

    def test_direct_delete_keeps_audit_history(self, client, auth_headers, sale):
        audit_id = propose_update(client, auth_headers, sale["id"], boxes_quantity=3, reason="x").json()["audit_id"]
        assert client.delete(f"/sales/{sale['id']}", headers=auth_headers).status_code == 200

        audit = client.get(f"/sales-audit/{audit_id}", headers=auth_headers).json()
        assert audit["sale_id"] is None
        assert audit["old_values"]["boxes_quantity"] == 10
        assert resolve(client, auth_headers, audit_id, "approved").status_code == 409

    def test_missing_sale_message(self, client, auth_headers):
        response = client.get(f"/sales/{uuid4()}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "No se encontró el registro (Venta)"


class TestRowLocks:

    @pytest.mark.parametrize("model, table", [(Sale, "sales"), (Product, "products")])
    def test_lock_targets_only_the_record_table(self, db_session, model, table):
        query = record_query(db_session, model, uuid4(), for_update=True)
        sql = str(query.statement.compile(dialect=postgresql.dialect()))
        assert f"FOR UPDATE OF {table}" in sql

    def test_no_lock_by_default(self, db_session):
        query = record_query(db_session, Sale, uuid4())
        sql = str(query.statement.compile(dialect=postgresql.dialect()))
        assert "FOR UPDATE" not in sql
