"""
Auditoría de ventas

Los cambios y eliminaciones de ventas no se aplican directamente: se registran
como una auditoría pendiente y solo se aplican cuando alguien la aprueba.

- AuditProposalService: crea la auditoría pendiente con las instantáneas antes/después
- AuditResolverService: aprueba o rechaza una auditoría y aplica el cambio aprobado

El estado de una auditoría solo puede pasar de pending a approved o rejected,
una única vez. La lectura de la auditoría bloquea la fila y el efecto sobre la
venta se confirma en el mismo commit que el cambio de estado.
"""

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session
from decimal import Decimal
from typing import List
from uuid import UUID
import enum
import logging

from bizdesk.common.access import get_owned_record, record_query, generate_reference
from bizdesk.common.mixins import utcnow
from bizdesk.database.database import get_owned_query
from bizdesk.modules.products.models import Product
from bizdesk.modules.products.service import apply_sale_to_stock
from bizdesk.modules.sales.models import Sale, SaleAudit, AuditType
from bizdesk.modules.sales.schemas import (
    SaleUpdateProposal, SaleDeletionProposal, ProposalResult, AuditStatusUpdate,
    AuditChange, QuantityChange, PaymentMethodChange, Deletion, Edit
)
from bizdesk.modules.sales.service import remove_sale

logger = logging.getLogger(__name__)


class AuditStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self != AuditStatus.PENDING

    def transition(self, target: "AuditStatus") -> "AuditStatus":
        """Devuelve el nuevo estado o lanza 409 si la transición no es válida."""
        if self.is_terminal:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"La auditoría ya fue resuelta ({self.value})"
            )
        if target == AuditStatus.PENDING:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Una auditoría no puede volver a pending"
            )
        return target


def sale_snapshot(sale: Sale) -> dict:
    return jsonable_encoder({
        "sale_number": sale.sale_number,
        "client_name": sale.client_name,
        "boxes_quantity": sale.boxes_quantity,
        "kg_quantity": sale.kg_quantity,
        "box_price": sale.box_price,
        "kg_price": sale.kg_price,
        "payment_method": sale.payment_method,
        "total_amount": sale.total_amount,
        "amount_paid": sale.amount_paid,
        "remaining_amount": sale.remaining_amount,
        "payment_status": sale.payment_status,
    })


def classify_proposal(proposal: SaleUpdateProposal) -> AuditType:
    if proposal.boxes_quantity is not None or proposal.kg_quantity is not None:
        return AuditType.QUANTITY_CHANGE
    if proposal.payment_method is not None:
        return AuditType.PAYMENT_METHOD_CHANGE
    return AuditType.EDIT


def recorded_change(audit: SaleAudit) -> AuditChange:
    """Reconstruye el cambio tipado que registra la auditoría."""
    audit_type = AuditType(audit.audit_type)
    if audit_type == AuditType.QUANTITY_CHANGE:
        return QuantityChange(
            boxes_before=audit.boxes_before,
            boxes_after=audit.boxes_after,
            kg_before=audit.kg_before,
            kg_after=audit.kg_after,
        )
    if audit_type == AuditType.PAYMENT_METHOD_CHANGE:
        return PaymentMethodChange(before=audit.payment_method_before, after=audit.payment_method_after)
    if audit_type == AuditType.DELETION:
        return Deletion()
    return Edit()


class AuditProposalService:
    """Registra propuestas de cambio sin modificar la venta"""

    def __init__(self, db: Session):
        self.db = db

    def _insert(self, sale: Sale, audit_type: AuditType, reason: str, user_id: UUID, **values) -> SaleAudit:
        audit = SaleAudit(
            user_id=user_id,
            audit_number=generate_reference("audit"),
            sale_id=sale.id,
            audit_type=audit_type.value,
            boxes_before=sale.boxes_quantity,
            kg_before=sale.kg_quantity,
            payment_method_before=sale.payment_method,
            old_values=sale_snapshot(sale),
            reason=reason,
            performed_by=user_id,
            approval_status=AuditStatus.PENDING.value,
            **values
        )
        self.db.add(audit)
        self.db.commit()
        self.db.refresh(audit)
        logger.info(f"Audit {audit.audit_number} ({audit_type.value}) proposed for sale {sale.id}")
        return audit

    def update_sale(self, sale_id: UUID, proposal: SaleUpdateProposal, user_id: UUID) -> ProposalResult:
        """
        Proponer un cambio de cantidades o método de pago.
        El estado "después" siempre refleja la venta completa resultante.
        """
        try:
            sale = get_owned_record(self.db, Sale, sale_id, user_id, "Venta")
            audit_type = classify_proposal(proposal)

            boxes_after = proposal.boxes_quantity if proposal.boxes_quantity is not None else sale.boxes_quantity
            kg_after = proposal.kg_quantity if proposal.kg_quantity is not None else sale.kg_quantity
            payment_method_after = proposal.payment_method if proposal.payment_method is not None else sale.payment_method

            audit = self._insert(
                sale, audit_type, proposal.reason, user_id,
                boxes_after=boxes_after,
                kg_after=kg_after,
                payment_method_after=payment_method_after,
                new_values=jsonable_encoder({
                    "boxes_quantity": boxes_after,
                    "kg_quantity": kg_after,
                    "payment_method": payment_method_after,
                })
            )
            return ProposalResult(sale_id=sale.id, audit_id=audit.id, audit_type=audit.audit_type)

        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error registrando auditoría: {str(e)}"
            )

    def delete_sale_with_audit(self, sale_id: UUID, proposal: SaleDeletionProposal, user_id: UUID) -> ProposalResult:
        """Proponer la eliminación de una venta; sin instantánea "después"."""
        try:
            sale = get_owned_record(self.db, Sale, sale_id, user_id, "Venta")
            audit = self._insert(
                sale, AuditType.DELETION, proposal.reason, user_id,
                boxes_after=None,
                kg_after=None,
                payment_method_after=None,
                new_values=None
            )
            return ProposalResult(sale_id=sale.id, audit_id=audit.id, audit_type=audit.audit_type)

        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error registrando auditoría: {str(e)}"
            )


class AuditResolverService:
    """Aprueba o rechaza auditorías y aplica el cambio aprobado"""

    def __init__(self, db: Session):
        self.db = db

    def list_audit(self, user_id: UUID) -> List[SaleAudit]:
        return get_owned_query(self.db, SaleAudit, user_id).order_by(SaleAudit.created_at.desc()).all()

    def get_audit(self, audit_id: UUID, user_id: UUID) -> SaleAudit:
        return get_owned_record(self.db, SaleAudit, audit_id, user_id, "Auditoría")

    def update_audit_status(self, audit_id: UUID, decision: AuditStatusUpdate, user_id: UUID) -> SaleAudit:
        try:
            audit = get_owned_record(self.db, SaleAudit, audit_id, user_id, "Auditoría", for_update=True)
            new_status = AuditStatus(audit.approval_status).transition(AuditStatus(decision.status.value))

            if new_status == AuditStatus.APPROVED:
                self._apply(audit, recorded_change(audit), user_id)

            audit.approval_status = new_status.value
            audit.approved_by = user_id
            audit.approved_timestamp = utcnow()
            if decision.reason:
                audit.approval_reason = decision.reason

            self.db.commit()
            self.db.refresh(audit)

            logger.info(f"Audit {audit.audit_number} resolved as {new_status.value} by {user_id}")
            return audit

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error resolving audit {audit_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error resolviendo auditoría: {str(e)}"
            )

    def _apply(self, audit: SaleAudit, change: AuditChange, user_id: UUID) -> None:
        if isinstance(change, Edit):
            return

        if audit.sale_id is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="La venta de esta auditoría ya no existe"
            )
        sale = get_owned_record(self.db, Sale, audit.sale_id, user_id, "Venta", for_update=True)

        if isinstance(change, QuantityChange):
            delta_boxes = change.boxes_after - int(sale.boxes_quantity or 0)
            delta_kg = change.kg_after - Decimal(sale.kg_quantity or 0)
            product = record_query(self.db, Product, sale.product_id, for_update=True).first()
            if product is not None:
                apply_sale_to_stock(product, delta_boxes, delta_kg)
            sale.boxes_quantity = change.boxes_after
            sale.kg_quantity = change.kg_after
        elif isinstance(change, PaymentMethodChange):
            sale.payment_method = change.after
        elif isinstance(change, Deletion):
            remove_sale(self.db, sale)
        else:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Tipo de auditoría no soportado: {audit.audit_type}"
            )
