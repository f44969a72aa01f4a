from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from bizdesk.common.periods import StatsPeriod
from bizdesk.dependencies.dbDependecies import get_db
from bizdesk.modules.auth.dependencies import get_auth_context
from bizdesk.modules.auth.schemas import AuthContext
from bizdesk.modules.sales.models import PaymentStatus
from bizdesk.modules.sales.service import SaleService
from bizdesk.modules.sales.audit import AuditProposalService, AuditResolverService
from bizdesk.modules.sales.schemas import (
    SaleCreate, SaleOut, SalePayment, SaleStats,
    SaleUpdateProposal, SaleDeletionProposal, ProposalResult,
    AuditStatusUpdate, AuditOut, AuditList
)

router = APIRouter(prefix="/sales", tags=["Sales"])
audit_router = APIRouter(prefix="/sales-audit", tags=["Sales Audit"])


# ===== VENTAS =====

@router.get("/", response_model=List[SaleOut])
async def list_sales(
    payment_status: Optional[PaymentStatus] = Query(None, description="Filtrar por estado de pago"),
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    """Ventas del usuario, más recientes primero."""
    return SaleService(db).list_sales(auth_context.user_id, payment_status)


@router.get("/stats", response_model=SaleStats)
async def sales_stats(
    period: StatsPeriod = Query(StatsPeriod.DAILY),
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return SaleService(db).get_stats(auth_context.user_id, period)


@router.post("/", response_model=SaleOut, status_code=status.HTTP_201_CREATED)
async def create_sale(
    data: SaleCreate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    """
    Registrar una venta

    - Descuenta el stock del producto
    - Si la venta queda con saldo y tiene cliente, aumenta el saldo del cliente
    """
    return SaleService(db).create_sale(data, auth_context.user_id)


@router.get("/{sale_id}", response_model=SaleOut)
async def get_sale(sale_id: UUID, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    return SaleService(db).get_sale(sale_id, auth_context.user_id)


@router.post("/{sale_id}/payments", response_model=SaleOut)
async def add_payment(
    sale_id: UUID,
    payment: SalePayment,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    """Registrar un abono sobre el saldo pendiente."""
    return SaleService(db).add_payment(sale_id, payment, auth_context.user_id)


@router.delete("/{sale_id}")
async def delete_sale(sale_id: UUID, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    """Eliminación directa de la venta (repone stock y saldo del cliente)."""
    return SaleService(db).delete_sale(sale_id, auth_context.user_id)


# ===== PROPUESTAS CON AUDITORÍA =====

@router.post("/{sale_id}/update-request", response_model=ProposalResult, status_code=status.HTTP_201_CREATED)
async def request_sale_update(
    sale_id: UUID,
    proposal: SaleUpdateProposal,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    """
    Proponer un cambio sobre la venta. La venta no cambia hasta que la auditoría se apruebe.
    """
    return AuditProposalService(db).update_sale(sale_id, proposal, auth_context.user_id)


@router.post("/{sale_id}/delete-request", response_model=ProposalResult, status_code=status.HTTP_201_CREATED)
async def request_sale_deletion(
    sale_id: UUID,
    proposal: SaleDeletionProposal,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    """Proponer la eliminación de la venta."""
    return AuditProposalService(db).delete_sale_with_audit(sale_id, proposal, auth_context.user_id)


# ===== AUDITORÍAS =====

@audit_router.get("/", response_model=AuditList)
async def list_audit(db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    audits = AuditResolverService(db).list_audit(auth_context.user_id)
    return AuditList(audits=[AuditOut.model_validate(a) for a in audits], total=len(audits))


@audit_router.get("/{audit_id}", response_model=AuditOut)
async def get_audit(audit_id: UUID, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    return AuditResolverService(db).get_audit(audit_id, auth_context.user_id)


@audit_router.patch("/{audit_id}/status", response_model=AuditOut)
async def update_audit_status(
    audit_id: UUID,
    decision: AuditStatusUpdate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    """
    Aprobar o rechazar una auditoría pendiente

    - **approved**: aplica el cambio registrado sobre la venta
    - **rejected**: la venta no cambia
    - Una auditoría ya resuelta responde 409
    """
    return AuditResolverService(db).update_audit_status(audit_id, decision, auth_context.user_id)
