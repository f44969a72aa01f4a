from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, Text, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import UUID
from uuid import uuid4
import enum

from bizdesk.database.database import Base
from bizdesk.common.mixins import BaseMixin


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    COMPLETED = "completed"


class AuditType(str, enum.Enum):
    QUANTITY_CHANGE = "quantity_change"
    PAYMENT_METHOD_CHANGE = "payment_method_change"
    DELETION = "deletion"
    EDIT = "edit"


class Sale(Base, BaseMixin):
    __tablename__ = "sales"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    sale_number = Column(String(50), nullable=False, unique=True, index=True)

    product_id = Column(UUID(as_uuid=True), ForeignKey("products.id"), nullable=False)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id"), nullable=True, index=True)
    client_name = Column(String(150), nullable=False)
    phone_number = Column(String(50), nullable=True)

    # Single product line, sold by box and/or by kg
    boxes_quantity = Column(Integer, nullable=False, default=0)
    kg_quantity = Column(Numeric(12, 2), nullable=False, default=0)
    box_price = Column(Numeric(15, 2), nullable=False, default=0)
    kg_price = Column(Numeric(15, 2), nullable=False, default=0)
    profit_per_box = Column(Numeric(15, 2), nullable=False, default=0)
    profit_per_kg = Column(Numeric(15, 2), nullable=False, default=0)

    # Totals; amount_paid + remaining_amount == total_amount
    subtotal = Column(Numeric(15, 2), nullable=False, default=0)
    tax = Column(Numeric(15, 2), nullable=False, default=0)
    total_amount = Column(Numeric(15, 2), nullable=False, default=0)
    amount_paid = Column(Numeric(15, 2), nullable=False, default=0)
    remaining_amount = Column(Numeric(15, 2), nullable=False, default=0)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.PENDING.value, index=True)
    payment_method = Column(String(50), nullable=True)

    notes = Column(Text, nullable=True)
    performed_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)

    product = relationship("Product", lazy="joined")
    customer = relationship("Customer")


class SaleAudit(Base, BaseMixin):
    """
    Propuesta de cambio sobre una venta. Se crea en estado pending y se
    resuelve una sola vez (approved o rejected); nunca se elimina.
    """
    __tablename__ = "sale_audits"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    audit_number = Column(String(50), nullable=False, unique=True, index=True)
    sale_id = Column(UUID(as_uuid=True), ForeignKey("sales.id", ondelete="SET NULL"), nullable=True, index=True)
    audit_type = Column(String(30), nullable=False)

    boxes_before = Column(Integer, nullable=False, default=0)
    boxes_after = Column(Integer, nullable=True)
    kg_before = Column(Numeric(12, 2), nullable=False, default=0)
    kg_after = Column(Numeric(12, 2), nullable=True)
    payment_method_before = Column(String(50), nullable=True)
    payment_method_after = Column(String(50), nullable=True)
    old_values = Column(JSON, nullable=False, default=dict)
    new_values = Column(JSON, nullable=True)

    reason = Column(Text, nullable=False)
    performed_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)

    approval_status = Column(String(20), nullable=False, default="pending", index=True)
    approved_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=True)
    approved_timestamp = Column(DateTime(timezone=True), nullable=True)
    approval_reason = Column(Text, nullable=True)

    @property
    def boxes_change(self) -> dict:
        return {"before": self.boxes_before, "after": self.boxes_after}

    @property
    def kg_change(self) -> dict:
        return {"before": self.kg_before, "after": self.kg_after}
