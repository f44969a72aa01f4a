from sqlalchemy import Column, Integer, String, ForeignKey, Numeric
from sqlalchemy.dialects.postgresql import UUID
from uuid import uuid4

from bizdesk.database.database import Base
from bizdesk.common.mixins import BaseMixin


class Transaction(Base, BaseMixin):
    """Registro plano de movimientos de venta usado por las vistas de caja y deudores."""
    __tablename__ = "transactions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    transaction_number = Column(String(50), nullable=False, unique=True, index=True)
    sale_id = Column(UUID(as_uuid=True), ForeignKey("sales.id", ondelete="SET NULL"), nullable=True)
    product_name = Column(String(150), nullable=False)
    client_name = Column(String(150), nullable=False)
    boxes_quantity = Column(Integer, nullable=False, default=0)
    kg_quantity = Column(Numeric(12, 2), nullable=False, default=0)
    total_amount = Column(Numeric(15, 2), nullable=False, default=0)
    payment_status = Column(String(20), nullable=False, index=True)
    payment_method = Column(String(50), nullable=True)
    updated_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=True)
