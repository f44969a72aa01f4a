from sqlalchemy import Column, String, Boolean, Numeric, Text
from sqlalchemy.dialects.postgresql import UUID
from uuid import uuid4
from bizdesk.database.database import Base
from bizdesk.common.mixins import BaseMixin


class Customer(Base, BaseMixin):
    __tablename__ = "customers"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    name = Column(String(150), nullable=False, index=True)
    email = Column(String(150), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    # Running debt: grows with underpaid sales, shrinks with payments
    balance = Column(Numeric(15, 2), nullable=False, default=0)
    is_active = Column(Boolean, default=True, nullable=False)
