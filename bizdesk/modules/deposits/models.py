from sqlalchemy import Column, String, ForeignKey, Numeric
from sqlalchemy.dialects.postgresql import UUID
from uuid import uuid4

from bizdesk.database.database import Base
from bizdesk.common.mixins import BaseMixin


class Deposit(Base, BaseMixin):
    __tablename__ = "deposits"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    deposit_number = Column(String(50), nullable=False, unique=True, index=True)
    deposit_type = Column(String(50), nullable=False)
    account_name = Column(String(150), nullable=False)
    account_number = Column(String(50), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    to_recipient = Column(String(150), nullable=False)
    deposit_image_url = Column(String(500), nullable=True)
    approval = Column(String(30), nullable=False, default="pending")

    created_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    updated_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
