from sqlalchemy import Column, String, ForeignKey, UniqueConstraint, Numeric, Text, Date
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import UUID
from uuid import uuid4
import enum

from bizdesk.database.database import Base
from bizdesk.common.mixins import BaseMixin


class ExpenseStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"


class ExpenseCategory(Base, BaseMixin):
    __tablename__ = "expense_categories"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    name = Column(String(100), nullable=False)
    description = Column(String(255), nullable=True)
    budget = Column(Numeric(15, 2), nullable=True)

    expenses = relationship("Expense", back_populates="category")

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_expense_category_user_name"),
    )


class Expense(Base, BaseMixin):
    __tablename__ = "expenses"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    title = Column(String(150), nullable=False)
    category_id = Column(UUID(as_uuid=True), ForeignKey("expense_categories.id"), nullable=False, index=True)
    amount = Column(Numeric(15, 2), nullable=False)
    expense_date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, default=ExpenseStatus.PAID.value)
    payment_method = Column(String(50), nullable=True)
    receipt_url = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)

    category = relationship("ExpenseCategory", back_populates="expenses", lazy="joined")

    @property
    def category_name(self):
        return self.category.name if self.category else None
