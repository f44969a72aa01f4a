from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
import logging

from bizdesk.common.access import get_owned_record
from bizdesk.database.database import get_owned_query
from bizdesk.modules.customers.models import Customer
from bizdesk.modules.customers.schemas import CustomerCreate, CustomerUpdate, CustomerStatus

logger = logging.getLogger(__name__)


class CustomerService:
    """Clientes y deudores"""

    def __init__(self, db: Session):
        self.db = db

    def list_customers(
        self,
        user_id: UUID,
        customer_status: Optional[CustomerStatus] = None,
        has_balance: Optional[bool] = None
    ) -> List[Customer]:
        query = get_owned_query(self.db, Customer, user_id)
        if customer_status is not None:
            query = query.filter(Customer.is_active.is_(customer_status == CustomerStatus.ACTIVE))
        if has_balance is True:
            query = query.filter(Customer.balance > 0)
        elif has_balance is False:
            query = query.filter(Customer.balance <= 0)
        return query.order_by(Customer.name).all()

    def get_customer(self, customer_id: UUID, user_id: UUID) -> Customer:
        return get_owned_record(self.db, Customer, customer_id, user_id, "Cliente")

    def create_customer(self, data: CustomerCreate, user_id: UUID) -> Customer:
        try:
            customer = Customer(
                user_id=user_id,
                balance=Decimal("0"),
                is_active=True,
                **data.model_dump()
            )
            self.db.add(customer)
            self.db.commit()
            self.db.refresh(customer)
            return customer
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error creando cliente: {str(e)}"
            )

    def update_customer(self, customer_id: UUID, data: CustomerUpdate, user_id: UUID) -> Customer:
        try:
            customer = self.get_customer(customer_id, user_id)
            for field, value in data.model_dump(exclude_unset=True).items():
                setattr(customer, field, value)
            self.db.commit()
            self.db.refresh(customer)
            return customer
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error actualizando cliente: {str(e)}"
            )

    def get_transaction_history(self, customer_id: UUID, user_id: UUID):
        """Ventas del cliente, más recientes primero."""
        from bizdesk.modules.sales.models import Sale

        customer = self.get_customer(customer_id, user_id)
        return self.db.query(Sale).filter(
            Sale.user_id == user_id,
            Sale.customer_id == customer.id
        ).order_by(Sale.created_at.desc()).all()


def adjust_customer_balance(customer: Optional[Customer], delta: Decimal) -> None:
    """Suma (o resta) al saldo del cliente, sin dejarlo negativo."""
    if customer is None or not delta:
        return
    customer.balance = max(Decimal("0"), Decimal(customer.balance or 0) + Decimal(delta))
    logger.info(f"Customer {customer.id} balance moved by {delta} to {customer.balance}")
