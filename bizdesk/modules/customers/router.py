from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from bizdesk.dependencies.dbDependecies import get_db
from bizdesk.modules.auth.dependencies import get_auth_context
from bizdesk.modules.auth.schemas import AuthContext
from bizdesk.modules.customers.service import CustomerService
from bizdesk.modules.customers.schemas import CustomerCreate, CustomerUpdate, CustomerOut, CustomerStatus
from bizdesk.modules.sales.schemas import SaleOut

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("/", response_model=List[CustomerOut])
async def list_customers(
    customer_status: Optional[CustomerStatus] = Query(None, alias="status", description="active o inactive"),
    has_balance: Optional[bool] = Query(None, description="Solo clientes con (o sin) saldo pendiente"),
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    """Lista clientes; con has_balance=true funciona como lista de deudores."""
    return CustomerService(db).list_customers(auth_context.user_id, customer_status, has_balance)


@router.post("/", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
async def create_customer(
    data: CustomerCreate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return CustomerService(db).create_customer(data, auth_context.user_id)


@router.get("/{customer_id}", response_model=CustomerOut)
async def get_customer(customer_id: UUID, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    return CustomerService(db).get_customer(customer_id, auth_context.user_id)


@router.patch("/{customer_id}", response_model=CustomerOut)
async def update_customer(
    customer_id: UUID,
    data: CustomerUpdate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return CustomerService(db).update_customer(customer_id, data, auth_context.user_id)


@router.get("/{customer_id}/history", response_model=List[SaleOut])
async def customer_history(customer_id: UUID, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    """Historial de ventas del cliente."""
    return CustomerService(db).get_transaction_history(customer_id, auth_context.user_id)
