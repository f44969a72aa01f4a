from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from bizdesk.dependencies.dbDependecies import get_db
from bizdesk.modules.auth.dependencies import get_auth_context
from bizdesk.modules.auth.schemas import AuthContext
from bizdesk.modules.sales.models import PaymentStatus
from bizdesk.modules.transactions.service import TransactionService
from bizdesk.modules.transactions.schemas import TransactionCreate, TransactionReplace, TransactionOut

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.get("/", response_model=List[TransactionOut])
async def list_transactions(
    payment_status: Optional[PaymentStatus] = Query(None),
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    service = TransactionService(db)
    if payment_status:
        return service.list_by_payment_status(auth_context.user_id, payment_status)
    return service.list_transactions(auth_context.user_id)


@router.get("/debtors", response_model=List[TransactionOut])
async def list_debtors(db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    """Transacciones con saldo pendiente (pending o partial)."""
    return TransactionService(db).list_debtors(auth_context.user_id)


@router.post("/", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    data: TransactionCreate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return TransactionService(db).create_transaction(data, auth_context.user_id)


@router.put("/{transaction_number}", response_model=TransactionOut)
async def update_transaction(
    transaction_number: str,
    data: TransactionReplace,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return TransactionService(db).update_transaction(transaction_number, data, auth_context.user_id)


@router.delete("/{transaction_number}")
async def remove_transaction(transaction_number: str, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    return TransactionService(db).remove_transaction(transaction_number, auth_context.user_id)
