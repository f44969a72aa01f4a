from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID
import logging

from bizdesk.common.access import ensure_owner, get_owned_record, generate_reference
from bizdesk.database.database import get_owned_query
from bizdesk.modules.sales.models import Sale, PaymentStatus
from bizdesk.modules.transactions.models import Transaction
from bizdesk.modules.transactions.schemas import TransactionCreate, TransactionReplace

logger = logging.getLogger(__name__)


class TransactionService:

    def __init__(self, db: Session):
        self.db = db

    def _get_by_number(self, transaction_number: str, user_id: UUID) -> Transaction:
        transaction = self.db.query(Transaction).filter(
            Transaction.transaction_number == transaction_number
        ).first()
        return ensure_owner(transaction, user_id, "Transacción")

    def list_transactions(self, user_id: UUID) -> List[Transaction]:
        return get_owned_query(self.db, Transaction, user_id).order_by(Transaction.created_at.desc()).all()

    def list_by_payment_status(self, user_id: UUID, payment_status: PaymentStatus) -> List[Transaction]:
        return get_owned_query(self.db, Transaction, user_id).filter(
            Transaction.payment_status == payment_status.value
        ).order_by(Transaction.created_at.desc()).all()

    def list_debtors(self, user_id: UUID) -> List[Transaction]:
        """Transacciones con pago pendiente o parcial."""
        return get_owned_query(self.db, Transaction, user_id).filter(
            Transaction.payment_status.in_([PaymentStatus.PENDING.value, PaymentStatus.PARTIAL.value])
        ).order_by(Transaction.created_at.desc()).all()

    def create_transaction(self, data: TransactionCreate, user_id: UUID) -> Transaction:
        try:
            if data.sale_id:
                get_owned_record(self.db, Sale, data.sale_id, user_id, "Venta")

            number = data.transaction_number or generate_reference("txn")
            if self.db.query(Transaction).filter(Transaction.transaction_number == number).first():
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"Ya existe la transacción {number}"
                )

            values = data.model_dump(exclude={"transaction_number"})
            values["payment_status"] = data.payment_status.value
            transaction = Transaction(
                user_id=user_id,
                transaction_number=number,
                updated_by=user_id,
                **values
            )
            self.db.add(transaction)
            self.db.commit()
            self.db.refresh(transaction)
            return transaction
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error creando transacción: {str(e)}"
            )

    def update_transaction(self, transaction_number: str, data: TransactionReplace, user_id: UUID) -> Transaction:
        try:
            transaction = self._get_by_number(transaction_number, user_id)
            if data.sale_id:
                get_owned_record(self.db, Sale, data.sale_id, user_id, "Venta")

            values = data.model_dump()
            values["payment_status"] = data.payment_status.value
            for field, value in values.items():
                setattr(transaction, field, value)
            transaction.updated_by = user_id

            self.db.commit()
            self.db.refresh(transaction)
            return transaction
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error actualizando transacción: {str(e)}"
            )

    def remove_transaction(self, transaction_number: str, user_id: UUID) -> dict:
        try:
            transaction = self._get_by_number(transaction_number, user_id)
            transaction_id = transaction.id
            self.db.delete(transaction)
            self.db.commit()
            return {"message": "Transacción eliminada exitosamente", "id": str(transaction_id)}
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error eliminando transacción: {str(e)}"
            )
