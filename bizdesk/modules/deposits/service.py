from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID
import logging

from bizdesk.common.access import ensure_owner, generate_reference
from bizdesk.database.database import get_owned_query
from bizdesk.modules.deposits.models import Deposit
from bizdesk.modules.deposits.schemas import DepositCreate, DepositUpdate

logger = logging.getLogger(__name__)


class DepositService:
    """Depósitos bancarios registrados por el negocio"""

    def __init__(self, db: Session):
        self.db = db

    def list_deposits(self, user_id: UUID) -> List[Deposit]:
        return get_owned_query(self.db, Deposit, user_id).order_by(Deposit.created_at.desc()).all()

    def get_by_number(self, deposit_number: str, user_id: UUID) -> Deposit:
        deposit = self.db.query(Deposit).filter(Deposit.deposit_number == deposit_number).first()
        return ensure_owner(deposit, user_id, "Depósito")

    def create_deposit(self, data: DepositCreate, user_id: UUID) -> Deposit:
        try:
            number = data.deposit_number or generate_reference("dep")
            if self.db.query(Deposit).filter(Deposit.deposit_number == number).first():
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"Ya existe el depósito {number}"
                )
            deposit = Deposit(
                user_id=user_id,
                deposit_number=number,
                created_by=user_id,
                updated_by=user_id,
                **data.model_dump(exclude={"deposit_number"})
            )
            self.db.add(deposit)
            self.db.commit()
            self.db.refresh(deposit)
            logger.info(f"Deposit {number} recorded for {deposit.amount}")
            return deposit
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error creando depósito: {str(e)}"
            )

    def update_deposit(self, deposit_number: str, data: DepositUpdate, user_id: UUID) -> Deposit:
        try:
            deposit = self.get_by_number(deposit_number, user_id)
            for field, value in data.model_dump().items():
                setattr(deposit, field, value)
            deposit.updated_by = user_id
            self.db.commit()
            self.db.refresh(deposit)
            return deposit
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error actualizando depósito: {str(e)}"
            )

    def remove_deposit(self, deposit_number: str, user_id: UUID) -> dict:
        try:
            deposit = self.get_by_number(deposit_number, user_id)
            deposit_id = deposit.id
            self.db.delete(deposit)
            self.db.commit()
            return {"message": "Depósito eliminado exitosamente", "id": str(deposit_id)}
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error eliminando depósito: {str(e)}"
            )
