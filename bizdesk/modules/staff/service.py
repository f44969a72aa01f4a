from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List
from uuid import UUID
import logging

from bizdesk.common.access import get_owned_record, generate_reference
from bizdesk.database.database import get_owned_query
from bizdesk.modules.auth.utils import hash_password
from bizdesk.modules.staff.models import Staff
from bizdesk.modules.staff.schemas import StaffCreate

logger = logging.getLogger(__name__)


class StaffService:
    """Personal del negocio (cuentas de vendedores)"""

    def __init__(self, db: Session):
        self.db = db

    def list_staff(self, user_id: UUID) -> List[Staff]:
        return get_owned_query(self.db, Staff, user_id).order_by(Staff.created_at.desc()).all()

    def check_email_exists(self, email: str) -> bool:
        return self.db.query(Staff).filter(func.lower(Staff.email_address) == email.lower()).first() is not None

    def create_staff(self, data: StaffCreate, user_id: UUID) -> Staff:
        try:
            if self.check_email_exists(data.email_address):
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Ya existe un miembro del personal con este email"
                )
            staff = Staff(
                user_id=user_id,
                staff_number=generate_reference("staff"),
                staff_full_name=data.staff_full_name,
                email_address=data.email_address.lower(),
                phone_number=data.phone_number,
                id_card_front_url=data.id_card_front_url,
                id_card_back_url=data.id_card_back_url,
                password=hash_password(data.password),
                failed_login_attempts=0
            )
            self.db.add(staff)
            self.db.commit()
            self.db.refresh(staff)
            logger.info(f"Staff member {staff.staff_number} created")
            return staff
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error creando personal: {str(e)}"
            )

    def remove_staff(self, staff_id: UUID, user_id: UUID) -> dict:
        try:
            staff = get_owned_record(self.db, Staff, staff_id, user_id, "Personal")
            self.db.delete(staff)
            self.db.commit()
            return {"message": "Personal eliminado exitosamente"}
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error eliminando personal: {str(e)}"
            )
