from fastapi import APIRouter, Query, status
from typing import List
from uuid import UUID

from bizdesk.dependencies.dbDependecies import db_dependency
from bizdesk.dependencies.userDependencies import auth_context_dependency
from bizdesk.modules.staff.service import StaffService
from bizdesk.modules.staff.schemas import StaffCreate, StaffOut, EmailExists

router = APIRouter(prefix="/staff", tags=["Staff"])


@router.get("/", response_model=List[StaffOut])
async def list_staff(db: db_dependency, auth_context: auth_context_dependency):
    return StaffService(db).list_staff(auth_context.user_id)


@router.get("/email-exists", response_model=EmailExists)
async def email_exists(
    db: db_dependency,
    auth_context: auth_context_dependency,
    email: str = Query(..., min_length=3)
):
    """Indica si el email ya está registrado por algún miembro del personal."""
    return EmailExists(email=email, exists=StaffService(db).check_email_exists(email))


@router.post("/", response_model=StaffOut, status_code=status.HTTP_201_CREATED)
async def create_staff(data: StaffCreate, db: db_dependency, auth_context: auth_context_dependency):
    return StaffService(db).create_staff(data, auth_context.user_id)


@router.delete("/{staff_id}")
async def remove_staff(staff_id: UUID, db: db_dependency, auth_context: auth_context_dependency):
    return StaffService(db).remove_staff(staff_id, auth_context.user_id)
