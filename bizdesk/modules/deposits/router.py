from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from bizdesk.dependencies.dbDependecies import get_db
from bizdesk.modules.auth.dependencies import get_auth_context
from bizdesk.modules.auth.schemas import AuthContext
from bizdesk.modules.deposits.service import DepositService
from bizdesk.modules.deposits.schemas import DepositCreate, DepositUpdate, DepositOut

router = APIRouter(prefix="/deposits", tags=["Deposits"])


@router.get("/", response_model=List[DepositOut])
async def list_deposits(db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    return DepositService(db).list_deposits(auth_context.user_id)


@router.post("/", response_model=DepositOut, status_code=status.HTTP_201_CREATED)
async def create_deposit(
    data: DepositCreate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return DepositService(db).create_deposit(data, auth_context.user_id)


@router.get("/{deposit_number}", response_model=DepositOut)
async def get_deposit(deposit_number: str, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    return DepositService(db).get_by_number(deposit_number, auth_context.user_id)


@router.put("/{deposit_number}", response_model=DepositOut)
async def update_deposit(
    deposit_number: str,
    data: DepositUpdate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return DepositService(db).update_deposit(deposit_number, data, auth_context.user_id)


@router.delete("/{deposit_number}")
async def remove_deposit(deposit_number: str, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    return DepositService(db).remove_deposit(deposit_number, auth_context.user_id)
