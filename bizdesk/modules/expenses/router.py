from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional
from uuid import UUID

from bizdesk.common.periods import StatsPeriod
from bizdesk.dependencies.dbDependecies import get_db
from bizdesk.modules.auth.dependencies import get_auth_context
from bizdesk.modules.auth.schemas import AuthContext
from bizdesk.modules.expenses.service import ExpenseService, ExpenseCategoryService
from bizdesk.modules.expenses.schemas import (
    ExpenseCreate, ExpenseOut, ExpenseStats,
    ExpenseCategoryCreate, ExpenseCategoryUpdate, ExpenseCategoryOut
)

router = APIRouter(prefix="/expenses", tags=["Expenses"])
category_router = APIRouter(prefix="/expense-categories", tags=["Expense Categories"])


@router.get("/", response_model=List[ExpenseOut])
async def list_expenses(
    category_id: Optional[UUID] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return ExpenseService(db).list_expenses(auth_context.user_id, category_id, start_date, end_date)


@router.get("/stats", response_model=ExpenseStats)
async def expense_stats(
    period: StatsPeriod = Query(StatsPeriod.MONTHLY),
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return ExpenseService(db).get_stats(auth_context.user_id, period)


@router.post("/", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
async def create_expense(
    data: ExpenseCreate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return ExpenseService(db).create_expense(data, auth_context.user_id)


@router.delete("/{expense_id}")
async def delete_expense(expense_id: UUID, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    return ExpenseService(db).delete_expense(expense_id, auth_context.user_id)


@category_router.get("/", response_model=List[ExpenseCategoryOut])
async def list_categories(db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    return ExpenseCategoryService(db).list_categories(auth_context.user_id)


@category_router.get("/{category_id}", response_model=ExpenseCategoryOut)
async def get_category(category_id: UUID, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    return ExpenseCategoryService(db).get_category(category_id, auth_context.user_id)


@category_router.post("/", response_model=ExpenseCategoryOut, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: ExpenseCategoryCreate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return ExpenseCategoryService(db).create_category(data, auth_context.user_id)


@category_router.patch("/{category_id}", response_model=ExpenseCategoryOut)
async def update_category(
    category_id: UUID,
    data: ExpenseCategoryUpdate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return ExpenseCategoryService(db).update_category(category_id, data, auth_context.user_id)


@category_router.delete("/{category_id}")
async def delete_category(category_id: UUID, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    """Elimina la categoría si no tiene gastos asociados."""
    return ExpenseCategoryService(db).delete_category(category_id, auth_context.user_id)
