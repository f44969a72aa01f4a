from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import func
from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
import logging

from bizdesk.common.access import get_owned_record
from bizdesk.common.periods import StatsPeriod, period_start
from bizdesk.database.database import get_owned_query
from bizdesk.modules.expenses.models import Expense, ExpenseCategory
from bizdesk.modules.expenses.schemas import (
    ExpenseCreate, ExpenseCategoryCreate, ExpenseCategoryUpdate, ExpenseStats, CategoryTotal
)

logger = logging.getLogger(__name__)


class ExpenseCategoryService:

    def __init__(self, db: Session):
        self.db = db

    def _ensure_unique_name(self, user_id: UUID, name: str, exclude_id: Optional[UUID] = None):
        query = get_owned_query(self.db, ExpenseCategory, user_id).filter(
            func.lower(ExpenseCategory.name) == name.lower()
        )
        if exclude_id:
            query = query.filter(ExpenseCategory.id != exclude_id)
        if query.first():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Ya existe una categoría de gastos con el nombre '{name}'"
            )

    def list_categories(self, user_id: UUID) -> List[ExpenseCategory]:
        return get_owned_query(self.db, ExpenseCategory, user_id).order_by(ExpenseCategory.name).all()

    def get_category(self, category_id: UUID, user_id: UUID) -> ExpenseCategory:
        return get_owned_record(self.db, ExpenseCategory, category_id, user_id, "Categoría de gastos")

    def create_category(self, data: ExpenseCategoryCreate, user_id: UUID) -> ExpenseCategory:
        try:
            self._ensure_unique_name(user_id, data.name)
            category = ExpenseCategory(user_id=user_id, **data.model_dump())
            self.db.add(category)
            self.db.commit()
            self.db.refresh(category)
            return category
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error creando categoría de gastos: {str(e)}"
            )

    def update_category(self, category_id: UUID, data: ExpenseCategoryUpdate, user_id: UUID) -> ExpenseCategory:
        try:
            category = self.get_category(category_id, user_id)
            if data.name:
                self._ensure_unique_name(user_id, data.name, exclude_id=category.id)
            for field, value in data.model_dump(exclude_unset=True).items():
                setattr(category, field, value)
            self.db.commit()
            self.db.refresh(category)
            return category
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error actualizando categoría de gastos: {str(e)}"
            )

    def delete_category(self, category_id: UUID, user_id: UUID) -> dict:
        try:
            category = self.get_category(category_id, user_id)
            in_use = self.db.query(Expense).filter(Expense.category_id == category.id).count()
            if in_use:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"No se puede eliminar la categoría: tiene {in_use} gasto(s) asociados"
                )
            self.db.delete(category)
            self.db.commit()
            return {"message": "Categoría eliminada exitosamente"}
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error eliminando categoría de gastos: {str(e)}"
            )


class ExpenseService:

    def __init__(self, db: Session):
        self.db = db

    def list_expenses(
        self,
        user_id: UUID,
        category_id: Optional[UUID] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[Expense]:
        if start_date and end_date and end_date < start_date:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="La fecha final no puede ser anterior a la inicial"
            )
        query = get_owned_query(self.db, Expense, user_id)
        if category_id:
            query = query.filter(Expense.category_id == category_id)
        if start_date:
            query = query.filter(Expense.expense_date >= start_date)
        if end_date:
            query = query.filter(Expense.expense_date <= end_date)
        return query.order_by(Expense.expense_date.desc(), Expense.created_at.desc()).all()

    def create_expense(self, data: ExpenseCreate, user_id: UUID) -> Expense:
        try:
            get_owned_record(self.db, ExpenseCategory, data.category_id, user_id, "Categoría de gastos")
            expense = Expense(user_id=user_id, **data.model_dump(mode="python"))
            expense.status = data.status.value
            self.db.add(expense)
            self.db.commit()
            self.db.refresh(expense)
            logger.info(f"Expense {expense.id} recorded: {expense.amount}")
            return expense
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error creando gasto: {str(e)}"
            )

    def delete_expense(self, expense_id: UUID, user_id: UUID) -> dict:
        try:
            expense = get_owned_record(self.db, Expense, expense_id, user_id, "Gasto")
            self.db.delete(expense)
            self.db.commit()
            return {"message": "Gasto eliminado exitosamente"}
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error eliminando gasto: {str(e)}"
            )

    def get_stats(self, user_id: UUID, period: StatsPeriod) -> ExpenseStats:
        """Total, conteo y totales por categoría de los gastos del periodo."""
        start = period_start(period).date()
        rows = self.db.query(
            ExpenseCategory.id,
            ExpenseCategory.name,
            func.coalesce(func.sum(Expense.amount), 0),
            func.count(Expense.id)
        ).join(Expense, Expense.category_id == ExpenseCategory.id).filter(
            Expense.user_id == user_id,
            Expense.expense_date >= start
        ).group_by(ExpenseCategory.id, ExpenseCategory.name).all()

        by_category = [
            CategoryTotal(category_id=cid, category_name=name, total=Decimal(total or 0), count=count)
            for cid, name, total, count in rows
        ]
        return ExpenseStats(
            period=period.value,
            total_amount=sum((c.total for c in by_category), Decimal("0")),
            total_count=sum(c.count for c in by_category),
            by_category=sorted(by_category, key=lambda c: c.total, reverse=True)
        )
