"""Business logic for financial records."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..db_types import is_valid_guid
from . import summaries

LOGGER = logging.getLogger(__name__)


class InvalidExpenseIdError(ValueError):
    """Raised when an identifier is not a well-formed record id."""


class ExpenseService:
    """Encapsulates CRUD operations and summaries for financial records."""

    @staticmethod
    def _ensure_valid_id(expense_id: str) -> None:
        if not is_valid_guid(expense_id):
            raise InvalidExpenseIdError("Invalid expense ID")

    @staticmethod
    def list_expenses(db: Session) -> List[models.Expense]:
        return db.query(models.Expense).all()

    @staticmethod
    def list_expenses_between(db: Session, start: datetime, end: datetime) -> List[models.Expense]:
        return (
            db.query(models.Expense)
            .filter(models.Expense.date >= start, models.Expense.date <= end)
            .order_by(models.Expense.date.asc())
            .all()
        )

    @staticmethod
    def get_expense(db: Session, expense_id: str) -> Optional[models.Expense]:
        ExpenseService._ensure_valid_id(expense_id)
        return db.query(models.Expense).filter(models.Expense.id == expense_id).first()

    @staticmethod
    def create_expense(db: Session, data: schemas.ExpenseCreate) -> models.Expense:
        expense = models.Expense(**data.model_dump())
        db.add(expense)
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.refresh(expense)
        return expense

    @staticmethod
    def update_expense(
        db: Session, expense_id: str, data: schemas.ExpenseUpdate
    ) -> Optional[models.Expense]:
        """Overwrite the fields present in ``data``; returns ``None`` when missing."""

        expense = ExpenseService.get_expense(db, expense_id)
        if expense is None:
            return None

        for field, value in data.model_dump(exclude_unset=True).items():
            if field == "description" and value is None:
                value = ""
            setattr(expense, field, value)

        db.add(expense)
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.refresh(expense)
        return expense

    @staticmethod
    def delete_expense(db: Session, expense_id: str) -> bool:
        expense = ExpenseService.get_expense(db, expense_id)
        if expense is None:
            return False
        db.delete(expense)
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        LOGGER.info("Deleted expense %s", expense_id)
        return True

    @staticmethod
    def summary(db: Session) -> summaries.Totals:
        return summaries.compute_totals(ExpenseService.list_expenses(db))

    @staticmethod
    def weekly_summary(db: Session, as_of: date | datetime) -> summaries.WeeklyTotals:
        start, end = summaries.weekly_window(as_of)
        records = ExpenseService.list_expenses_between(db, start, end)
        return summaries.compute_weekly_totals(records, as_of)

    @staticmethod
    def weekly_chart(db: Session, as_of: date | datetime) -> List[summaries.DailyTotals]:
        start, end = summaries.weekly_window(as_of)
        records = ExpenseService.list_expenses_between(db, start, end)
        return summaries.compute_daily_chart_series(records, as_of)

    @staticmethod
    def balance(db: Session) -> summaries.Balance:
        income_figures = db.query(models.IncomeFigure).all()
        return summaries.compute_balance(income_figures, ExpenseService.list_expenses(db))
