"""Router exposing financial record operations and their summaries."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..services import ExpenseService, InvalidExpenseIdError, NoIncomeDataError

LOGGER = logging.getLogger(__name__)

router = APIRouter()

_EXPENSE_NOT_FOUND = "Expense not found"


def _store_failure(error: str, exc: SQLAlchemyError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=schemas.ErrorResponse(error=error, details=str(exc)).model_dump(),
    )


def _resolve_as_of(as_of: Optional[date]) -> date:
    return as_of or date.today()


@router.get("/expenses", response_model=List[schemas.ExpenseRead])
def list_expenses(db: Session = Depends(get_db)):
    """Return every stored financial record."""

    try:
        return ExpenseService.list_expenses(db)
    except SQLAlchemyError as exc:
        LOGGER.exception("Failed to fetch expenses")
        return _store_failure("Failed to fetch expenses", exc)


@router.post("/expenses", response_model=schemas.ExpenseRead, status_code=status.HTTP_201_CREATED)
def create_expense(expense_in: schemas.ExpenseCreate, db: Session = Depends(get_db)):
    try:
        return ExpenseService.create_expense(db, expense_in)
    except SQLAlchemyError as exc:
        LOGGER.exception("Failed to add expense")
        return _store_failure("Failed to add expense", exc)


@router.put("/expenses/{expense_id}", response_model=schemas.ExpenseRead)
def update_expense(
    expense_id: str,
    expense_in: schemas.ExpenseUpdate,
    db: Session = Depends(get_db),
):
    try:
        expense = ExpenseService.update_expense(db, expense_id, expense_in)
    except InvalidExpenseIdError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        LOGGER.exception("Failed to update expense %s", expense_id)
        return _store_failure("Failed to update expense", exc)
    if expense is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_EXPENSE_NOT_FOUND)
    return expense


@router.delete("/expenses/{expense_id}", response_model=schemas.MessageResponse)
def delete_expense(expense_id: str, db: Session = Depends(get_db)):
    LOGGER.info("Received delete request for expense %s", expense_id)
    try:
        deleted = ExpenseService.delete_expense(db, expense_id)
    except InvalidExpenseIdError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        LOGGER.exception("Error deleting expense %s", expense_id)
        return _store_failure("Failed to delete expense", exc)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_EXPENSE_NOT_FOUND)
    return schemas.MessageResponse(message="Expense deleted successfully")


@router.get("/expenses/summary", response_model=schemas.ExpenseTotals)
def get_summary(db: Session = Depends(get_db)):
    """Return income and expense totals across every record."""

    try:
        totals = ExpenseService.summary(db)
    except SQLAlchemyError as exc:
        LOGGER.exception("Failed to calculate summary")
        return _store_failure("Failed to calculate summary", exc)
    return schemas.ExpenseTotals(
        total_income=totals.total_income,
        total_expenses=totals.total_expenses,
    )


@router.get("/expenses/summary/weekly", response_model=schemas.WeeklySummary)
def get_weekly_summary(
    as_of: Optional[date] = Query(None, description="Last day of the seven day window, defaults to today"),
    db: Session = Depends(get_db),
):
    try:
        weekly = ExpenseService.weekly_summary(db, _resolve_as_of(as_of))
    except SQLAlchemyError as exc:
        LOGGER.exception("Error fetching weekly summary")
        return _store_failure("Failed to fetch weekly summary", exc)
    return schemas.WeeklySummary(
        total_income=weekly.total_income,
        total_expenses=weekly.total_expenses,
        from_label=weekly.from_label,
        to_label=weekly.to_label,
    )


@router.get("/expenses/summary/weekly/chart", response_model=List[schemas.DailyChartPoint])
def get_weekly_chart_data(
    as_of: Optional[date] = Query(None, description="Last day of the seven day window, defaults to today"),
    db: Session = Depends(get_db),
):
    """Return per-day totals for the chart, one entry per day with records."""

    try:
        series = ExpenseService.weekly_chart(db, _resolve_as_of(as_of))
    except SQLAlchemyError as exc:
        LOGGER.exception("Error in weekly chart data")
        return _store_failure("Error fetching weekly chart data", exc)
    return [
        schemas.DailyChartPoint(
            day=point.day,
            total_income=point.total_income,
            total_expense=point.total_expense,
        )
        for point in series
    ]


@router.get(
    "/balance",
    response_model=schemas.BalanceSummary,
    responses={status.HTTP_404_NOT_FOUND: {"model": schemas.MessageResponse}},
)
def get_balance(db: Session = Depends(get_db)):
    try:
        balance = ExpenseService.balance(db)
    except NoIncomeDataError as exc:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": str(exc)})
    except SQLAlchemyError as exc:
        LOGGER.exception("Error calculating balance")
        return _store_failure("Failed to calculate balance", exc)
    return schemas.BalanceSummary(
        total_income=balance.total_income,
        total_expenses=balance.total_expenses,
        balance=balance.balance,
    )
