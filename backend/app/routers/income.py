"""Router exposing recorded income figures."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..services import IncomeService

LOGGER = logging.getLogger(__name__)

router = APIRouter()


def _store_failure(error: str, exc: SQLAlchemyError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=schemas.ErrorResponse(error=error, details=str(exc)).model_dump(),
    )


@router.get("", response_model=List[schemas.IncomeRead])
def list_income(db: Session = Depends(get_db)):
    try:
        return IncomeService.list_income(db)
    except SQLAlchemyError as exc:
        LOGGER.exception("Failed to fetch income figures")
        return _store_failure("Failed to fetch income", exc)


@router.post("", response_model=schemas.IncomeRead, status_code=status.HTTP_201_CREATED)
def create_income(income_in: schemas.IncomeCreate, db: Session = Depends(get_db)):
    try:
        return IncomeService.create_income(db, income_in)
    except SQLAlchemyError as exc:
        LOGGER.exception("Failed to record income figure")
        return _store_failure("Failed to add income", exc)


@router.get("/total", response_model=schemas.TotalIncomeResponse)
def get_total_income(db: Session = Depends(get_db)):
    """Sum the numeric income figures; text figures are not counted."""

    try:
        total = IncomeService.total_income(db)
    except SQLAlchemyError as exc:
        LOGGER.exception("Error calculating total income")
        return _store_failure("Failed to calculate total income", exc)
    return schemas.TotalIncomeResponse(total_income=total)
