"""Business logic for recorded income figures."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..revenue import revenue_from_raw
from . import summaries


class IncomeService:
    """Read and record total revenue figures."""

    @staticmethod
    def list_income(db: Session) -> List[models.IncomeFigure]:
        return db.query(models.IncomeFigure).order_by(models.IncomeFigure.created_at.asc()).all()

    @staticmethod
    def create_income(db: Session, data: schemas.IncomeCreate) -> models.IncomeFigure:
        figure = models.IncomeFigure(total_revenue=revenue_from_raw(data.total_revenue))
        db.add(figure)
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.refresh(figure)
        return figure

    @staticmethod
    def total_income(db: Session) -> Decimal:
        return summaries.compute_total_income(IncomeService.list_income(db))
