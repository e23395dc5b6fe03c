"""SQLAlchemy model for externally recorded income figures."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, func

from ..database import Base
from ..db_types import GUID, RevenueValue


class IncomeFigure(Base):
    """A total revenue entry maintained outside the expense records."""

    __tablename__ = "local_incomes"

    id = Column("income_id", GUID(), primary_key=True, default=uuid.uuid4)
    total_revenue = Column(RevenueValue(), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
