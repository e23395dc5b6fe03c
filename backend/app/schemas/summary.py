"""Response models for the aggregate views over financial records."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .common import Money


class ExpenseTotals(BaseModel):
    total_income: Money = Field(..., serialization_alias="totalIncome")
    total_expenses: Money = Field(..., serialization_alias="totalExpenses")


class WeeklySummary(ExpenseTotals):
    """Totals restricted to the seven calendar days ending on ``to``."""

    from_label: str = Field(..., serialization_alias="from")
    to_label: str = Field(..., serialization_alias="to")


class DailyChartPoint(BaseModel):
    day: str = Field(..., description="Calendar day in YYYY-MM-DD format")
    total_income: Money = Field(..., serialization_alias="totalIncome")
    total_expense: Money = Field(..., serialization_alias="totalExpense")


class BalanceSummary(ExpenseTotals):
    """Recorded income against every expense record, rounded to cents."""

    balance: Money


class TotalIncomeResponse(BaseModel):
    total_income: Money = Field(..., serialization_alias="totalIncome")
