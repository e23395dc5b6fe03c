"""Expose Pydantic schemas for convenient imports."""

from .common import ErrorResponse, MessageResponse, Money, RecordAmount
from .expense import ExpenseBase, ExpenseCreate, ExpenseRead, ExpenseUpdate
from .income import IncomeCreate, IncomeRead
from .summary import (
    BalanceSummary,
    DailyChartPoint,
    ExpenseTotals,
    TotalIncomeResponse,
    WeeklySummary,
)

__all__ = [
    "BalanceSummary",
    "DailyChartPoint",
    "ErrorResponse",
    "ExpenseBase",
    "ExpenseCreate",
    "ExpenseRead",
    "ExpenseTotals",
    "ExpenseUpdate",
    "IncomeCreate",
    "IncomeRead",
    "MessageResponse",
    "Money",
    "RecordAmount",
    "TotalIncomeResponse",
    "WeeklySummary",
]
