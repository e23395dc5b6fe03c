"""Service layer encapsulating business logic for API routers."""

from .expenses import ExpenseService, InvalidExpenseIdError
from .income import IncomeService
from .summaries import NoIncomeDataError

__all__ = [
    "ExpenseService",
    "IncomeService",
    "InvalidExpenseIdError",
    "NoIncomeDataError",
]
