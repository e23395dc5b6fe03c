"""Expose SQLAlchemy models for convenient imports."""

from .expense import Expense, ExpenseCategory, PaymentMethod
from .income import IncomeFigure

__all__ = [
    "Expense",
    "ExpenseCategory",
    "IncomeFigure",
    "PaymentMethod",
]
