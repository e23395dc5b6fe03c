"""SQLAlchemy model definitions for farm financial records."""

from __future__ import annotations

import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, Index, Numeric, String, Text

from ..database import Base
from ..db_types import GUID


class ExpenseCategory(str, enum.Enum):
    """Categories a financial record can be filed under.

    ``Income`` turns the record into a credit for every aggregate; all other
    categories are debits.
    """

    FERTILIZERS = "Fertilizers"
    LABOR = "Labor"
    TRANSPORT = "Transport"
    OTHER = "Other"
    INCOME = "Income"


class PaymentMethod(str, enum.Enum):
    """Supported payment methods."""

    CASH = "Cash"
    BANK_TRANSFER = "Bank Transfer"
    CREDIT_CARD = "Credit Card"
    OTHER = "Other"


EXPENSE_CATEGORY_ENUM = Enum(
    ExpenseCategory,
    name="expense_category_enum",
    values_callable=lambda enum_cls: [member.value for member in enum_cls],
    native_enum=False,
    validate_strings=True,
)

PAYMENT_METHOD_ENUM = Enum(
    PaymentMethod,
    name="expense_payment_method_enum",
    values_callable=lambda enum_cls: [member.value for member in enum_cls],
    native_enum=False,
    validate_strings=True,
)


class Expense(Base):
    """A single expense, or an income-tagged transaction, tracked by the farm."""

    __tablename__ = "expenses"

    id = Column("expense_id", GUID(), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    category = Column(EXPENSE_CATEGORY_ENUM, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(DateTime(), nullable=False)
    payment_method = Column(PAYMENT_METHOD_ENUM, nullable=False)
    status = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="", server_default="")


Index("expenses_date_idx", Expense.date)
