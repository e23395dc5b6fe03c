from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from ..models.expense import ExpenseCategory, PaymentMethod
from .common import RecordAmount


def _coerce_record_date(value: Any) -> Any:
    """Accept plain dates and drop timezone information after converting to UTC."""

    if isinstance(value, str) and len(value) == 10:
        try:
            value = date.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ExpenseBase(BaseModel):
    name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("name", "expenseName"),
        description="Short label of the record",
    )
    category: ExpenseCategory = Field(..., description="Income marks the record as a credit")
    amount: RecordAmount = Field(
        ..., description="Monetary value with at most two decimals; zero and negative values are accepted"
    )
    date: datetime = Field(..., description="When the transaction happened")
    payment_method: PaymentMethod = Field(
        ...,
        validation_alias=AliasChoices("paymentMethod", "payment_method"),
        serialization_alias="paymentMethod",
    )
    status: str = Field(..., min_length=1)
    description: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> Any:
        return _coerce_record_date(value)

    @field_validator("description", mode="before")
    @classmethod
    def _default_description(cls, value: Any) -> Any:
        return "" if value is None else value


class ExpenseCreate(ExpenseBase):
    """Schema used to create new financial records."""

    pass


REQUIRED_UPDATE_FIELDS = frozenset({"name", "category", "amount", "date", "payment_method", "status"})


class ExpenseUpdate(BaseModel):
    """Fields present in the request overwrite the stored values."""

    name: Optional[str] = Field(
        default=None,
        min_length=1,
        validation_alias=AliasChoices("name", "expenseName"),
    )
    category: Optional[ExpenseCategory] = None
    amount: Optional[RecordAmount] = None
    date: Optional[datetime] = None
    payment_method: Optional[PaymentMethod] = Field(
        default=None,
        validation_alias=AliasChoices("paymentMethod", "payment_method"),
    )
    status: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> Any:
        return _coerce_record_date(value)

    @model_validator(mode="after")
    def _reject_cleared_required_fields(self) -> "ExpenseUpdate":
        cleared = sorted(
            field
            for field in self.model_fields_set & REQUIRED_UPDATE_FIELDS
            if getattr(self, field) is None
        )
        if cleared:
            raise ValueError(f"Required fields cannot be null: {', '.join(cleared)}")
        return self


class ExpenseRead(ExpenseBase):
    """Schema representing stored financial records."""

    id: str

    model_config = ConfigDict(from_attributes=True)
