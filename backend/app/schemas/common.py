"""Shared schema definitions."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, Field, PlainSerializer

Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
"""Monetary value kept as ``Decimal`` in Python and emitted as a JSON number."""

RecordAmount = Annotated[
    Decimal,
    Field(max_digits=14, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]
"""Amount of a financial record: stored exactly, so at most two decimal places."""


class MessageResponse(BaseModel):
    """Plain confirmation or not-found payload."""

    message: str


class ErrorResponse(BaseModel):
    """Body returned when a request fails validation or the store fails."""

    error: str
    details: Any = None
