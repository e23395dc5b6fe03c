from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, field_validator

from ..revenue import revenue_to_raw

RawRevenue = Union[StrictInt, StrictFloat, StrictStr]
MAX_NUMERIC_REVENUE = 10**15


class IncomeCreate(BaseModel):
    """Schema used to record a total revenue figure."""

    total_revenue: Optional[RawRevenue] = Field(
        default=None,
        validation_alias=AliasChoices("totalRevenue", "total_revenue"),
        description="Number or currency formatted text such as 'Rs. 1,000.50'",
    )

    @field_validator("total_revenue")
    @classmethod
    def _bounded_number(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not (
            math.isfinite(value) and abs(value) < MAX_NUMERIC_REVENUE
        ):
            raise ValueError(f"totalRevenue must be a finite number below {MAX_NUMERIC_REVENUE:,}")
        return value


class IncomeRead(BaseModel):
    id: str
    total_revenue: Optional[RawRevenue] = Field(
        default=None,
        validation_alias=AliasChoices("total_revenue", "totalRevenue"),
        serialization_alias="totalRevenue",
    )
    created_at: datetime = Field(..., serialization_alias="createdAt")

    model_config = ConfigDict(from_attributes=True)

    @field_validator("total_revenue", mode="before")
    @classmethod
    def _unwrap_revenue(cls, value: Any) -> Any:
        if isinstance(value, (int, float, str)) or value is None:
            return value
        return revenue_to_raw(value)
