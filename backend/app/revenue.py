"""Revenue values recorded on income figures.

Income figures arrive either as plain numbers or as currency formatted text
such as ``"Rs. 1,000.50"``. Both shapes are kept as entered and represented
as a small tagged union so callers decide explicitly how text is treated.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Union


@dataclass(frozen=True)
class NumericRevenue:
    value: Decimal


@dataclass(frozen=True)
class TextualRevenue:
    text: str


Revenue = Union[NumericRevenue, TextualRevenue]


def revenue_from_raw(raw: Any) -> Revenue | None:
    """Wrap a JSON scalar (number or string) into a :data:`Revenue` value."""

    if raw is None:
        return None
    if isinstance(raw, (NumericRevenue, TextualRevenue)):
        return raw
    if isinstance(raw, bool):
        raise TypeError("Revenue cannot be a boolean")
    if isinstance(raw, str):
        return TextualRevenue(raw)
    if isinstance(raw, (int, float, Decimal)):
        try:
            return NumericRevenue(Decimal(str(raw)))
        except InvalidOperation as exc:
            raise ValueError(f"Invalid revenue amount: {raw!r}") from exc
    raise TypeError(f"Unsupported revenue value: {type(raw).__name__}")


def revenue_to_raw(revenue: Revenue | None) -> float | str | None:
    """Return the JSON scalar stored for ``revenue``."""

    if revenue is None:
        return None
    if isinstance(revenue, TextualRevenue):
        return revenue.text
    return float(revenue.value)
