"""Custom SQLAlchemy column types for multi-database compatibility."""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.dialects import postgresql
from sqlalchemy.types import CHAR, JSON, TypeDecorator

from .revenue import revenue_from_raw, revenue_to_raw


def is_valid_guid(value: Any) -> bool:
    """Return ``True`` when ``value`` parses as a UUID."""

    if isinstance(value, uuid.UUID):
        return True
    try:
        uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return False
    return True


class GUID(TypeDecorator):
    """Platform-independent GUID/UUID type.

    Stores UUID values as ``UUID`` in PostgreSQL and as 36-character strings
    elsewhere. Values are normalised to strings when read.
    """

    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.UUID(as_uuid=True))
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return value
        parsed = value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
        if dialect.name == "postgresql":
            return parsed
        return str(parsed)

    def process_result_value(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return value
        return str(value)


class RevenueValue(TypeDecorator):
    """Stores a revenue figure as a JSON scalar.

    Numbers and currency formatted strings keep their original shape in the
    database and are exposed to Python as
    :class:`~backend.app.revenue.NumericRevenue` or
    :class:`~backend.app.revenue.TextualRevenue`.
    """

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value: Any, dialect):  # type: ignore[override]
        return revenue_to_raw(revenue_from_raw(value))

    def process_result_value(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return None
        try:
            return revenue_from_raw(value)
        except (TypeError, ValueError):
            # Rows written outside the API may hold arbitrary JSON.
            return None
