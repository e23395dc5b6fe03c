"""Routers package."""

from .expenses import router as expenses_router
from .income import router as income_router

__all__ = [
    "expenses_router",
    "income_router",
]
