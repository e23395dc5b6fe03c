"""FastAPI application package for the farm ledger backend."""

from __future__ import annotations


def get_app():
    """Return the FastAPI application without importing it eagerly.

    Alembic imports this package to reach the models, so the app and its
    routers are only loaded on demand.
    """

    from .main import app as fastapi_app

    return fastapi_app


__all__ = ["get_app"]
