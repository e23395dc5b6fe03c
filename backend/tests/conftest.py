from __future__ import annotations

import os
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure the project root (which exposes the ``backend`` package) is on ``sys.path``
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# The lifespan would otherwise migrate the default on-disk database.
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "0")

from backend.app import models  # noqa: E402
from backend.app.database import Base, get_db  # noqa: E402
from backend.app.main import app  # noqa: E402

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture(scope="session", autouse=True)
def setup_database() -> Generator[None, None, None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            db_session.expire_all()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def make_expense(db_session: Session):
    def _make_expense(
        *,
        name: str = "Urea sacks",
        category: models.ExpenseCategory = models.ExpenseCategory.FERTILIZERS,
        amount: str = "100",
        date: datetime = datetime(2026, 10, 19, 9, 30),
        payment_method: models.PaymentMethod = models.PaymentMethod.CASH,
        status: str = "Paid",
        description: str = "",
    ) -> models.Expense:
        expense = models.Expense(
            name=name,
            category=category,
            amount=Decimal(amount),
            date=date,
            payment_method=payment_method,
            status=status,
            description=description,
        )
        db_session.add(expense)
        db_session.commit()
        return expense

    return _make_expense


@pytest.fixture
def make_income(db_session: Session):
    def _make_income(total_revenue) -> models.IncomeFigure:
        figure = models.IncomeFigure(total_revenue=total_revenue)
        db_session.add(figure)
        db_session.commit()
        return figure

    return _make_income
