from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from backend.app import models
from backend.app.services import ExpenseService


def _payload(**overrides) -> dict:
    payload = {
        "name": "Tractor diesel",
        "category": "Transport",
        "amount": 75.5,
        "date": "2026-10-18T08:15:00",
        "paymentMethod": "Bank Transfer",
        "status": "Paid",
        "description": "Trip to the co-op",
    }
    payload.update(overrides)
    return payload


def test_create_expense_returns_created_record(client, db_session):
    response = client.post("/api/expenses", json=_payload())

    assert response.status_code == 201
    body = response.json()
    assert uuid.UUID(body["id"])
    assert body["name"] == "Tractor diesel"
    assert body["category"] == "Transport"
    assert body["amount"] == 75.5
    assert body["paymentMethod"] == "Bank Transfer"
    assert body["status"] == "Paid"
    assert body["description"] == "Trip to the co-op"

    stored = db_session.query(models.Expense).filter(models.Expense.id == body["id"]).one()
    assert stored.amount == Decimal("75.50")
    assert stored.payment_method == models.PaymentMethod.BANK_TRANSFER


def test_created_expense_reads_back_field_for_field(client):
    created = client.post("/api/expenses", json=_payload()).json()

    listed = client.get("/api/expenses").json()

    assert listed == [created]
    assert listed[0]["date"].startswith("2026-10-18T08:15:00")


def test_create_expense_accepts_legacy_name_field_and_defaults_description(client):
    payload = _payload()
    payload.pop("name")
    payload.pop("description")
    payload["expenseName"] = "Seasonal pickers"
    payload["category"] = "Labor"

    response = client.post("/api/expenses", json=payload)

    assert response.status_code == 201
    assert response.json()["name"] == "Seasonal pickers"
    assert response.json()["description"] == ""


def test_create_expense_accepts_zero_and_negative_amounts(client):
    assert client.post("/api/expenses", json=_payload(amount=0)).status_code == 201
    assert client.post("/api/expenses", json=_payload(amount=-12)).status_code == 201


def test_create_expense_rejects_amount_with_more_than_two_decimals(client, db_session):
    response = client.post("/api/expenses", json=_payload(amount=10.125))

    assert response.status_code == 400
    assert response.json()["error"] == "All required fields must be filled!"
    assert db_session.query(models.Expense).count() == 0


def test_two_decimal_amount_is_kept_exactly(client):
    created = client.post("/api/expenses", json=_payload(amount=10.12))

    assert created.status_code == 201
    assert created.json()["amount"] == 10.12
    assert client.get("/api/expenses").json()[0]["amount"] == 10.12
    assert client.get("/api/expenses/summary").json()["totalExpenses"] == 10.12


def test_create_expense_rejects_missing_required_fields(client, db_session):
    payload = _payload()
    payload.pop("status")

    response = client.post("/api/expenses", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "All required fields must be filled!"
    assert body["details"]
    assert db_session.query(models.Expense).count() == 0


def test_create_expense_rejects_unknown_category(client):
    response = client.post("/api/expenses", json=_payload(category="Seeds"))

    assert response.status_code == 400


def test_update_expense_overwrites_present_fields(client, make_expense):
    expense = make_expense(name="Urea", amount="100")

    response = client.put(
        f"/api/expenses/{expense.id}",
        json={"amount": 130, "status": "Pending", "description": None},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == expense.id
    assert body["amount"] == 130
    assert body["status"] == "Pending"
    assert body["name"] == "Urea"
    assert body["category"] == "Fertilizers"
    assert body["description"] == ""


def test_update_rejects_null_for_required_field(client, db_session, make_expense):
    expense = make_expense(status="Paid")

    response = client.put(f"/api/expenses/{expense.id}", json={"status": None})

    assert response.status_code == 400
    db_session.expire_all()
    assert db_session.get(models.Expense, expense.id).status == "Paid"


def test_update_rejects_amount_with_more_than_two_decimals(client, db_session, make_expense):
    expense = make_expense(amount="100")

    response = client.put(f"/api/expenses/{expense.id}", json={"amount": 1.005})

    assert response.status_code == 400
    db_session.expire_all()
    assert db_session.get(models.Expense, expense.id).amount == Decimal("100")


def test_update_unknown_expense_returns_not_found(client, db_session):
    response = client.put(f"/api/expenses/{uuid.uuid4()}", json=_payload())

    assert response.status_code == 404
    assert response.json() == {"message": "Expense not found"}
    assert db_session.query(models.Expense).count() == 0


def test_update_with_malformed_id_returns_bad_request(client):
    response = client.put("/api/expenses/not-an-id", json={"amount": 1})

    assert response.status_code == 400
    assert response.json() == {"message": "Invalid expense ID"}


def test_delete_expense_removes_record(client, db_session, make_expense):
    expense = make_expense()

    response = client.delete(f"/api/expenses/{expense.id}")

    assert response.status_code == 200
    assert response.json() == {"message": "Expense deleted successfully"}
    assert db_session.query(models.Expense).count() == 0


def test_delete_unknown_expense_returns_not_found(client):
    response = client.delete(f"/api/expenses/{uuid.uuid4()}")

    assert response.status_code == 404


def test_delete_with_malformed_id_returns_bad_request(client):
    response = client.delete("/api/expenses/12345")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid expense ID"


def test_store_failure_is_reported_with_details(client, monkeypatch):
    def broken_list(db):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(ExpenseService, "list_expenses", staticmethod(broken_list))

    response = client.get("/api/expenses")

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to fetch expenses"
    assert "database is locked" in body["details"]
