"""Mini README: Tests for the FastAPI expense page.

These tests drive the application through ``TestClient`` against the
recording memory store, covering the initial load, form submission, row
mode changes, commits, deletes and store outages.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from expensetracker.configuration import ExpenseTrackerSettings
from expensetracker.interface import create_application


@pytest.fixture
def client(store):
    app = create_application(gateway=store, settings=ExpenseTrackerSettings())
    with TestClient(app) as test_client:
        yield test_client


def _ids(payload):
    return [expense["id"] for expense in payload["expenses"]]


def test_startup_loads_expenses(client, store) -> None:
    """The collection is read once before the first request is served."""

    assert store.operations() == ["list"]
    payload = client.get("/state").json()
    assert _ids(payload) == ["groceries", "rent"]
    assert payload["busy"] is False
    assert payload["last_error"] is None


def test_dashboard_renders_rows_and_pages(client) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert "Groceries" in response.text
    assert "Rent" in response.text

    response = client.get("/?page=5&page_size=7")
    assert response.status_code == 200
    assert "page 1 of 1" in response.text


def test_submit_expense_creates_and_returns_snapshot(client, store) -> None:
    response = client.post(
        "/expenses", data={"date": "2024-01-05", "description": "Coffee", "amount": "4.50"}
    )
    assert response.status_code == 201
    payload = response.json()
    assert len(payload["expenses"]) == 3
    coffee = [expense for expense in payload["expenses"] if expense["description"] == "Coffee"]
    assert coffee[0]["date"] == "2024-01-05"
    assert coffee[0]["amount"] == "4.50"
    assert store.operations()[-2:] == ["create", "list"]


def test_submit_expense_reports_invalid_fields(client, store) -> None:
    """Empty fields are returned as markers and nothing is written."""

    response = client.post("/expenses", data={"date": "2024-01-05", "description": ""})
    assert response.status_code == 422
    assert response.json() == {"invalid_fields": ["description", "amount"]}
    assert "create" not in store.operations()

    page = client.get("/")
    assert page.text.count('class="missing"') == 2


def test_row_mode_endpoints(client) -> None:
    response = client.post("/expenses/rent/edit")
    assert response.json()["row_modes"]["rent"] == {"mode": "edit"}
    assert 'class="editing"' in client.get("/").text

    response = client.post("/expenses/rent/cancel")
    assert response.json()["row_modes"]["rent"] == {"mode": "view", "ignore_modifications": True}

    assert client.post("/expenses/ghost/edit").status_code == 404
    assert client.post("/expenses/rent/explode").status_code == 404


def test_commit_row_persists_edit(client, store) -> None:
    client.post("/expenses/groceries/edit")
    client.post("/expenses/groceries/save")
    response = client.put(
        "/expenses/groceries",
        json={"date": "2024-01-03", "description": "Lunch", "amount": "12.50"},
    )
    assert response.status_code == 200
    groceries = response.json()["expenses"][0]
    assert groceries == {"id": "groceries", "date": "2024-01-03", "description": "Lunch", "amount": "12.50"}
    assert store.operations()[-2:] == ["update", "list"]


def test_commit_row_rejects_bad_date(client) -> None:
    response = client.put(
        "/expenses/groceries", json={"date": "soon", "description": "Lunch", "amount": "1"}
    )
    assert response.status_code == 422


def test_delete_expense_route(client) -> None:
    response = client.delete("/expenses/rent")
    assert response.status_code == 200
    assert _ids(response.json()) == ["groceries"]
    assert _ids(client.delete("/expenses/rent").json()) == ["groceries"]


def test_store_outage_maps_to_service_unavailable(client, store) -> None:
    """Store failures return 503 and leave the last snapshot visible."""

    store.fail_on.update({"remove", "list"})
    response = client.delete("/expenses/rent")
    assert response.status_code == 503
    assert "simulated outage" in response.json()["detail"]

    assert client.post("/refresh").status_code == 503
    payload = client.get("/state").json()
    assert _ids(payload) == ["groceries", "rent"]
    assert payload["busy"] is False
    assert payload["last_error"]


def test_startup_survives_store_outage(store) -> None:
    store.fail_on.add("list")
    app = create_application(gateway=store, settings=ExpenseTrackerSettings())
    with TestClient(app) as client:
        payload = client.get("/state").json()
    assert payload["expenses"] == []
    assert "simulated outage" in payload["last_error"]


def test_commit_row_rejects_non_numeric_amount(client, store) -> None:
    """Amounts that are not numbers are refused before the store is called."""

    response = client.put(
        "/expenses/groceries",
        json={"date": "2024-01-03", "description": "Lunch", "amount": "twelve"},
    )
    assert response.status_code == 422
    assert "twelve" in response.json()["detail"]
    assert "update" not in store.operations()


def test_commit_row_keeps_amount_text_as_typed(client, store) -> None:
    """The grid sends amounts as text; bare JSON numbers would lose trailing zeros."""

    response = client.put(
        "/expenses/groceries",
        json={"date": "2024-01-03", "description": "Lunch", "amount": 12.50},
    )
    assert response.status_code == 422
    assert "update" not in store.operations()


def test_submit_expense_flags_non_numeric_amount(client, store) -> None:
    response = client.post(
        "/expenses", data={"date": "2024-01-05", "description": "Coffee", "amount": "four fifty"}
    )
    assert response.status_code == 422
    assert response.json() == {"invalid_fields": ["amount"]}
    assert "create" not in store.operations()


def test_dashboard_script_reports_every_failed_request(client) -> None:
    """The page shows the detail of any non-2xx reply instead of reloading."""

    page = client.get("/").text
    assert "if (!response.ok && !(payload && payload.invalid_fields))" in page
    assert "if (saved === null) return;" in page
