# tests/api/test_ledger.py
from fastapi import status


def test_record_donation(client):
    response = client.post("/api/ledger/donations", json={"amount": 75, "donor_email": "sam@example.com"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["amount"] == 75
    assert data["id"]


def test_record_donation_rejects_non_positive(client):
    response = client.post("/api/ledger/donations", json={"amount": 0})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_record_expense(client):
    response = client.post(
        "/api/ledger/expenses",
        json={"amount": 20, "description": "Printing", "project": "Clean Water"}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["category"] == "general"
    assert [e["id"] for e in client.get("/api/ledger/expenses").json()] == [data["id"]]


def test_delete_expense(client, sample_ledger):
    _, expense = sample_ledger
    response = client.delete(f"/api/ledger/expenses/{expense.id}")

    assert response.status_code == status.HTTP_200_OK
    assert client.get("/api/ledger/expenses").json() == []


def test_delete_missing_expense(client):
    response = client.delete("/api/ledger/expenses/missing")
    assert response.status_code == status.HTTP_404_NOT_FOUND
