# tests/api/test_workspaces.py
from fastapi import status

from transparency.models import Workspace


def test_create_workspace(client):
    response = client.post(
        "/api/workspaces",
        json={"name": "Umbrella Corp Staff", "total_received": "2000", "note": "Matched giving"}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "Umbrella Corp Staff"
    assert data["total_received"] == 2000
    assert data["expenses"] == []
    assert data["total_spent"] == 0
    assert data["remaining"] == 2000


def test_create_workspace_requires_name(client):
    response = client.post("/api/workspaces", json={"total_received": 10})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_get_workspace_balance(client, sample_workspace):
    response = client.get(f"/api/workspaces/{sample_workspace.id}")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total_spent"] == 450
    assert data["remaining"] == 550


def test_update_workspace_keeps_expenses(client, sample_workspace):
    response = client.put(
        f"/api/workspaces/{sample_workspace.id}",
        json={"name": "Globex Employees", "total_received": 1200}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total_received"] == 1200
    assert len(data["expenses"]) == 2
    assert data["remaining"] == 750


def test_add_expense(client, sample_workspace):
    response = client.post(
        f"/api/workspaces/{sample_workspace.id}/expenses",
        json={"description": "Seeds", "amount": "50"}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert len(data["expenses"]) == 3
    added = data["expenses"][-1]
    assert added["description"] == "Seeds"
    assert added["amount"] == 50
    assert added["id"].startswith("exp_")
    assert added["date"]
    assert data["total_spent"] == 500


def test_add_expense_requires_description(client, sample_workspace):
    response = client.post(f"/api/workspaces/{sample_workspace.id}/expenses", json={"amount": 5})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_expense(client, sample_workspace):
    response = client.put(
        f"/api/workspaces/{sample_workspace.id}/expenses/exp_2",
        json={"description": "Transport and fuel", "amount": 175, "date": "2024-05-12"}
    )

    assert response.status_code == status.HTTP_200_OK
    expenses = {e["id"]: e for e in response.json()["expenses"]}
    assert expenses["exp_2"]["description"] == "Transport and fuel"
    assert expenses["exp_2"]["amount"] == 175
    assert expenses["exp_1"]["amount"] == 300


def test_delete_expense(client, sample_workspace):
    response = client.delete(f"/api/workspaces/{sample_workspace.id}/expenses/exp_1")

    assert response.status_code == status.HTTP_200_OK
    assert [e["id"] for e in response.json()["expenses"]] == ["exp_2"]


def test_delete_missing_expense(client, sample_workspace):
    response = client.delete(f"/api/workspaces/{sample_workspace.id}/expenses/nope")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_workspace_removes_expenses(client, db_session, sample_workspace):
    """Expenses are embedded, so nothing is left behind"""
    workspace_id = sample_workspace.id
    response = client.delete(f"/api/workspaces/{workspace_id}")

    assert response.status_code == status.HTTP_200_OK
    assert db_session.query(Workspace).filter(Workspace.id == workspace_id).first() is None
    assert client.get(f"/api/workspaces/{workspace_id}").status_code == status.HTTP_404_NOT_FOUND
