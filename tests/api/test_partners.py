# tests/api/test_partners.py
from fastapi import status


def test_create_partner(client):
    response = client.post(
        "/api/partners",
        json={"name": "Initech", "website": "https://initech.com", "amount": "250.5", "project": "Clean Water"}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "Initech"
    assert data["amount"] == 250.5
    assert data["date"]
    assert data["created_at"] is not None


def test_create_partner_requires_name(client):
    response = client.post("/api/partners", json={"name": "  ", "amount": 10})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Partner name is required"


def test_list_partners(client, sample_partner):
    response = client.get("/api/partners")

    assert response.status_code == status.HTTP_200_OK
    assert [p["id"] for p in response.json()] == [sample_partner.id]


def test_update_partner(client, sample_partner):
    response = client.put(
        f"/api/partners/{sample_partner.id}",
        json={"name": "Acme Foundation", "amount": 0, "note": "In-kind support"}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["amount"] == 0
    assert data["note"] == "In-kind support"


def test_update_missing_partner(client):
    response = client.put("/api/partners/missing", json={"name": "Ghost"})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_partner(client, sample_partner):
    response = client.delete(f"/api/partners/{sample_partner.id}")

    assert response.status_code == status.HTTP_200_OK
    assert client.get("/api/partners").json() == []


def test_delete_missing_partner(client):
    response = client.delete("/api/partners/missing")
    assert response.status_code == status.HTTP_404_NOT_FOUND
