import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient
from perkhub.main import app

client = TestClient(app)


def _auth_headers(name, email, password="P@ssw0rd-123"):
    response = client.post("/api/auth/register", json={
        "name": name,
        "email": email,
        "password": password,
    })
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def auth_headers(test_user_data):
    return _auth_headers(test_user_data["name"], test_user_data["email"], test_user_data["password"])


@pytest.fixture
def other_headers():
    return _auth_headers("Other Merchant", "other@example.com")


@pytest.fixture
def created_perk(test_perk_data, auth_headers, network_codes):
    response = client.post("/api/perks", json=test_perk_data, headers=auth_headers)
    assert response.status_code in network_codes["success"]
    return response.json()["perk"]


# CREATE PERK TESTS
def test_create_perk_success(test_perk_data, auth_headers):
    response = client.post("/api/perks", json=test_perk_data, headers=auth_headers)
    perk = response.json()["perk"]

    assert response.status_code == 201
    assert perk["title"] == test_perk_data["title"]
    assert perk["merchant"] == test_perk_data["merchant"]
    assert perk["category"] == test_perk_data["category"]
    assert perk["discount_percent"] == test_perk_data["discount_percent"]
    assert "created_at" in perk
    assert "updated_at" in perk


def test_create_perk_unauthorized(test_perk_data):
    response = client.post("/api/perks", json=test_perk_data)
    assert response.status_code == 401


def test_create_perk_invalid_data(auth_headers, network_codes):
    invalid_data = {
        "title": "",
        "merchant": "Casa Verde",
        "discount_percent": 150,
        "category": "groceries",
    }
    response = client.post("/api/perks", json=invalid_data, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["errors"]


def test_create_perk_duplicate_title(created_perk, test_perk_data, auth_headers):
    response = client.post("/api/perks", json=test_perk_data, headers=auth_headers)
    assert response.status_code == 409
    assert response.json()["detail"] == "Perk with this title already exists"


def test_same_title_allowed_for_other_creator(created_perk, test_perk_data, other_headers):
    response = client.post("/api/perks", json=test_perk_data, headers=other_headers)
    assert response.status_code == 201


# PUBLIC LISTING TESTS
def test_public_perks_lists_seeded_perk(created_perk):
    response = client.get("/api/perks/all")
    assert response.status_code == 200
    perks = response.json()["perks"]
    assert any(perk["id"] == created_perk["id"] for perk in perks)


def test_public_perks_newest_first(test_perk_data, auth_headers):
    for i in range(3):
        client.post("/api/perks", json=dict(test_perk_data, title=f"Perk {i}"), headers=auth_headers)

    titles = [perk["title"] for perk in client.get("/api/perks/all").json()["perks"]]
    assert titles == ["Perk 2", "Perk 1", "Perk 0"]


def test_public_perks_search_is_case_insensitive(created_perk):
    response = client.get("/api/perks/all", params={"search": "half PRICE"})
    assert [perk["id"] for perk in response.json()["perks"]] == [created_perk["id"]]

    response = client.get("/api/perks/all", params={"search": "pizza"})
    assert response.json()["perks"] == []


def test_public_perks_search_escapes_wildcards(created_perk):
    response = client.get("/api/perks/all", params={"search": "%"})
    assert response.json()["perks"] == []


def test_public_perks_merchant_filter(created_perk, test_perk_data, auth_headers):
    client.post(
        "/api/perks",
        json=dict(test_perk_data, title="Free Refills", merchant="Soda Shack"),
        headers=auth_headers,
    )

    response = client.get("/api/perks/all", params={"merchant": "Casa Verde"})
    assert [perk["merchant"] for perk in response.json()["perks"]] == ["Casa Verde"]

    response = client.get("/api/perks/all", params={"merchant": "All Merchants"})
    assert len(response.json()["perks"]) == 2


# OWN PERKS TESTS
def test_get_my_perks_only_returns_own(created_perk, test_perk_data, other_headers, auth_headers):
    client.post("/api/perks", json=dict(test_perk_data, title="Not Mine"), headers=other_headers)

    response = client.get("/api/perks", headers=auth_headers)
    assert response.status_code == 200
    assert [perk["id"] for perk in response.json()["perks"]] == [created_perk["id"]]


def test_get_my_perks_unauthorized():
    response = client.get("/api/perks")
    assert response.status_code == 401


# READ PERK TESTS
def test_get_perk_by_id(created_perk):
    response = client.get(f"/api/perks/{created_perk['id']}")
    assert response.status_code == 200
    assert response.json()["perk"] == created_perk


def test_get_perk_not_found():
    response = client.get("/api/perks/999999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Perk not found"


# UPDATE PERK TESTS
def test_update_perk(created_perk, auth_headers):
    update_data = {"title": "Updated Title", "discount_percent": 25}
    response = client.put(f"/api/perks/{created_perk['id']}", json=update_data, headers=auth_headers)
    perk = response.json()["perk"]

    assert response.status_code == 200
    assert perk["title"] == "Updated Title"
    assert perk["discount_percent"] == 25
    # Check that other fields remain unchanged
    assert perk["merchant"] == created_perk["merchant"]


def test_update_perk_not_owner(created_perk, other_headers):
    response = client.put(f"/api/perks/{created_perk['id']}", json={"title": "Hijacked"}, headers=other_headers)
    assert response.status_code == 403


def test_update_perk_not_found(auth_headers):
    response = client.put("/api/perks/999999", json={"title": "Nothing"}, headers=auth_headers)
    assert response.status_code == 404


def test_update_perk_invalid_data(created_perk, auth_headers):
    response = client.put(
        f"/api/perks/{created_perk['id']}",
        json={"discount_percent": -1},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_update_perk_duplicate_title(created_perk, test_perk_data, auth_headers):
    second = client.post("/api/perks", json=dict(test_perk_data, title="Second"), headers=auth_headers)
    response = client.put(
        f"/api/perks/{second.json()['perk']['id']}",
        json={"title": test_perk_data["title"]},
        headers=auth_headers,
    )
    assert response.status_code == 409


# DELETE PERK TESTS
def test_delete_perk(created_perk, auth_headers):
    response = client.delete(f"/api/perks/{created_perk['id']}", headers=auth_headers)
    assert response.status_code == 204

    # Verify perk is deleted
    response = client.get(f"/api/perks/{created_perk['id']}")
    assert response.status_code == 404


def test_delete_perk_not_owner(created_perk, other_headers):
    response = client.delete(f"/api/perks/{created_perk['id']}", headers=other_headers)
    assert response.status_code == 403


def test_delete_perk_not_found(auth_headers):
    response = client.delete("/api/perks/999999", headers=auth_headers)
    assert response.status_code == 404


def test_integrity_error_answers_conflict(created_perk, test_perk_data, auth_headers):
    # the unique constraint still holds when the pre-insert check is bypassed
    with patch("perkhub.routes.perks._title_taken", return_value=False):
        response = client.post("/api/perks", json=test_perk_data, headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["detail"] == "Resource already exists"

    # the failed transaction was rolled back
    response = client.get("/api/perks/all")
    assert response.status_code == 200
    assert [perk["id"] for perk in response.json()["perks"]] == [created_perk["id"]]
