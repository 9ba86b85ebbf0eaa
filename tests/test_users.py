from conftest import auth_headers, make_user

from lppm.core.roles import Role


def login(client, email, password="secret123"):
    return client.post("/api/users/login", json={"email": email, "password": password})


def test_login_returns_token_and_user(client, superadmin_id):
    response = login(client, "superadmin@lppm.ac.id")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Logged in successfully."
    assert body["data"] == {
        "id": superadmin_id,
        "name": "Superadmin User",
        "email": "superadmin@lppm.ac.id",
        "role": "superadmin",
    }
    assert body["token"]


def test_login_with_wrong_password_is_rejected(client, superadmin_id):
    response = login(client, "superadmin@lppm.ac.id", "wrong-password")
    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "message": "The provided credentials are incorrect.",
    }


def test_login_with_malformed_email_is_422(client):
    response = client.post("/api/users/login", json={"email": "not-an-email", "password": "x"})
    assert response.status_code == 422
    assert "email" in response.json()["errors"]


def test_missing_token_is_401(client):
    response = client.get("/api/users/current")
    assert response.status_code == 401
    assert response.json()["success"] is False
    assert response.headers["www-authenticate"] == "Bearer"


def test_garbage_token_is_401(client):
    response = client.get("/api/users/current", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401


def test_logout_revokes_token(client, superadmin_id):
    token = login(client, "superadmin@lppm.ac.id").json()["token"]
    headers = {"Authorization": f"Bearer {token}"}

    assert client.get("/api/users/current", headers=headers).status_code == 200
    response = client.post("/api/users/logout", headers=headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully."
    assert client.get("/api/users/current", headers=headers).status_code == 401


def test_admin_cannot_manage_users(client, admin):
    response = client.get("/api/users", headers=admin)
    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Unauthorized"}


def test_register_and_list_users(client, superadmin):
    payload = {"name": "Operator", "email": "operator@lppm.ac.id", "password": "secret123", "role": "admin"}
    response = client.post("/api/users", json=payload, headers=superadmin)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["email"] == "operator@lppm.ac.id"
    assert data["role"] == "admin"
    assert "password" not in data
    assert "password_hash" not in data

    duplicate = client.post("/api/users", json=payload, headers=superadmin)
    assert duplicate.status_code == 422
    assert duplicate.json()["errors"] == {"email": ["The email has already been taken."]}

    listing = client.get("/api/users", headers=superadmin).json()
    assert listing["meta"]["total"] == 2
    assert listing["meta"]["per_page"] == 5


def test_users_are_paginated_by_five(client, superadmin):
    for index in range(6):
        make_user(Role.ADMIN, email=f"admin{index}@lppm.ac.id")

    first = client.get("/api/users", headers=superadmin).json()
    assert len(first["data"]) == 5
    assert first["meta"]["last_page"] == 2

    second = client.get("/api/users", params={"page": 2}, headers=superadmin).json()
    assert len(second["data"]) == 2
    assert second["meta"]["current_page"] == 2
    assert second["meta"]["from"] == 6


def test_register_validates_fields(client, superadmin):
    response = client.post(
        "/api/users",
        json={"name": "ab", "email": "x@lppm.ac.id", "password": "123", "role": "owner"},
        headers=superadmin,
    )
    assert response.status_code == 422
    errors = response.json()["errors"]
    assert set(errors) == {"name", "password", "role"}


def test_self_update_keeps_role_for_admin(client, admin_id, admin):
    response = client.patch(
        "/api/users/current",
        json={"name": "Renamed Admin", "email": "admin@lppm.ac.id", "password": "newsecret", "role": "superadmin"},
        headers=admin,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Renamed Admin"
    assert data["role"] == "admin"


def test_get_update_and_delete_user(client, superadmin):
    user_id = make_user(Role.ADMIN, email="staff@lppm.ac.id")

    response = client.get(f"/api/users/{user_id}", headers=superadmin)
    assert response.status_code == 200
    assert response.json()["data"]["email"] == "staff@lppm.ac.id"

    response = client.patch(
        f"/api/users/{user_id}",
        json={"name": "Staff Lead", "email": "staff@lppm.ac.id", "password": "secret123", "role": "superadmin"},
        headers=superadmin,
    )
    assert response.status_code == 200
    assert response.json()["data"]["role"] == "superadmin"

    response = client.delete(f"/api/users/{user_id}", headers=superadmin)
    assert response.status_code == 200
    assert response.json()["message"] == "User successfully deleted."

    response = client.get(f"/api/users/{user_id}", headers=superadmin)
    assert response.status_code == 404
    assert response.json()["message"] == "User not found."


def test_token_for_deleted_user_is_rejected(client):
    user_id = make_user(Role.ADMIN, email="gone@lppm.ac.id")
    headers = auth_headers(user_id, Role.ADMIN)
    superadmin_headers = auth_headers(make_user(Role.SUPERADMIN), Role.SUPERADMIN)

    client.delete(f"/api/users/{user_id}", headers=superadmin_headers)
    assert client.get("/api/users/current", headers=headers).status_code == 401
