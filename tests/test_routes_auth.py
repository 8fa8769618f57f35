"""
Login page, auth API and logout.
"""

import pytest

from app import config
from app.services.session import decode_record


STORED_USERS = [
    {"id": "inf-1", "name": "Aiko", "email": "aiko@example.com", "role": "influencer", "password": "pw-1"},
]


@pytest.fixture
def users(fake_data_service):
    fake_data_service.users = [dict(u) for u in STORED_USERS]
    return fake_data_service


@pytest.fixture
def builtin_admin(monkeypatch):
    monkeypatch.setattr(config, "ADMIN_LOGIN_ID", "team")
    monkeypatch.setattr(config, "ADMIN_PASSWORD", "secret")


def session_cookie(client):
    return decode_record(client.cookies.get(config.AUTH_COOKIE_NAME))


class TestLoginApi:

    def test_missing_fields(self, client):
        response = client.post("/api/auth/login", json={"id": "inf-1"})
        assert response.status_code == 400
        assert response.json() == {"error": "ID and password are required"}

    def test_stored_user(self, client, users):
        response = client.post("/api/auth/login", json={"id": "inf-1", "password": "pw-1"})

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "inf-1"
        assert body["role"] == "influencer"
        assert "password" not in body
        assert session_cookie(client)["id"] == "inf-1"

    def test_invalid_credentials(self, client, users):
        response = client.post("/api/auth/login", json={"id": "inf-1", "password": "nope"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}
        assert client.cookies.get(config.AUTH_COOKIE_NAME) is None

    def test_builtin_admin(self, client, users, builtin_admin):
        response = client.post("/api/auth/login", json={"id": "team", "password": "secret"})

        assert response.status_code == 200
        assert response.json()["role"] == "admin"
        assert users.calls == []

    def test_builtin_admin_disabled_without_config(self, client, users, monkeypatch):
        monkeypatch.setattr(config, "ADMIN_LOGIN_ID", "")
        monkeypatch.setattr(config, "ADMIN_PASSWORD", "")
        response = client.post("/api/auth/login", json={"id": "team", "password": "secret"})
        assert response.status_code == 401

    def test_data_service_failure(self, client, users):
        users.error = RuntimeError("sheet down")
        response = client.post("/api/auth/login", json={"id": "inf-1", "password": "pw-1"})
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_malformed_body(self, client, users):
        response = client.post(
            "/api/auth/login",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert users.calls == []

    def test_non_string_id_is_rejected_as_credentials(self, client, users):
        response = client.post("/api/auth/login", json={"id": 123, "password": "x"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}
        assert users.calls == ["authenticate_user"]

    def test_non_object_body_is_missing_fields(self, client, users):
        response = client.post("/api/auth/login", json=["inf-1", "pw-1"])
        assert response.status_code == 400

    def test_logout_clears_cookie(self, client, users):
        client.post("/api/auth/login", json={"id": "inf-1", "password": "pw-1"})

        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert client.cookies.get(config.AUTH_COOKIE_NAME) is None


class TestLoginPage:

    def test_form_is_rendered(self, client):
        response = client.get("/login")
        assert response.status_code == 200
        assert 'name="id"' in response.text
        assert 'name="password"' in response.text

    def test_successful_login_goes_to_dashboard(self, client, users):
        response = client.post("/login", data={"id": "inf-1", "password": "pw-1"}, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard"
        assert session_cookie(client)["role"] == "influencer"

    def test_failed_login_shows_message(self, client, users):
        response = client.post("/login", data={"id": "inf-1", "password": "wrong"})

        assert response.status_code == 401
        assert "IDまたはパスワードが正しくありません。" in response.text
        assert 'value="inf-1"' in response.text

    def test_full_flow_lands_on_role_dashboard(self, client, users):
        response = client.post("/login", data={"id": "inf-1", "password": "pw-1"})

        assert response.status_code == 200
        assert str(response.url).endswith("/dashboard/influencer")

    def test_logout_page(self, client, users):
        client.post("/login", data={"id": "inf-1", "password": "pw-1"}, follow_redirects=False)

        response = client.get("/logout", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/login"
        assert client.cookies.get(config.AUTH_COOKIE_NAME) is None
