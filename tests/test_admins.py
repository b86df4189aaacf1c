# =============================================================================
# tests/test_admins.py - Admin Account Management Tests
# =============================================================================

import pytest
from fastapi import HTTPException

from app.modules.admins.service import AdminService

ADMINS = "/api/v1/admins"


class TestCreateAdmin:
    """POST /admins"""

    def test_creates_login_and_admin_row(self, client, fake_db, admin_headers):
        response = client.post(ADMINS, json={
            "username": "deputy", "email": "deputy@pines.test", "password": "deputy-pass"
        }, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["username"] == "deputy"
        assert response.json()["user_id"] == fake_db.auth.users["deputy@pines.test"]["user"].id

    def test_new_admin_can_sign_in(self, client, admin_headers):
        client.post(ADMINS, json={
            "username": "deputy", "email": "deputy@pines.test", "password": "deputy-pass"
        }, headers=admin_headers)

        login = client.post("/api/v1/auth/login", json={"email": "deputy@pines.test", "password": "deputy-pass"})

        assert login.status_code == 200
        assert login.json()["role"] == "admin"

    def test_duplicate_username_is_409(self, client, fake_db, admin_headers):
        response = client.post(ADMINS, json={
            "username": "owner", "email": "other@pines.test", "password": "other-pass"
        }, headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["detail"] == "Username already taken"
        assert "other@pines.test" not in fake_db.auth.users

    def test_failed_insert_removes_login(self, client, fake_db, admin_headers, monkeypatch):
        real_table = fake_db.table

        def failing_table(name):
            query = real_table(name)
            if name == "admins":
                original_insert = query.insert

                def insert(payload):
                    original_insert(payload)
                    fake_db.fail_tables["admins"] = True
                    return query
                query.insert = insert
            return query

        monkeypatch.setattr(fake_db, "table", failing_table)

        response = client.post(ADMINS, json={
            "username": "deputy", "email": "deputy@pines.test", "password": "deputy-pass"
        }, headers=admin_headers)

        assert response.status_code == 500
        assert "deputy@pines.test" not in fake_db.auth.users
        assert [row["username"] for row in fake_db.tables["admins"]] == ["owner"]

    def test_short_username_is_422(self, client, admin_headers):
        response = client.post(ADMINS, json={
            "username": "ab", "email": "ab@pines.test", "password": "ab-pass"
        }, headers=admin_headers)
        assert response.status_code == 422

    def test_canvasser_cannot_create(self, client, canvasser_headers):
        response = client.post(ADMINS, json={
            "username": "sneaky", "email": "s@pines.test", "password": "sneaky-pass"
        }, headers=canvasser_headers)
        assert response.status_code == 403


class TestDeleteAdmin:
    """DELETE /admins/{id}"""

    def test_remove_other_admin(self, client, fake_db, admin_headers):
        other = fake_db.seed("admins", user_id="user-2", username="deputy")

        response = client.delete(f"{ADMINS}/{other['id']}", headers=admin_headers)

        assert response.status_code == 204
        assert [a["username"] for a in client.get(ADMINS, headers=admin_headers).json()] == ["owner"]

    def test_cannot_remove_self(self, client, fake_db, admin_headers):
        fake_db.seed("admins", user_id="user-2", username="deputy")
        own = fake_db.tables["admins"][0]

        response = client.delete(f"{ADMINS}/{own['id']}", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "You cannot delete your own admin account"

    def test_unknown_admin_is_404(self, client, admin_headers):
        assert client.delete(f"{ADMINS}/missing", headers=admin_headers).status_code == 404

    def test_last_admin_is_protected(self, fake_db):
        only = fake_db.seed("admins", user_id="user-1", username="solo")

        with pytest.raises(HTTPException) as exc:
            AdminService(fake_db).delete_admin(only["id"], current_user_id="someone-else")

        assert exc.value.status_code == 400
        assert exc.value.detail == "Cannot delete the last admin"
        assert len(fake_db.tables["admins"]) == 1
