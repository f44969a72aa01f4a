"""
Tests para el módulo de Personal
"""

import pytest

from bizdesk.modules.auth.utils import verify_password
from bizdesk.modules.staff.models import Staff


@pytest.fixture
def staff_member(client, auth_headers):
    response = client.post("/staff/", headers=auth_headers, json={
        "staff_full_name": "Yaw Asante",
        "email_address": "Yaw@Example.com",
        "phone_number": "0200000000",
        "password": "vendedor123"
    })
    assert response.status_code == 201, response.text
    return response.json()


class TestStaff:

    def test_create(self, staff_member, db_session):
        assert staff_member["email_address"] == "yaw@example.com"
        assert staff_member["failed_login_attempts"] == 0
        assert staff_member["staff_number"].startswith("staff_")
        assert "password" not in staff_member

        stored = db_session.query(Staff).filter(Staff.id == staff_member["id"]).first()
        assert stored.password != "vendedor123"
        assert verify_password("vendedor123", stored.password)

    def test_email_exists_case_insensitive(self, client, auth_headers, staff_member):
        data = client.get("/staff/email-exists", headers=auth_headers, params={"email": "YAW@example.com"}).json()
        assert data["exists"] is True
        data = client.get("/staff/email-exists", headers=auth_headers, params={"email": "nadie@example.com"}).json()
        assert data["exists"] is False

    def test_duplicate_email(self, client, auth_headers, staff_member):
        response = client.post("/staff/", headers=auth_headers, json={
            "staff_full_name": "Otro", "email_address": "yaw@example.com", "password": "vendedor123"
        })
        assert response.status_code == 409

    def test_short_password(self, client, auth_headers):
        response = client.post("/staff/", headers=auth_headers, json={
            "staff_full_name": "Otro", "email_address": "otro@example.com", "password": "123"
        })
        assert response.status_code == 422

    def test_remove(self, client, auth_headers, other_auth_headers, staff_member):
        assert client.get("/staff/", headers=other_auth_headers).json() == []
        assert client.delete(f"/staff/{staff_member['id']}", headers=other_auth_headers).status_code == 403
        assert client.delete(f"/staff/{staff_member['id']}", headers=auth_headers).status_code == 200
        assert client.get("/staff/", headers=auth_headers).json() == []
