"""
Tests para el módulo de Autenticación

- Registro y unicidad de email
- Login con OAuth2 password form
- Perfil del usuario actual
- Rechazo de peticiones sin token o con token inválido
"""

import jwt
import pytest
from datetime import timedelta
from fastapi import HTTPException
from uuid import uuid4

from bizdesk.core.config import settings
from bizdesk.modules.auth.utils import hash_password, verify_password, create_access_token, decode_access_token


class TestPasswordUtils:

    def test_hash_and_verify(self):
        hashed = hash_password("secreto123")
        assert hashed != "secreto123"
        assert verify_password("secreto123", hashed)
        assert not verify_password("otra-clave", hashed)

    def test_verify_without_hash(self):
        assert verify_password("secreto123", None) is False

    def test_token_keeps_subject(self):
        user_id = uuid4()
        payload = decode_access_token(create_access_token(user_id, "a@b.com"))
        assert payload["sub"] == str(user_id)
        assert payload["email"] == "a@b.com"

    def test_expired_token(self):
        token = create_access_token(uuid4(), "a@b.com", expires_delta=timedelta(seconds=-1))
        with pytest.raises(HTTPException) as exc:
            decode_access_token(token)
        assert exc.value.status_code == 401

    def test_rejects_other_token_types(self):
        token = jwt.encode({"sub": str(uuid4()), "type": "refresh"}, settings.APP_SECRET_STRING, algorithm=settings.ALGORITHM)
        with pytest.raises(HTTPException) as exc:
            decode_access_token(token)
        assert exc.value.status_code == 401


class TestRegisterAndLogin:

    def test_register_user(self, client):
        response = client.post("/auth/register", json={
            "email": "nuevo@example.com",
            "password": "secreto123",
            "business_name": "Pescados Nuevo"
        })
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "nuevo@example.com"
        assert data["business_name"] == "Pescados Nuevo"
        assert "password" not in data

    def test_register_duplicate_email(self, client, sample_user):
        response = client.post("/auth/register", json={
            "email": sample_user.email,
            "password": "secreto123"
        })
        assert response.status_code == 409

    def test_register_short_password(self, client):
        response = client.post("/auth/register", json={"email": "x@example.com", "password": "corta"})
        assert response.status_code == 422

    def test_login_returns_token(self, client, sample_user):
        response = client.post("/auth/login", data={"username": sample_user.email, "password": "secreto123"})
        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["user"]["email"] == sample_user.email

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
        assert me.status_code == 200
        assert me.json()["id"] == str(sample_user.id)

    def test_login_wrong_password(self, client, sample_user):
        response = client.post("/auth/login", data={"username": sample_user.email, "password": "incorrecta"})
        assert response.status_code == 401


class TestCurrentUser:

    def test_missing_token(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer no-es-un-jwt"})
        assert response.status_code == 401

    def test_update_profile(self, client, auth_headers):
        response = client.patch("/auth/me", headers=auth_headers, json={
            "business_name": "Mercado Central",
            "phone_number": "0200000000"
        })
        assert response.status_code == 200
        data = response.json()
        assert data["business_name"] == "Mercado Central"
        assert data["phone_number"] == "0200000000"
        assert data["full_name"] == "Usuario de Prueba"
