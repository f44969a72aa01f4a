"""
Fixtures compartidos por los tests de todos los módulos.

Usan una base SQLite en memoria (una sola conexión compartida) que se crea y
se destruye en cada test, y reemplazan MinIO por un almacenamiento falso.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"

import pytest
from fastapi.testclient import TestClient

from bizdesk.main import app
from bizdesk.database.database import Base, SessionLocal, sync_engine
from bizdesk.modules.auth.models import User
from bizdesk.modules.auth.utils import hash_password, create_access_token
from bizdesk.modules.files.storage import StorageService, get_storage


class FakeStorage(StorageService):
    """Almacenamiento en memoria: genera URLs deterministas y registra borrados."""

    def __init__(self):
        super().__init__()
        self.removed = []

    def presigned_upload_url(self, key: str) -> str:
        return f"http://storage.test/upload/{key}"

    def presigned_download_url(self, key: str) -> str:
        return f"http://storage.test/download/{key}"

    def remove(self, key: str) -> bool:
        self.removed.append(key)
        return True


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=sync_engine)
    yield
    Base.metadata.drop_all(bind=sync_engine)


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def client(fake_storage):
    app.dependency_overrides[get_storage] = lambda: fake_storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _create_user(db_session, email: str) -> User:
    user = User(
        email=email,
        password=hash_password("secreto123"),
        full_name="Usuario de Prueba",
        business_name="Negocio de Prueba",
        is_active=True
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def _headers_for(user: User) -> dict:
    token = create_access_token(user.id, user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_user(db_session):
    return _create_user(db_session, "owner@example.com")


@pytest.fixture
def other_user(db_session):
    return _create_user(db_session, "intruder@example.com")


@pytest.fixture
def auth_headers(sample_user):
    return _headers_for(sample_user)


@pytest.fixture
def other_auth_headers(other_user):
    return _headers_for(other_user)


@pytest.fixture
def product(client, auth_headers):
    """Producto con 20 cajas y 50 kg en stock."""
    response = client.post("/products/", headers=auth_headers, json={
        "name": "Tilapia",
        "sku": "TIL-001",
        "quantity_box": 20,
        "quantity_kg": "50",
        "cost_per_box": "30",
        "cost_per_kg": "3",
        "price_per_box": "40",
        "price_per_kg": "5",
        "min_stock": 5
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def customer(client, auth_headers):
    response = client.post("/customers/", headers=auth_headers, json={
        "name": "Ama Mensah",
        "phone": "0244000000"
    })
    assert response.status_code == 201, response.text
    return response.json()
