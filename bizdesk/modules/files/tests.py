"""
Tests para el módulo de Archivos y Carpetas

El almacenamiento real (MinIO) se reemplaza por FakeStorage (ver conftest.py).
"""

import pytest

from bizdesk.modules.files import service as files_service
from bizdesk.modules.files import tasks as files_tasks
from bizdesk.modules.files.tasks import purge_stored_object


class QueuedPurges:
    """Sustituye a la tarea de Celery y registra las claves encoladas."""

    def __init__(self):
        self.keys = []

    def delay(self, storage_key):
        self.keys.append(storage_key)


@pytest.fixture
def queued_purges(monkeypatch):
    recorder = QueuedPurges()
    monkeypatch.setattr(files_service, "purge_stored_object", recorder)
    return recorder


@pytest.fixture
def upload(client, auth_headers):
    response = client.post("/files/upload-url", headers=auth_headers, json={
        "filename": "recibo.pdf",
        "content_type": "application/pdf",
        "module": "receipts"
    })
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def document(client, auth_headers, upload):
    response = client.post("/files/", headers=auth_headers, json={
        "storage_key": upload["storage_key"],
        "file_name": "recibo.pdf",
        "file_type": "application/pdf",
        "file_size": 2048,
        "tags": ["gastos"]
    })
    assert response.status_code == 201, response.text
    return response.json()


class TestUploads:

    def test_upload_url_key_is_scoped_to_user(self, upload, sample_user):
        assert upload["storage_key"].startswith(f"{sample_user.id}/receipts/")
        assert upload["storage_key"].endswith("-recibo.pdf")
        assert upload["upload_url"] == f"http://storage.test/upload/{upload['storage_key']}"
        assert upload["expires_in"] == 15 * 60

    def test_disallowed_content_type(self, client, auth_headers):
        response = client.post("/files/upload-url", headers=auth_headers, json={
            "filename": "script.sh", "content_type": "application/x-sh"
        })
        assert response.status_code == 400

    def test_register_document(self, document, sample_user):
        assert document["uploaded_by"] == str(sample_user.id)
        assert document["tags"] == ["gastos"]
        assert document["url"] == f"http://storage.test/download/{document['storage_key']}"

    def test_cannot_register_foreign_key(self, client, other_auth_headers, upload):
        response = client.post("/files/", headers=other_auth_headers, json={
            "storage_key": upload["storage_key"],
            "file_name": "recibo.pdf",
            "file_type": "application/pdf",
            "file_size": 10
        })
        assert response.status_code == 403

    def test_duplicate_registration(self, client, auth_headers, document):
        response = client.post("/files/", headers=auth_headers, json={
            "storage_key": document["storage_key"],
            "file_name": "recibo.pdf",
            "file_type": "application/pdf",
            "file_size": 10
        })
        assert response.status_code == 409

    def test_file_too_large(self, client, auth_headers, upload):
        response = client.post("/files/", headers=auth_headers, json={
            "storage_key": upload["storage_key"],
            "file_name": "recibo.pdf",
            "file_type": "application/pdf",
            "file_size": 51 * 1024 * 1024
        })
        assert response.status_code == 400


class TestDocuments:

    def test_download_url(self, client, auth_headers, other_auth_headers, document):
        response = client.get(f"/files/{document['id']}/url", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["download_url"].endswith(document["storage_key"])
        assert data["file_size"] == 2048

        assert client.get(f"/files/{document['id']}/url", headers=other_auth_headers).status_code == 403

    def test_list_by_folder(self, client, auth_headers, upload):
        folder = client.post("/folders/", headers=auth_headers, json={"folder_name": "Recibos"}).json()
        client.post("/files/", headers=auth_headers, json={
            "storage_key": upload["storage_key"],
            "file_name": "recibo.pdf",
            "file_type": "application/pdf",
            "file_size": 1,
            "folder_id": folder["id"]
        })

        in_folder = client.get("/files/", headers=auth_headers, params={"folder_id": folder["id"]}).json()
        assert len(in_folder) == 1
        assert in_folder[0]["folder_id"] == folder["id"]

    def test_delete_queues_purge(self, client, auth_headers, document, queued_purges):
        response = client.delete(f"/files/{document['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert queued_purges.keys == [document["storage_key"]]
        assert client.get("/files/", headers=auth_headers).json() == []

    def test_other_user_cannot_delete(self, client, other_auth_headers, document, queued_purges):
        response = client.delete(f"/files/{document['id']}", headers=other_auth_headers)
        assert response.status_code == 403
        assert queued_purges.keys == []

    def test_purge_task_removes_blob(self, monkeypatch, fake_storage):
        monkeypatch.setattr(files_tasks, "get_storage", lambda: fake_storage)
        result = purge_stored_object.apply(args=["some/key.pdf"]).get()
        assert result == {"status": "deleted", "key": "some/key.pdf"}
        assert fake_storage.removed == ["some/key.pdf"]


class TestFolders:

    def test_unique_name_per_parent(self, client, auth_headers):
        parent = client.post("/folders/", headers=auth_headers, json={"folder_name": "2024"}).json()
        assert client.post("/folders/", headers=auth_headers, json={"folder_name": "2024"}).status_code == 409

        child = client.post("/folders/", headers=auth_headers, json={"folder_name": "2024", "parent_id": parent["id"]})
        assert child.status_code == 201
        assert child.json()["parent_id"] == parent["id"]

    def test_get_or_create(self, client, auth_headers):
        first = client.post("/folders/get-or-create", headers=auth_headers, json={"folder_name": "Staff"}).json()
        second = client.post("/folders/get-or-create", headers=auth_headers, json={"folder_name": "staff"}).json()
        assert first["id"] == second["id"]
        assert len(client.get("/folders/", headers=auth_headers).json()) == 1

    def test_rename_and_self_parent(self, client, auth_headers):
        folder = client.post("/folders/", headers=auth_headers, json={"folder_name": "Viejo"}).json()
        response = client.patch(f"/folders/{folder['id']}", headers=auth_headers, json={"folder_name": "Nuevo"})
        assert response.json()["folder_name"] == "Nuevo"

        response = client.patch(f"/folders/{folder['id']}", headers=auth_headers, json={"parent_id": folder["id"]})
        assert response.status_code == 400

    def test_delete_only_when_empty(self, client, auth_headers):
        parent = client.post("/folders/", headers=auth_headers, json={"folder_name": "Padre"}).json()
        child = client.post("/folders/", headers=auth_headers, json={"folder_name": "Hijo", "parent_id": parent["id"]}).json()

        assert client.delete(f"/folders/{parent['id']}", headers=auth_headers).status_code == 409
        assert client.delete(f"/folders/{child['id']}", headers=auth_headers).status_code == 200
        assert client.delete(f"/folders/{parent['id']}", headers=auth_headers).status_code == 200

    def test_isolated_per_user(self, client, auth_headers, other_auth_headers):
        folder = client.post("/folders/", headers=auth_headers, json={"folder_name": "Privado"}).json()
        assert client.get("/folders/", headers=other_auth_headers).json() == []
        assert client.delete(f"/folders/{folder['id']}", headers=other_auth_headers).status_code == 403
