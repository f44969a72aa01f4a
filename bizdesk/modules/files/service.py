"""
Folders and documents. Files are uploaded straight to MinIO with a presigned
URL; this service only records their metadata and hands out download URLs.
"""
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Optional
from uuid import UUID
import logging

from bizdesk.common.access import get_owned_record
from bizdesk.core.config import settings
from bizdesk.database.database import get_owned_query
from bizdesk.modules.files.models import Folder, Document
from bizdesk.modules.files.schemas import (
    UploadUrlRequest, UploadUrlResponse, DocumentCreate, DocumentOut, DownloadUrlResponse,
    FolderCreate, FolderUpdate
)
from bizdesk.modules.files.storage import StorageService
from bizdesk.modules.files.tasks import purge_stored_object

logger = logging.getLogger(__name__)


class FolderService:

    def __init__(self, db: Session):
        self.db = db

    def _find_by_name(self, user_id: UUID, folder_name: str, parent_id: Optional[UUID]):
        query = get_owned_query(self.db, Folder, user_id).filter(
            func.lower(Folder.folder_name) == folder_name.lower()
        )
        if parent_id is None:
            query = query.filter(Folder.parent_id.is_(None))
        else:
            query = query.filter(Folder.parent_id == parent_id)
        return query.first()

    def _ensure_unique(self, user_id: UUID, folder_name: str, parent_id: Optional[UUID], exclude_id: Optional[UUID] = None):
        existing = self._find_by_name(user_id, folder_name, parent_id)
        if existing and existing.id != exclude_id:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Ya existe una carpeta '{folder_name}' en esta ubicación"
            )

    def list_folders(self, user_id: UUID, parent_id: Optional[UUID] = None) -> List[Folder]:
        query = get_owned_query(self.db, Folder, user_id)
        if parent_id:
            query = query.filter(Folder.parent_id == parent_id)
        return query.order_by(Folder.folder_name).all()

    def create_folder(self, data: FolderCreate, user_id: UUID) -> Folder:
        try:
            if data.parent_id:
                get_owned_record(self.db, Folder, data.parent_id, user_id, "Carpeta")
            self._ensure_unique(user_id, data.folder_name, data.parent_id)
            folder = Folder(user_id=user_id, folder_name=data.folder_name, parent_id=data.parent_id)
            self.db.add(folder)
            self.db.commit()
            self.db.refresh(folder)
            return folder
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error creando carpeta: {str(e)}"
            )

    def get_or_create_by_name(self, data: FolderCreate, user_id: UUID) -> Folder:
        existing = self._find_by_name(user_id, data.folder_name, data.parent_id)
        if existing:
            return existing
        return self.create_folder(data, user_id)

    def update_folder(self, folder_id: UUID, data: FolderUpdate, user_id: UUID) -> Folder:
        try:
            folder = get_owned_record(self.db, Folder, folder_id, user_id, "Carpeta")
            values = data.model_dump(exclude_unset=True)

            parent_id = values.get("parent_id", folder.parent_id)
            if parent_id:
                if parent_id == folder.id:
                    raise HTTPException(
                        status_code=status.HTTP_400_BAD_REQUEST,
                        detail="Una carpeta no puede contenerse a sí misma"
                    )
                get_owned_record(self.db, Folder, parent_id, user_id, "Carpeta")
            self._ensure_unique(user_id, values.get("folder_name", folder.folder_name), parent_id, exclude_id=folder.id)

            for field, value in values.items():
                setattr(folder, field, value)
            self.db.commit()
            self.db.refresh(folder)
            return folder
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error actualizando carpeta: {str(e)}"
            )

    def delete_folder(self, folder_id: UUID, user_id: UUID) -> dict:
        try:
            folder = get_owned_record(self.db, Folder, folder_id, user_id, "Carpeta")
            documents = self.db.query(Document).filter(Document.folder_id == folder.id).count()
            children = self.db.query(Folder).filter(Folder.parent_id == folder.id).count()
            if documents or children:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="La carpeta no está vacía"
                )
            self.db.delete(folder)
            self.db.commit()
            return {"message": "Carpeta eliminada exitosamente"}
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error eliminando carpeta: {str(e)}"
            )


class DocumentService:

    def __init__(self, db: Session, storage: StorageService):
        self.db = db
        self.storage = storage

    def _to_out(self, document: Document) -> DocumentOut:
        out = DocumentOut.model_validate(document)
        out.url = self.storage.presigned_download_url(document.storage_key)
        return out

    def generate_upload_url(self, request: UploadUrlRequest, user_id: UUID) -> UploadUrlResponse:
        self.storage.validate_content_type(request.content_type)
        key = self.storage.generate_key(user_id, request.module, request.filename)
        return UploadUrlResponse(
            upload_url=self.storage.presigned_upload_url(key),
            storage_key=key,
            expires_in=settings.UPLOAD_URL_EXPIRE_MINUTES * 60
        )

    def create_document(self, data: DocumentCreate, user_id: UUID) -> DocumentOut:
        try:
            if not data.storage_key.startswith(f"{user_id}/"):
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="La clave de almacenamiento no pertenece al usuario"
                )
            self.storage.validate_content_type(data.file_type)
            if data.file_size > settings.MAX_FILE_SIZE:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"El archivo excede el tamaño máximo ({settings.MAX_FILE_SIZE} bytes)"
                )
            if data.folder_id:
                get_owned_record(self.db, Folder, data.folder_id, user_id, "Carpeta")
            if self.db.query(Document).filter(Document.storage_key == data.storage_key).first():
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Este archivo ya fue registrado"
                )

            document = Document(user_id=user_id, uploaded_by=user_id, **data.model_dump())
            self.db.add(document)
            self.db.commit()
            self.db.refresh(document)
            return self._to_out(document)
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error registrando archivo: {str(e)}"
            )

    def list_documents(self, user_id: UUID, folder_id: Optional[UUID] = None) -> List[DocumentOut]:
        query = get_owned_query(self.db, Document, user_id)
        if folder_id:
            query = query.filter(Document.folder_id == folder_id)
        return [self._to_out(d) for d in query.order_by(Document.created_at.desc()).all()]

    def get_url(self, document_id: UUID, user_id: UUID) -> DownloadUrlResponse:
        document = get_owned_record(self.db, Document, document_id, user_id, "Archivo")
        return DownloadUrlResponse(
            download_url=self.storage.presigned_download_url(document.storage_key),
            file_name=document.file_name,
            file_type=document.file_type,
            file_size=document.file_size,
            expires_in=settings.DOWNLOAD_URL_EXPIRE_MINUTES * 60
        )

    def delete_document(self, document_id: UUID, user_id: UUID) -> dict:
        try:
            document = get_owned_record(self.db, Document, document_id, user_id, "Archivo")
            storage_key = document.storage_key
            self.db.delete(document)
            self.db.commit()
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error eliminando archivo: {str(e)}"
            )

        try:
            purge_stored_object.delay(storage_key)
        except Exception as e:
            logger.error(f"Could not queue purge of {storage_key}: {e}")
        return {"message": "Archivo eliminado exitosamente"}
