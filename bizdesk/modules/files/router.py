"""
File management router with presigned URLs
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from bizdesk.dependencies.dbDependecies import get_db
from bizdesk.modules.auth.dependencies import get_auth_context
from bizdesk.modules.auth.schemas import AuthContext
from bizdesk.modules.files.storage import StorageService, get_storage
from bizdesk.modules.files.service import DocumentService, FolderService
from bizdesk.modules.files.schemas import (
    UploadUrlRequest, UploadUrlResponse, DocumentCreate, DocumentOut, DownloadUrlResponse,
    FolderCreate, FolderUpdate, FolderOut
)

router = APIRouter(prefix="/files", tags=["Files"])
folder_router = APIRouter(prefix="/folders", tags=["Folders"])


@router.post("/upload-url", response_model=UploadUrlResponse)
async def get_upload_url(
    upload_request: UploadUrlRequest,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    auth_context: AuthContext = Depends(get_auth_context)
):
    """
    Generate a presigned URL for file upload.
    Client should use this URL to upload the file directly to MinIO, then register it with POST /files/.
    """
    return DocumentService(db, storage).generate_upload_url(upload_request, auth_context.user_id)


@router.post("/", response_model=DocumentOut, status_code=status.HTTP_201_CREATED)
async def create_document(
    data: DocumentCreate,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return DocumentService(db, storage).create_document(data, auth_context.user_id)


@router.get("/", response_model=List[DocumentOut])
async def list_documents(
    folder_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return DocumentService(db, storage).list_documents(auth_context.user_id, folder_id)


@router.get("/{document_id}/url", response_model=DownloadUrlResponse)
async def get_download_url(
    document_id: UUID,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    auth_context: AuthContext = Depends(get_auth_context)
):
    """Generate a presigned URL for file download."""
    return DocumentService(db, storage).get_url(document_id, auth_context.user_id)


@router.delete("/{document_id}")
async def delete_document(
    document_id: UUID,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    auth_context: AuthContext = Depends(get_auth_context)
):
    """Delete the document record; the blob is removed in the background."""
    return DocumentService(db, storage).delete_document(document_id, auth_context.user_id)


@folder_router.get("/", response_model=List[FolderOut])
async def list_folders(
    parent_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return FolderService(db).list_folders(auth_context.user_id, parent_id)


@folder_router.post("/", response_model=FolderOut, status_code=status.HTTP_201_CREATED)
async def create_folder(
    data: FolderCreate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return FolderService(db).create_folder(data, auth_context.user_id)


@folder_router.post("/get-or-create", response_model=FolderOut)
async def get_or_create_folder(
    data: FolderCreate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    """Devuelve la carpeta con ese nombre, creándola si no existe."""
    return FolderService(db).get_or_create_by_name(data, auth_context.user_id)


@folder_router.patch("/{folder_id}", response_model=FolderOut)
async def update_folder(
    folder_id: UUID,
    data: FolderUpdate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return FolderService(db).update_folder(folder_id, data, auth_context.user_id)


@folder_router.delete("/{folder_id}")
async def delete_folder(folder_id: UUID, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    return FolderService(db).delete_folder(folder_id, auth_context.user_id)
