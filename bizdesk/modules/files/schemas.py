"""
Pydantic schemas for file operations
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from uuid import UUID
from datetime import datetime


class UploadUrlRequest(BaseModel):
    """Request to get a presigned upload URL"""
    filename: str = Field(..., min_length=1, max_length=255, description="Original filename with extension")
    content_type: str = Field(..., description="MIME type of the file")
    module: str = Field("documents", max_length=50, description="Context of the upload (documents, receipts, staff...)")


class UploadUrlResponse(BaseModel):
    upload_url: str
    storage_key: str
    expires_in: int = Field(description="URL expiration time in seconds")


class DocumentCreate(BaseModel):
    """Metadata of a file already uploaded with a presigned URL"""
    storage_key: str = Field(..., max_length=500)
    file_name: str = Field(..., min_length=1, max_length=255)
    file_type: str = Field(..., max_length=100)
    file_size: int = Field(..., ge=0)
    folder_id: Optional[UUID] = None
    tags: Optional[List[str]] = None


class DocumentOut(BaseModel):
    id: UUID
    file_name: str
    file_type: str
    file_size: int
    storage_key: str
    folder_id: Optional[UUID] = None
    tags: Optional[List[str]] = None
    uploaded_by: UUID
    created_at: datetime
    url: Optional[str] = None

    class Config:
        from_attributes = True


class DownloadUrlResponse(BaseModel):
    download_url: str
    file_name: str
    file_type: str
    file_size: int
    expires_in: int = Field(description="URL expiration time in seconds")


class FolderCreate(BaseModel):
    folder_name: str = Field(..., min_length=1, max_length=150)
    parent_id: Optional[UUID] = None


class FolderUpdate(BaseModel):
    folder_name: Optional[str] = Field(None, min_length=1, max_length=150)
    parent_id: Optional[UUID] = None


class FolderOut(BaseModel):
    id: UUID
    folder_name: str
    parent_id: Optional[UUID] = None
    created_at: datetime

    class Config:
        from_attributes = True
