"""
MinIO storage for documents and receipts, using presigned URLs
"""
from minio import Minio
from minio.error import S3Error
from fastapi import HTTPException, status
from functools import lru_cache
from datetime import timedelta
from uuid import UUID, uuid4
import logging

from bizdesk.common.mixins import utcnow
from bizdesk.core.config import settings

logger = logging.getLogger(__name__)


class StorageService:
    """Wraps the MinIO client. The client is created on first use."""

    def __init__(self):
        self.bucket_name = settings.MINIO_BUCKET_NAME
        self._client = None

    @property
    def client(self) -> Minio:
        if self._client is None:
            self._client = Minio(
                settings.minio_endpoint,
                access_key=settings.MINIO_ACCESS_KEY,
                secret_key=settings.MINIO_SECRET_KEY,
                secure=settings.MINIO_USE_SSL,
                region=settings.MINIO_REGION
            )
        return self._client

    def ensure_bucket(self):
        """Ensure the bucket exists, create if it doesn't"""
        try:
            if not self.client.bucket_exists(self.bucket_name):
                self.client.make_bucket(self.bucket_name)
                logger.info(f"Created MinIO bucket: {self.bucket_name}")
        except S3Error as e:
            logger.error(f"MinIO bucket setup error: {e}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="File storage service unavailable"
            )

    def generate_key(self, user_id: UUID, module: str, filename: str) -> str:
        """Structure: user_id/module/yyyy/mm/dd/uuid-filename"""
        now = utcnow()
        return f"{user_id}/{module}/{now.year}/{now.month:02d}/{now.day:02d}/{uuid4()}-{filename}"

    def validate_content_type(self, content_type: str):
        if content_type not in settings.ALLOWED_FILE_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"File type {content_type} not allowed"
            )

    def presigned_upload_url(self, key: str) -> str:
        try:
            return self.client.presigned_put_object(
                bucket_name=self.bucket_name,
                object_name=key,
                expires=timedelta(minutes=settings.UPLOAD_URL_EXPIRE_MINUTES)
            )
        except S3Error as e:
            logger.error(f"MinIO upload URL generation error: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not generate upload URL"
            )

    def presigned_download_url(self, key: str) -> str:
        try:
            return self.client.presigned_get_object(
                bucket_name=self.bucket_name,
                object_name=key,
                expires=timedelta(minutes=settings.DOWNLOAD_URL_EXPIRE_MINUTES)
            )
        except S3Error as e:
            logger.error(f"MinIO download URL generation error: {e}")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="File not found"
            )

    def remove(self, key: str) -> bool:
        try:
            self.client.remove_object(self.bucket_name, key)
            return True
        except S3Error as e:
            logger.error(f"MinIO file deletion error: {e}")
            return False


@lru_cache
def get_storage() -> StorageService:
    """FastAPI dependency returning the shared storage service."""
    return StorageService()
