"""
Folder and document metadata; the blobs themselves live in MinIO
"""
from sqlalchemy import Column, String, Integer, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from uuid import uuid4
from bizdesk.database.database import Base
from bizdesk.common.mixins import BaseMixin


class Folder(Base, BaseMixin):
    __tablename__ = "folders"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    folder_name = Column(String(150), nullable=False)
    parent_id = Column(UUID(as_uuid=True), ForeignKey("folders.id"), nullable=True, index=True)

    documents = relationship("Document", back_populates="folder")

    def __repr__(self):
        return f"<Folder(id={self.id}, name={self.folder_name})>"


class Document(Base, BaseMixin):
    __tablename__ = "documents"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4, index=True)

    file_name = Column(String(255), nullable=False)
    file_type = Column(String(100), nullable=False)
    file_size = Column(Integer, nullable=False)
    storage_key = Column(String(500), nullable=False, unique=True, index=True)  # MinIO object key
    folder_id = Column(UUID(as_uuid=True), ForeignKey("folders.id"), nullable=True, index=True)
    tags = Column(JSON, nullable=True)

    uploaded_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)

    folder = relationship("Folder", back_populates="documents")

    def __repr__(self):
        return f"<Document(id={self.id}, filename={self.file_name}, size={self.file_size})>"
