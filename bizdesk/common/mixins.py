"""
Common mixins for owned business models
"""
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OwnedMixin:
    """Mixin for records that belong to a single user account"""

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)


class TimestampMixin:
    """Mixin for models that need timestamp tracking"""

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class BaseMixin(OwnedMixin, TimestampMixin):
    """Combines owner and timestamp columns for most business models"""
