from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.dialects.postgresql import UUID
from uuid import uuid4
from bizdesk.database.database import Base
from bizdesk.common.mixins import TimestampMixin

class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    email = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)
    last_login = Column(DateTime(timezone=True), nullable=True)

    # Business profile
    full_name = Column(String(150), nullable=True)
    phone_number = Column(String(50), nullable=True)
    business_name = Column(String(200), nullable=True)
    business_email = Column(String(150), nullable=True, index=True)
