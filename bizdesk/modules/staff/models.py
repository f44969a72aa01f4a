from sqlalchemy import Column, String, Integer
from sqlalchemy.dialects.postgresql import UUID
from uuid import uuid4
from bizdesk.database.database import Base
from bizdesk.common.mixins import BaseMixin


class Staff(Base, BaseMixin):
    __tablename__ = "staff"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    staff_number = Column(String(50), nullable=False, unique=True)
    staff_full_name = Column(String(150), nullable=False)
    email_address = Column(String(150), nullable=False, unique=True, index=True)
    phone_number = Column(String(50), nullable=True)
    id_card_front_url = Column(String(500), nullable=True)
    id_card_back_url = Column(String(500), nullable=True)
    password = Column(String, nullable=False)
    failed_login_attempts = Column(Integer, nullable=False, default=0)
