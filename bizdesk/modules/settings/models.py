from sqlalchemy import Column, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from uuid import uuid4
from bizdesk.database.database import Base
from bizdesk.common.mixins import BaseMixin


class Setting(Base, BaseMixin):
    """Preferencia clave/valor del usuario (moneda, nombre del negocio, tema...)"""
    __tablename__ = "settings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    key = Column(String(100), nullable=False)
    value = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "key", name="uq_setting_user_key"),
    )
