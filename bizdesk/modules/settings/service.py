from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from bizdesk.database.database import get_owned_query
from bizdesk.modules.settings.models import Setting
from bizdesk.modules.settings.schemas import SettingUpsert


class SettingService:

    def __init__(self, db: Session):
        self.db = db

    def _find(self, user_id: UUID, key: str) -> Optional[Setting]:
        return get_owned_query(self.db, Setting, user_id).filter(Setting.key == key).first()

    def get_all(self, user_id: UUID) -> List[Setting]:
        return get_owned_query(self.db, Setting, user_id).order_by(Setting.category, Setting.key).all()

    def get(self, user_id: UUID, key: str) -> Optional[str]:
        setting = self._find(user_id, key)
        return setting.value if setting else None

    def get_by_category(self, user_id: UUID, category: str) -> List[Setting]:
        return get_owned_query(self.db, Setting, user_id).filter(
            Setting.category == category
        ).order_by(Setting.key).all()

    def update(self, user_id: UUID, key: str, data: SettingUpsert) -> Setting:
        """Crea o actualiza el valor de una clave."""
        try:
            setting = self._find(user_id, key)
            if setting:
                setting.value = data.value
                setting.category = data.category
            else:
                setting = Setting(user_id=user_id, key=key, value=data.value, category=data.category)
                self.db.add(setting)
            self.db.commit()
            self.db.refresh(setting)
            return setting
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error guardando configuración: {str(e)}"
            )
