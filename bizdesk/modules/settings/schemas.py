from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from datetime import datetime


class SettingUpsert(BaseModel):
    value: str
    category: str = Field(..., min_length=1, max_length=50)


class SettingOut(BaseModel):
    id: UUID
    key: str
    value: str
    category: str
    updated_at: datetime

    class Config:
        from_attributes = True


class SettingValue(BaseModel):
    key: str
    value: Optional[str] = None
