from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from uuid import UUID
from datetime import datetime


class StaffCreate(BaseModel):
    staff_full_name: str = Field(..., min_length=1, max_length=150)
    email_address: EmailStr
    phone_number: Optional[str] = Field(None, max_length=50)
    id_card_front_url: Optional[str] = Field(None, max_length=500)
    id_card_back_url: Optional[str] = Field(None, max_length=500)
    password: str = Field(..., min_length=8)


class StaffOut(BaseModel):
    id: UUID
    staff_number: str
    staff_full_name: str
    email_address: str
    phone_number: Optional[str] = None
    id_card_front_url: Optional[str] = None
    id_card_back_url: Optional[str] = None
    failed_login_attempts: int
    created_at: datetime

    class Config:
        from_attributes = True


class EmailExists(BaseModel):
    email: str
    exists: bool
