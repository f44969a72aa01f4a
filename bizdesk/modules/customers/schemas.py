from pydantic import BaseModel, EmailStr, Field
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID
from datetime import datetime


class CustomerStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None
    is_active: Optional[bool] = None


class CustomerOut(BaseModel):
    id: UUID
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    balance: Decimal
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
