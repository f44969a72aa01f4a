from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from uuid import UUID
from datetime import datetime

# User schemas
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: Optional[str] = Field(None, max_length=150)
    phone_number: Optional[str] = Field(None, max_length=50)
    business_name: Optional[str] = Field(None, max_length=200)
    business_email: Optional[EmailStr] = None

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        if len(v) < 8:
            raise ValueError('La contraseña debe tener al menos 8 caracteres')
        return v

class UserUpdate(BaseModel):
    """Schema for updating account details. Email and password changes are not handled here."""
    full_name: Optional[str] = Field(None, max_length=150)
    phone_number: Optional[str] = Field(None, max_length=50)
    business_name: Optional[str] = Field(None, max_length=200)
    business_email: Optional[EmailStr] = None

class UserOut(BaseModel):
    id: UUID
    email: EmailStr
    is_active: bool
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    business_name: Optional[str] = None
    business_email: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

# Token schemas
class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserOut

# Auth context
class AuthContext(BaseModel):
    """Identidad del usuario que realiza la llamada."""
    user_id: UUID
    email: str
