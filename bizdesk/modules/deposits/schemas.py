from pydantic import BaseModel, Field
from decimal import Decimal
from typing import Optional
from uuid import UUID
from datetime import datetime


class DepositBase(BaseModel):
    deposit_type: str = Field(..., min_length=1, max_length=50)
    account_name: str = Field(..., min_length=1, max_length=150)
    account_number: str = Field(..., min_length=1, max_length=50)
    amount: Decimal = Field(..., gt=0)
    to_recipient: str = Field(..., min_length=1, max_length=150)
    deposit_image_url: Optional[str] = Field(None, max_length=500)
    approval: str = Field("pending", max_length=30)


class DepositCreate(DepositBase):
    deposit_number: Optional[str] = Field(None, max_length=50, description="Se genera si no se envía")


class DepositUpdate(DepositBase):
    pass


class DepositOut(DepositBase):
    id: UUID
    deposit_number: str
    created_by: UUID
    updated_by: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
