from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime


class SalespersonCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    job_types: List[str] = []
    commission_percentage: float = Field(0, ge=0, le=100)


class SalespersonUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    job_types: Optional[List[str]] = None
    commission_percentage: Optional[float] = Field(None, ge=0, le=100)
    total_sales: Optional[float] = Field(None, ge=0)
    total_profit: Optional[float] = None


class SalespersonResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    job_types: Optional[List[str]] = None
    commission_percentage: float = 0
    total_sales: float = 0
    total_profit: float = 0
    active: bool = True
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
