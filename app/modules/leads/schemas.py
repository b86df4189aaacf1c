from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

LEAD_STATUSES = ["New", "Contacted", "Quoted", "In Progress", "Completed", "Lost"]


class LeadCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    service: Optional[str] = None
    message: str = Field(..., min_length=1)
    salesperson_id: Optional[str] = None


class LeadUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    service: Optional[str] = None
    message: Optional[str] = None
    status: Optional[str] = None
    salesperson_id: Optional[str] = None


class LeadStatusUpdate(BaseModel):
    status: str


class LeadAssign(BaseModel):
    salesperson_id: Optional[str] = None


class LeadResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    service: Optional[str] = None
    message: str
    status: str
    salesperson_id: Optional[str] = None
    canvasser_id: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
