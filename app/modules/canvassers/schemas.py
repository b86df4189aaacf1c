from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Union
from datetime import datetime, date


class CanvasserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    phone: Optional[str] = None
    # Either a list or the comma-separated string typed into the admin form
    assigned_territories: Optional[Union[List[str], str]] = None
    active: bool = True


class CanvasserUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    assigned_territories: Optional[Union[List[str], str]] = None
    hire_date: Optional[date] = None


class CanvasserStats(BaseModel):
    total_visits: int
    leads_generated: int
    conversion_rate: float


class CanvasserResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    assigned_territories: Optional[List[str]] = None
    hire_date: Optional[date] = None
    active: bool = True
    total_visits: int = 0
    leads_generated: int = 0
    conversion_rate: float = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
