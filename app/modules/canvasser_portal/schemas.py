from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime, date

SCHEDULE_OUTCOMES = ["completed", "skipped"]


class FieldActivityCreate(BaseModel):
    address: str = Field(..., min_length=1)
    zip_code: Optional[str] = None
    result: str
    notes: Optional[str] = None
    requires_followup: bool = False
    followup_priority: Optional[int] = Field(None, ge=1, le=3)


class FieldLeadCreate(BaseModel):
    address: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    service: str = Field(..., min_length=1)
    message: Optional[str] = None
    result: str = "interested"


class FieldLeadResponse(BaseModel):
    lead_id: str
    activity_id: str


class ScheduleItemUpdate(BaseModel):
    status: str
    notes: Optional[str] = None


class ScheduleItemResponse(BaseModel):
    id: str
    canvasser_id: str
    address: str
    zip_code: Optional[str] = None
    assigned_date: date
    priority: Optional[int] = None
    status: str = "pending"
    completion_time: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TimeEntryResponse(BaseModel):
    id: str
    canvasser_id: str
    clock_in: datetime
    clock_out: Optional[datetime] = None
    total_hours: Optional[float] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TimeSummary(BaseModel):
    active_entry: Optional[TimeEntryResponse] = None
    entries: List[TimeEntryResponse]
    today_hours: float
