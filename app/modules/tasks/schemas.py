from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, date

TASK_STATUS_FILTERS = ["all", "pending", "completed"]


class TaskCreate(BaseModel):
    salesperson_id: str = Field(..., min_length=1)
    lead_id: Optional[str] = None
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: int = Field(2, ge=1, le=3)


class TaskUpdate(BaseModel):
    salesperson_id: Optional[str] = None
    lead_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[int] = Field(None, ge=1, le=3)
    completed: Optional[bool] = None


class TaskResponse(BaseModel):
    id: str
    salesperson_id: str
    lead_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[int] = 2
    completed: Optional[bool] = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
