from pydantic import BaseModel, Field
from typing import Optional, Dict
from datetime import datetime

QUOTE_STATUSES = ["pending", "approved", "rejected", "in_review"]


class QuoteCreate(BaseModel):
    client_name: str = Field(..., min_length=1)
    service_type: str
    estimated_amount: float = Field(..., ge=0)
    status: str = "pending"
    notes: Optional[str] = None
    lead_id: Optional[str] = None


class QuoteUpdate(BaseModel):
    client_name: Optional[str] = None
    service_type: Optional[str] = None
    estimated_amount: Optional[float] = Field(None, ge=0)
    status: Optional[str] = None
    notes: Optional[str] = None
    lead_id: Optional[str] = None


class QuoteStatusUpdate(BaseModel):
    status: str


class QuoteResponse(BaseModel):
    id: str
    client_name: str
    service_type: str
    estimated_amount: float
    status: str
    notes: Optional[str] = None
    lead_id: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class QuoteSummary(BaseModel):
    total: int
    pending: int
    by_status: Dict[str, int]
    pending_amount: float
