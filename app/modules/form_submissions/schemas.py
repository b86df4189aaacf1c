from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

SUBMISSION_STATUSES = ["new", "read", "responded", "archived"]


class ChallengeResponse(BaseModel):
    question: str
    challenge_token: str
    expires_in: int


class ContactSubmit(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    message: str = Field(..., min_length=1, max_length=5000)
    source: str = "website"
    challenge_token: str
    answer: int


class SubmissionStatusUpdate(BaseModel):
    status: str


class SubmissionResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    source: Optional[str] = None
    status: Optional[str] = "new"
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    submitted_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    responded_by: Optional[str] = None

    class Config:
        from_attributes = True


class ContactAck(BaseModel):
    id: str
    message: str = "Thanks! We'll be in touch soon."
