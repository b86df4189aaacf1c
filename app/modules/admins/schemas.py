from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class AdminCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)


class AdminResponse(BaseModel):
    id: str
    user_id: str
    username: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
