from pydantic import BaseModel
from typing import Optional
from datetime import datetime

MAX_DOCUMENT_BYTES = 20 * 1024 * 1024


class DocumentResponse(BaseModel):
    id: str
    lead_id: str
    salesperson_id: Optional[str] = None
    filename: str
    file_type: str
    file_size: Optional[int] = None
    file_url: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DocumentDownload(BaseModel):
    url: str
    expires_in: int
