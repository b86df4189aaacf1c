from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

# Stored value -> display label
ACTIVITY_RESULTS = {
    "not_interested": "Not Interested",
    "maybe": "Maybe Later",
    "callback": "Call Back",
    "interested": "Interested",
    "no_answer": "No Answer",
    "not_home": "Not Home",
}

# Results that count as a generated lead in canvasser stats
LEAD_RESULTS = {"interested", "callback"}


def normalize_result(value: Optional[str]) -> Optional[str]:
    """Map a stored value or a display label ("Call Back", "Maybe") to the stored value."""
    if value is None:
        return None
    key = value.strip().lower().replace(" ", "_").replace("-", "_")
    if key in ACTIVITY_RESULTS:
        return key
    aliases = {"call_back": "callback", "maybe_later": "maybe"}
    return aliases.get(key)


class ActivityCreate(BaseModel):
    canvasser_id: str
    address: str = Field(..., min_length=1)
    zip_code: Optional[str] = None
    result: str
    notes: Optional[str] = None
    requires_followup: bool = False
    followup_priority: Optional[int] = Field(None, ge=1, le=3)
    visit_date: Optional[datetime] = None


class ActivityResponse(BaseModel):
    id: str
    canvasser_id: str
    address: str
    zip_code: Optional[str] = None
    result: str
    notes: Optional[str] = None
    requires_followup: Optional[bool] = None
    followup_priority: Optional[int] = None
    visit_date: datetime
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
