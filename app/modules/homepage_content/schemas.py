from pydantic import BaseModel, Field
from typing import Optional, Dict
from datetime import datetime

# Copy shown on the public pages until an admin edits it
DEFAULT_CONTENT: Dict[str, Dict[str, str]] = {
    "services": {
        "title": "Our Construction Services",
        "description": "Comprehensive construction solutions tailored to your needs",
    },
    "services_page": {
        "hero_title": "Our Construction Services",
        "hero_description": "Comprehensive construction services delivered with unmatched quality and attention to detail",
        "services_intro": "We offer a complete range of construction services designed to meet your unique needs and exceed your expectations.",
    },
    "projects_page": {
        "hero_title": "Our Project Portfolio",
        "hero_description": "Explore our portfolio of completed projects showcasing quality craftsmanship and innovative design",
        "projects_intro": "From residential homes to commercial buildings, each project represents our commitment to excellence and attention to detail.",
    },
}


class ContentUpsert(BaseModel):
    content: str
    content_type: str = Field("text", min_length=1)


class ContentResponse(BaseModel):
    id: str
    section: str
    field_name: str
    content: str
    content_type: Optional[str] = "text"
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None

    class Config:
        from_attributes = True
