from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.homepage_content.schemas import ContentUpsert, ContentResponse
from app.modules.homepage_content.service import HomepageContentService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/content", tags=["homepage-content"])


def get_content_service(supabase: Client = Depends(get_supabase)) -> HomepageContentService:
    return HomepageContentService(supabase)


@router.get("", response_model=Dict[str, Dict[str, str]])
async def get_content(
    section: Optional[str] = None,
    service: HomepageContentService = Depends(get_content_service)
):
    """Editable page copy grouped by section (public)"""
    return service.get_content_map(section)


@router.get("/items", response_model=List[ContentResponse])
async def list_content_items(
    section: Optional[str] = None,
    user_data: Dict = Depends(require_permission("homepage_content:read")),
    service: HomepageContentService = Depends(get_content_service)
):
    """Content rows with edit metadata"""
    return service.list_content(section)


@router.put("/{section}/{field_name}", response_model=ContentResponse)
async def upsert_content(
    section: str,
    field_name: str,
    content_data: ContentUpsert,
    user_data: Dict = Depends(require_permission("homepage_content:update")),
    service: HomepageContentService = Depends(get_content_service)
):
    """Save one field of page copy"""
    return service.upsert_content(section, field_name, content_data, user_data["id"])


@router.delete("/{section}/{field_name}", status_code=204)
async def delete_content(
    section: str,
    field_name: str,
    user_data: Dict = Depends(require_permission("homepage_content:delete")),
    service: HomepageContentService = Depends(get_content_service)
):
    """Delete one field of page copy"""
    service.delete_content(section, field_name)
    return None
