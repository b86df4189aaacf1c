from supabase import Client
from app.modules.homepage_content.schemas import ContentUpsert, ContentResponse
from app.core.query import now_iso
from typing import Dict, List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class HomepageContentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_content_map(self, section: Optional[str] = None) -> Dict[str, Dict[str, str]]:
        """Public page copy as {section: {field_name: content}}"""
        try:
            query = self.supabase.table("homepage_content").select("section, field_name, content")
            if section:
                query = query.eq("section", section)
            result = query.order("section").execute()

            content: Dict[str, Dict[str, str]] = {}
            for row in result.data or []:
                content.setdefault(row["section"], {})[row["field_name"]] = row["content"]
            return content
        except Exception as e:
            logger.error(f"Error fetching homepage content: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_content(self, section: Optional[str] = None) -> List[ContentResponse]:
        """Raw content rows for the admin editor"""
        try:
            query = self.supabase.table("homepage_content").select("*")
            if section:
                query = query.eq("section", section)
            result = query.order("section").order("field_name").execute()
            return [ContentResponse(**row) for row in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def upsert_content(self, section: str, field_name: str, data: ContentUpsert,
                       user_id: Optional[str] = None) -> ContentResponse:
        """Create or replace one field of page copy"""
        section, field_name = section.strip(), field_name.strip()
        if not section or not field_name:
            raise HTTPException(status_code=400, detail="Section and field name are required")
        try:
            result = self.supabase.table("homepage_content").upsert({
                "section": section,
                "field_name": field_name,
                "content": data.content,
                "content_type": data.content_type,
                "updated_at": now_iso(),
                "updated_by": user_id
            }, on_conflict="section,field_name").execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save content")

            logger.info("Homepage content %s.%s updated by %s", section, field_name, user_id)
            return ContentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_content(self, section: str, field_name: str) -> bool:
        """Remove a field so the page falls back to its built-in copy"""
        try:
            result = self.supabase.table("homepage_content")\
                .delete()\
                .eq("section", section)\
                .eq("field_name", field_name)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Content not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
