from supabase import Client
from app.modules.notifications.schemas import NotificationCreate, NotificationResponse
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_notification(self, data: NotificationCreate) -> NotificationResponse:
        try:
            result = self.supabase.table("notifications").insert({
                "user_id": data.user_id,
                "title": data.title.strip(),
                "message": data.message.strip(),
                "type": data.type,
                "related_lead_id": data.related_lead_id or None,
                "read": False
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create notification")
            return NotificationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_for_user(self, user_id: str, unread_only: bool = False, limit: int = 50) -> List[NotificationResponse]:
        try:
            query = self.supabase.table("notifications")\
                .select("*")\
                .eq("user_id", user_id)
            if unread_only:
                query = query.eq("read", False)
            result = query.order("created_at", desc=True).limit(limit).execute()
            return [NotificationResponse(**row) for row in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def mark_read(self, notification_id: str, user_id: str) -> NotificationResponse:
        """Mark one of the user's notifications read; other users' rows are reported as missing"""
        try:
            result = self.supabase.table("notifications")\
                .update({"read": True})\
                .eq("id", notification_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Notification not found")
            return NotificationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def mark_all_read(self, user_id: str) -> int:
        try:
            result = self.supabase.table("notifications")\
                .update({"read": True})\
                .eq("user_id", user_id)\
                .eq("read", False)\
                .execute()
            return len(result.data or [])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
