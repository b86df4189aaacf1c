from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.notifications.schemas import (
    NotificationCreate, NotificationResponse, MarkAllReadResponse
)
from app.modules.notifications.service import NotificationService
from app.core.dependencies import get_current_user, require_permission
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_notification_service(supabase: Client = Depends(get_supabase)) -> NotificationService:
    return NotificationService(supabase)


@router.get("", response_model=List[NotificationResponse])
async def list_my_notifications(
    unread_only: bool = False,
    limit: int = 50,
    user_data: Dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    """Notifications addressed to the signed-in user"""
    return service.list_for_user(user_data["id"], unread_only=unread_only, limit=limit)


@router.post("", response_model=NotificationResponse, status_code=201)
async def create_notification(
    notification_data: NotificationCreate,
    user_data: Dict = Depends(require_permission("notifications:create")),
    service: NotificationService = Depends(get_notification_service)
):
    """Send a notification to a user"""
    return service.create_notification(notification_data)


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    user_data: Dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    """Mark every unread notification read"""
    return MarkAllReadResponse(updated=service.mark_all_read(user_data["id"]))


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    user_data: Dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    """Mark a notification read"""
    return service.mark_read(notification_id, user_data["id"])
