from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.calendar_events.schemas import EventCreate, EventUpdate, EventResponse
from app.modules.calendar_events.service import CalendarEventService
from app.core.dependencies import require_permission
from supabase import Client
from datetime import datetime
from typing import List, Optional, Dict

router = APIRouter(prefix="/calendar-events", tags=["calendar-events"])


def get_event_service(supabase: Client = Depends(get_supabase)) -> CalendarEventService:
    return CalendarEventService(supabase)


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    event_data: EventCreate,
    user_data: Dict = Depends(require_permission("calendar_events:create")),
    service: CalendarEventService = Depends(get_event_service)
):
    """Schedule an event"""
    return service.create_event(event_data)


@router.get("", response_model=List[EventResponse])
async def list_events(
    salesperson_id: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    limit: int = 500,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("calendar_events:read")),
    service: CalendarEventService = Depends(get_event_service)
):
    """List events in a time window"""
    return service.list_events(salesperson_id=salesperson_id, start=start, end=end, limit=limit, offset=offset)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    user_data: Dict = Depends(require_permission("calendar_events:read")),
    service: CalendarEventService = Depends(get_event_service)
):
    """Get event by ID"""
    return service.get_event_by_id(event_id)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    event_data: EventUpdate,
    user_data: Dict = Depends(require_permission("calendar_events:update")),
    service: CalendarEventService = Depends(get_event_service)
):
    """Update event"""
    return service.update_event(event_id, event_data)


@router.delete("/{event_id}", status_code=204)
async def delete_event(
    event_id: str,
    user_data: Dict = Depends(require_permission("calendar_events:delete")),
    service: CalendarEventService = Depends(get_event_service)
):
    """Delete event"""
    service.delete_event(event_id)
    return None
