from supabase import Client
from app.modules.calendar_events.schemas import EventCreate, EventUpdate, EventResponse
from app.core.query import now_iso, first_row
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _aware(value: datetime) -> datetime:
    # Naive times from the browser are treated as UTC so they compare with stored timestamps
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def check_window(start_time: datetime, end_time: datetime):
    if _aware(end_time) <= _aware(start_time):
        raise HTTPException(status_code=400, detail="End time must be after start time")


class CalendarEventService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_event(self, event_data: EventCreate) -> EventResponse:
        """Create a new calendar event"""
        title = event_data.title.strip()
        if not title:
            raise HTTPException(status_code=400, detail="Event title is required")
        check_window(event_data.start_time, event_data.end_time)
        try:
            result = self.supabase.table("calendar_events").insert({
                "title": title,
                "description": event_data.description or None,
                "start_time": event_data.start_time.isoformat(),
                "end_time": event_data.end_time.isoformat(),
                "salesperson_id": event_data.salesperson_id or None,
                "lead_id": event_data.lead_id or None
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create event")

            return EventResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_event_by_id(self, event_id: str) -> EventResponse:
        """Get event by ID"""
        try:
            result = self.supabase.table("calendar_events")\
                .select("*")\
                .eq("id", event_id)\
                .maybe_single()\
                .execute()

            row = first_row(result)
            if not row:
                raise HTTPException(status_code=404, detail="Event not found")

            return EventResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_events(
        self,
        salesperson_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = 500,
        offset: int = 0
    ) -> List[EventResponse]:
        """List events by start time; start/end select events overlapping the window"""
        try:
            query = self.supabase.table("calendar_events").select("*")
            if salesperson_id and salesperson_id != "all":
                query = query.eq("salesperson_id", salesperson_id)
            if start:
                query = query.gte("end_time", start.isoformat())
            if end:
                query = query.lte("start_time", end.isoformat())

            result = query.order("start_time")\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [EventResponse(**row) for row in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_event(self, event_id: str, event_data: EventUpdate) -> EventResponse:
        """Update event; a changed start or end is validated against the stored other half"""
        update_data = event_data.model_dump(exclude_unset=True)
        if "title" in update_data and not (update_data["title"] or "").strip():
            raise HTTPException(status_code=400, detail="Event title cannot be empty")
        for key, label in (("start_time", "Start time"), ("end_time", "End time")):
            if key in update_data and update_data[key] is None:
                raise HTTPException(status_code=400, detail=f"{label} cannot be empty")

        if not update_data:
            return self.get_event_by_id(event_id)

        if update_data.get("start_time") or update_data.get("end_time"):
            current = self.get_event_by_id(event_id)
            check_window(
                update_data.get("start_time") or current.start_time,
                update_data.get("end_time") or current.end_time
            )
        for key in ("start_time", "end_time"):
            if update_data.get(key):
                update_data[key] = update_data[key].isoformat()

        try:
            update_data["updated_at"] = now_iso()
            result = self.supabase.table("calendar_events")\
                .update(update_data)\
                .eq("id", event_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Event not found")
            return EventResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_event(self, event_id: str) -> bool:
        """Delete event"""
        try:
            result = self.supabase.table("calendar_events")\
                .delete()\
                .eq("id", event_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Event not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
