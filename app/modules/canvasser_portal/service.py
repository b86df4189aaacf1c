from supabase import Client
from app.modules.canvasser_portal.schemas import (
    FieldActivityCreate, FieldLeadCreate, FieldLeadResponse, ScheduleItemUpdate,
    ScheduleItemResponse, TimeEntryResponse, TimeSummary, SCHEDULE_OUTCOMES
)
from app.modules.canvassers.schemas import CanvasserResponse
from app.modules.canvassers.service import CanvasserService
from app.modules.canvassing_activities.schemas import ActivityCreate, ActivityResponse, normalize_result
from app.modules.canvassing_activities.service import ActivityService
from app.modules.leads.schemas import LeadCreate
from app.modules.leads.service import LeadService
from app.core.query import first_row, parse_timestamp
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

RECENT_TIME_ENTRIES = 10


class CanvasserPortalService:
    """Field operations scoped to the signed-in canvasser"""

    def __init__(self, supabase: Client, canvasser: Dict[str, Any]):
        self.supabase = supabase
        self.canvasser = canvasser
        self.canvasser_id = canvasser["id"]

    # Profile

    def get_profile(self) -> CanvasserResponse:
        return CanvasserService(self.supabase).get_canvasser_by_id(self.canvasser_id)

    # Activities

    def log_activity(self, data: FieldActivityCreate) -> ActivityResponse:
        return ActivityService(self.supabase).create_activity(ActivityCreate(
            canvasser_id=self.canvasser_id,
            **data.model_dump()
        ))

    def list_activities(self, limit: int = 50) -> List[ActivityResponse]:
        return ActivityService(self.supabase).list_activities(canvasser_id=self.canvasser_id, limit=limit)

    def submit_lead(self, data: FieldLeadCreate) -> FieldLeadResponse:
        """Record a door-to-door lead and the visit that produced it"""
        result_value = normalize_result(data.result)
        if result_value is None:
            raise HTTPException(status_code=400, detail=f"Invalid result '{data.result}'")

        lead = LeadService(self.supabase).create_lead(LeadCreate(
            name=data.name,
            email=data.email,
            phone=data.phone,
            service=data.service,
            message=(data.message or "").strip() or f"Canvassed at {data.address.strip()}"
        ), canvasser_id=self.canvasser_id)

        activity = ActivityService(self.supabase).create_activity(ActivityCreate(
            canvasser_id=self.canvasser_id,
            address=data.address,
            result=result_value,
            notes=f"Lead generated: {data.name} - {data.service}",
            requires_followup=result_value == "interested"
        ))
        logger.info("Canvasser %s submitted lead %s", self.canvasser_id, lead.id)
        return FieldLeadResponse(lead_id=lead.id, activity_id=activity.id)

    # Daily schedule

    def get_schedule(self, day: Optional[date] = None) -> List[ScheduleItemResponse]:
        day = day or datetime.now(timezone.utc).date()
        try:
            result = self.supabase.table("daily_schedules")\
                .select("*")\
                .eq("canvasser_id", self.canvasser_id)\
                .eq("assigned_date", day.isoformat())\
                .order("created_at")\
                .execute()
            return [ScheduleItemResponse(**row) for row in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_schedule_item(self, item_id: str, data: ScheduleItemUpdate) -> ScheduleItemResponse:
        """Mark one of today's addresses completed or skipped"""
        if data.status not in SCHEDULE_OUTCOMES:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid status '{data.status}'. Allowed: {', '.join(SCHEDULE_OUTCOMES)}"
            )
        try:
            existing = self.supabase.table("daily_schedules")\
                .select("*")\
                .eq("id", item_id)\
                .eq("canvasser_id", self.canvasser_id)\
                .maybe_single()\
                .execute()
            row = first_row(existing)
            if not row:
                raise HTTPException(status_code=404, detail="Schedule item not found")
            if row.get("status", "pending") != "pending":
                raise HTTPException(status_code=409, detail=f"Schedule item already {row['status']}")

            result = self.supabase.table("daily_schedules")\
                .update({
                    "status": data.status,
                    "completion_time": datetime.now(timezone.utc).isoformat(),
                    "notes": (data.notes or "").strip() or None
                })\
                .eq("id", item_id)\
                .eq("canvasser_id", self.canvasser_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Schedule item not found")
            return ScheduleItemResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    # Time tracking

    def _open_entry(self) -> Optional[dict]:
        result = self.supabase.table("time_entries")\
            .select("*")\
            .eq("canvasser_id", self.canvasser_id)\
            .is_("clock_out", "null")\
            .order("clock_in", desc=True)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def clock_in(self, now: Optional[datetime] = None) -> TimeEntryResponse:
        now = now or datetime.now(timezone.utc)
        try:
            if self._open_entry():
                raise HTTPException(status_code=409, detail="Already clocked in")

            result = self.supabase.table("time_entries").insert({
                "canvasser_id": self.canvasser_id,
                "clock_in": now.isoformat()
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to clock in")
            logger.info("Canvasser %s clocked in", self.canvasser_id)
            return TimeEntryResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def clock_out(self, now: Optional[datetime] = None) -> TimeEntryResponse:
        now = now or datetime.now(timezone.utc)
        try:
            entry = self._open_entry()
            if not entry:
                raise HTTPException(status_code=409, detail="Not clocked in")

            elapsed = now - parse_timestamp(entry["clock_in"])
            total_hours = round(max(elapsed.total_seconds(), 0) / 3600, 2)

            result = self.supabase.table("time_entries")\
                .update({"clock_out": now.isoformat(), "total_hours": total_hours})\
                .eq("id", entry["id"])\
                .execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to clock out")
            logger.info("Canvasser %s clocked out after %.2fh", self.canvasser_id, total_hours)
            return TimeEntryResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def time_summary(self, now: Optional[datetime] = None) -> TimeSummary:
        """Recent entries, the open session (if any) and hours worked today"""
        now = now or datetime.now(timezone.utc)
        try:
            result = self.supabase.table("time_entries")\
                .select("*")\
                .eq("canvasser_id", self.canvasser_id)\
                .order("clock_in", desc=True)\
                .limit(RECENT_TIME_ENTRIES)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        entries = [TimeEntryResponse(**row) for row in result.data or []]
        active = next((entry for entry in entries if entry.clock_out is None), None)

        today_hours = 0.0
        for entry in entries:
            clock_in = parse_timestamp(entry.clock_in)
            if clock_in.date() != now.date():
                continue
            if entry.clock_out is None:
                today_hours += max((now - clock_in).total_seconds(), 0) / 3600
            else:
                today_hours += entry.total_hours or 0

        return TimeSummary(active_entry=active, entries=entries, today_hours=round(today_hours, 2))
