from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.modules.canvasser_portal.schemas import (
    FieldActivityCreate, FieldLeadCreate, FieldLeadResponse, ScheduleItemUpdate,
    ScheduleItemResponse, TimeEntryResponse, TimeSummary
)
from app.modules.canvasser_portal.service import CanvasserPortalService
from app.modules.canvassers.schemas import CanvasserResponse
from app.modules.canvassing_activities.schemas import ActivityResponse
from app.core.dependencies import require_canvasser
from supabase import Client
from datetime import date
from typing import List, Optional, Dict

router = APIRouter(prefix="/canvasser", tags=["canvasser-portal"])


def portal_service(permission: str):
    """Portal service bound to the active canvasser holding `permission`"""
    def build(
        canvasser: Dict = Depends(require_canvasser(permission)),
        supabase: Client = Depends(get_supabase)
    ) -> CanvasserPortalService:
        return CanvasserPortalService(supabase, canvasser)
    return build


@router.get("/me", response_model=CanvasserResponse)
async def get_my_profile(
    service: CanvasserPortalService = Depends(portal_service("field:log_activity"))
):
    """Signed-in canvasser's profile and stats"""
    return service.get_profile()


@router.post("/activities", response_model=ActivityResponse, status_code=201)
async def log_activity(
    activity_data: FieldActivityCreate,
    service: CanvasserPortalService = Depends(portal_service("field:log_activity"))
):
    """Log a door visit"""
    return service.log_activity(activity_data)


@router.get("/activities", response_model=List[ActivityResponse])
async def list_my_activities(
    limit: int = 50,
    service: CanvasserPortalService = Depends(portal_service("field:log_activity"))
):
    """Own visits, newest first"""
    return service.list_activities(limit=limit)


@router.post("/leads", response_model=FieldLeadResponse, status_code=201)
async def submit_lead(
    lead_data: FieldLeadCreate,
    service: CanvasserPortalService = Depends(portal_service("field:submit_lead"))
):
    """Submit a lead captured at the door"""
    return service.submit_lead(lead_data)


@router.get("/schedule", response_model=List[ScheduleItemResponse])
async def get_schedule(
    day: Optional[date] = Query(None, alias="date"),
    service: CanvasserPortalService = Depends(portal_service("field:schedule"))
):
    """Addresses assigned for today (or the given date)"""
    return service.get_schedule(day)


@router.post("/schedule/{item_id}", response_model=ScheduleItemResponse)
async def update_schedule_item(
    item_id: str,
    update: ScheduleItemUpdate,
    service: CanvasserPortalService = Depends(portal_service("field:schedule"))
):
    """Mark an assigned address completed or skipped"""
    return service.update_schedule_item(item_id, update)


@router.post("/time/clock-in", response_model=TimeEntryResponse, status_code=201)
async def clock_in(
    service: CanvasserPortalService = Depends(portal_service("field:time_tracking"))
):
    """Start a work session"""
    return service.clock_in()


@router.post("/time/clock-out", response_model=TimeEntryResponse)
async def clock_out(
    service: CanvasserPortalService = Depends(portal_service("field:time_tracking"))
):
    """End the open work session"""
    return service.clock_out()


@router.get("/time", response_model=TimeSummary)
async def get_time_summary(
    service: CanvasserPortalService = Depends(portal_service("field:time_tracking"))
):
    """Recent time entries and hours worked today"""
    return service.time_summary()
