from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.canvassing_activities.schemas import ActivityCreate, ActivityResponse, ACTIVITY_RESULTS
from app.modules.canvassing_activities.service import ActivityService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/canvassing-activities", tags=["canvassing-activities"])


def get_activity_service(supabase: Client = Depends(get_supabase)) -> ActivityService:
    return ActivityService(supabase)


@router.get("/results")
async def list_activity_results(
    user_data: Dict = Depends(require_permission("canvassing_activities:read"))
):
    """Visit results with their display labels"""
    return [{"value": value, "label": label} for value, label in ACTIVITY_RESULTS.items()]


@router.post("", response_model=ActivityResponse, status_code=201)
async def create_activity(
    activity_data: ActivityCreate,
    user_data: Dict = Depends(require_permission("canvassing_activities:create")),
    service: ActivityService = Depends(get_activity_service)
):
    """Log a visit on behalf of a canvasser"""
    return service.create_activity(activity_data)


@router.get("", response_model=List[ActivityResponse])
async def list_activities(
    canvasser_id: Optional[str] = None,
    result: Optional[str] = None,
    requires_followup: Optional[bool] = None,
    limit: int = 100,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("canvassing_activities:read")),
    service: ActivityService = Depends(get_activity_service)
):
    """List canvassing activities filtered by canvasser and result"""
    return service.list_activities(
        canvasser_id=canvasser_id,
        result=result,
        requires_followup=requires_followup,
        limit=limit,
        offset=offset
    )


@router.delete("/{activity_id}", status_code=204)
async def delete_activity(
    activity_id: str,
    user_data: Dict = Depends(require_permission("canvassing_activities:delete")),
    service: ActivityService = Depends(get_activity_service)
):
    """Delete a canvassing activity"""
    service.delete_activity(activity_id)
    return None
