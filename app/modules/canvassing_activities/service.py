from supabase import Client
from app.modules.canvassing_activities.schemas import (
    ActivityCreate, ActivityResponse, ACTIVITY_RESULTS, normalize_result
)
from app.core.query import now_iso
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ActivityService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _canvasser_exists(self, canvasser_id: str) -> bool:
        result = self.supabase.table("canvassers")\
            .select("id")\
            .eq("id", canvasser_id)\
            .limit(1)\
            .execute()
        return bool(result.data)

    def create_activity(self, activity_data: ActivityCreate, recompute_stats: bool = True) -> ActivityResponse:
        """Record a visit, then refresh the canvasser's visit/lead/conversion stats"""
        result_value = normalize_result(activity_data.result)
        if result_value is None:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid result '{activity_data.result}'. Allowed: {', '.join(ACTIVITY_RESULTS)}"
            )
        address = activity_data.address.strip()
        if not address:
            raise HTTPException(status_code=400, detail="Canvasser, address, and result are required")

        try:
            if not self._canvasser_exists(activity_data.canvasser_id):
                raise HTTPException(status_code=404, detail="Canvasser not found")

            followup_priority = None
            if activity_data.requires_followup:
                followup_priority = activity_data.followup_priority or 1

            result = self.supabase.table("canvassing_activities").insert({
                "canvasser_id": activity_data.canvasser_id,
                "address": address,
                "zip_code": (activity_data.zip_code or "").strip() or None,
                "result": result_value,
                "notes": (activity_data.notes or "").strip() or None,
                "requires_followup": activity_data.requires_followup,
                "followup_priority": followup_priority,
                "visit_date": activity_data.visit_date.isoformat() if activity_data.visit_date else now_iso()
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to log activity")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if recompute_stats:
            from app.modules.canvassers.service import CanvasserService
            CanvasserService(self.supabase).recompute_stats(activity_data.canvasser_id)

        return ActivityResponse(**result.data[0])

    def list_activities(
        self,
        canvasser_id: Optional[str] = None,
        result: Optional[str] = None,
        requires_followup: Optional[bool] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[ActivityResponse]:
        """List activities, most recent visit first"""
        try:
            query = self.supabase.table("canvassing_activities").select("*")
            if canvasser_id and canvasser_id != "all":
                query = query.eq("canvasser_id", canvasser_id)
            if result and result != "all":
                result_value = normalize_result(result)
                if result_value is None:
                    raise HTTPException(status_code=400, detail=f"Invalid result '{result}'")
                query = query.eq("result", result_value)
            if requires_followup is not None:
                query = query.eq("requires_followup", requires_followup)

            rows = query.order("visit_date", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [ActivityResponse(**row) for row in rows.data]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_activity(self, activity_id: str) -> bool:
        """Delete an activity and refresh the owning canvasser's stats"""
        try:
            result = self.supabase.table("canvassing_activities")\
                .delete()\
                .eq("id", activity_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Activity not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        from app.modules.canvassers.service import CanvasserService
        CanvasserService(self.supabase).recompute_stats(result.data[0]["canvasser_id"])
        return True
