from supabase import Client
from app.modules.canvassers.schemas import (
    CanvasserCreate, CanvasserUpdate, CanvasserResponse, CanvasserStats
)
from app.modules.canvassing_activities.schemas import LEAD_RESULTS
from app.modules.auth.service import AuthService
from app.core.query import now_iso, ilike_any, first_row
from datetime import date
from typing import List, Optional, Union
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def parse_territories(territories: Optional[Union[List[str], str]]) -> Optional[List[str]]:
    """Split/trim territories and drop blanks; an empty result is stored as null"""
    if territories is None:
        return None
    if isinstance(territories, str):
        territories = territories.split(",")
    cleaned = [t.strip() for t in territories if t and t.strip()]
    return cleaned or None


def compute_stats(results: List[str]) -> CanvasserStats:
    total_visits = len(results)
    leads_generated = sum(1 for r in results if r in LEAD_RESULTS)
    conversion_rate = (leads_generated / total_visits) * 100 if total_visits > 0 else 0.0
    return CanvasserStats(
        total_visits=total_visits,
        leads_generated=leads_generated,
        conversion_rate=round(conversion_rate, 2)
    )


class CanvasserService:
    def __init__(self, supabase: Client, auth_service: Optional[AuthService] = None):
        self.supabase = supabase
        self.auth_service = auth_service

    def create_canvasser(self, data: CanvasserCreate) -> CanvasserResponse:
        """Create the canvasser's login, then the canvasser record"""
        # Auth stores emails lower-cased; the canvasser role is matched on this column
        email = data.email.strip().lower()
        existing = self.supabase.table("canvassers")\
            .select("id")\
            .eq("email", email)\
            .limit(1)\
            .execute()
        if existing.data:
            raise HTTPException(status_code=409, detail="A canvasser with this email already exists")

        if self.auth_service is None:
            raise HTTPException(status_code=500, detail="Auth service not configured")
        user_id = self.auth_service.create_login(email, data.password, {"full_name": data.name})

        try:
            result = self.supabase.table("canvassers").insert({
                "name": data.name.strip(),
                "email": email,
                "phone": data.phone or None,
                "assigned_territories": parse_territories(data.assigned_territories),
                "active": data.active,
                "hire_date": date.today().isoformat(),
                "total_visits": 0,
                "leads_generated": 0,
                "conversion_rate": 0
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create canvasser")
        except Exception as e:
            logger.error("Canvasser insert failed for %s, removing login: %s", email, e)
            self.auth_service.delete_login(user_id)
            if isinstance(e, HTTPException):
                raise
            raise HTTPException(status_code=500, detail=str(e))

        logger.info("Created canvasser %s", email)
        return CanvasserResponse(**result.data[0])

    def get_canvasser_by_id(self, canvasser_id: str) -> CanvasserResponse:
        """Get canvasser by ID"""
        try:
            result = self.supabase.table("canvassers")\
                .select("*")\
                .eq("id", canvasser_id)\
                .maybe_single()\
                .execute()

            row = first_row(result)
            if not row:
                raise HTTPException(status_code=404, detail="Canvasser not found")

            return CanvasserResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_canvassers(self, search: Optional[str] = None, active_only: bool = False,
                        limit: int = 100, offset: int = 0) -> List[CanvasserResponse]:
        """List canvassers newest first; search matches name or email"""
        try:
            query = self.supabase.table("canvassers").select("*")
            if active_only:
                query = query.eq("active", True)
            search_filter = ilike_any(["name", "email"], search)
            if search_filter:
                query = query.or_(search_filter)
            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [CanvasserResponse(**row) for row in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_canvasser(self, canvasser_id: str, data: CanvasserUpdate) -> CanvasserResponse:
        """Update profile fields (email is tied to the login and cannot change here)"""
        try:
            update_data = data.model_dump(exclude_unset=True)
            if "name" in update_data and not update_data["name"]:
                raise HTTPException(status_code=400, detail="Canvasser name cannot be empty")
            if "assigned_territories" in update_data:
                update_data["assigned_territories"] = parse_territories(update_data["assigned_territories"])
            if update_data.get("hire_date"):
                update_data["hire_date"] = update_data["hire_date"].isoformat()

            if not update_data:
                return self.get_canvasser_by_id(canvasser_id)

            update_data["updated_at"] = now_iso()
            result = self.supabase.table("canvassers")\
                .update(update_data)\
                .eq("id", canvasser_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Canvasser not found")
            return CanvasserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def toggle_active(self, canvasser_id: str) -> CanvasserResponse:
        """Activate/deactivate; deactivated canvassers lose portal access on their next request"""
        current = self.get_canvasser_by_id(canvasser_id)
        try:
            result = self.supabase.table("canvassers")\
                .update({"active": not current.active, "updated_at": now_iso()})\
                .eq("id", canvasser_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Canvasser not found")
            logger.info("Canvasser %s %s", canvasser_id, "activated" if not current.active else "deactivated")
            return CanvasserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_canvasser(self, canvasser_id: str) -> bool:
        """Delete canvasser record"""
        try:
            result = self.supabase.table("canvassers")\
                .delete()\
                .eq("id", canvasser_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Canvasser not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def recompute_stats(self, canvasser_id: str) -> Optional[CanvasserStats]:
        """Rebuild total_visits, leads_generated and conversion_rate from activities; errors are logged"""
        try:
            activities = self.supabase.table("canvassing_activities")\
                .select("result")\
                .eq("canvasser_id", canvasser_id)\
                .execute()

            stats = compute_stats([a["result"] for a in activities.data or []])

            self.supabase.table("canvassers")\
                .update({**stats.model_dump(), "updated_at": now_iso()})\
                .eq("id", canvasser_id)\
                .execute()
            return stats
        except Exception as e:
            logger.error(f"Error updating canvasser stats for {canvasser_id}: {e}")
            return None
