from supabase import Client
from app.modules.leads.schemas import (
    LeadCreate, LeadUpdate, LeadResponse, LEAD_STATUSES
)
from app.core.query import now_iso, ilike_any, first_row
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class LeadService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    @staticmethod
    def _check_status(status: str):
        if status not in LEAD_STATUSES:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid lead status '{status}'. Allowed: {', '.join(LEAD_STATUSES)}"
            )

    def _check_salesperson(self, salesperson_id: Optional[str]):
        if not salesperson_id:
            return
        result = self.supabase.table("salespeople")\
            .select("id")\
            .eq("id", salesperson_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Salesperson not found")

    def create_lead(self, lead_data: LeadCreate, canvasser_id: Optional[str] = None) -> LeadResponse:
        """Create a new lead in status New"""
        try:
            self._check_salesperson(lead_data.salesperson_id)
            result = self.supabase.table("leads").insert({
                "name": lead_data.name.strip(),
                "email": lead_data.email,
                "phone": lead_data.phone or None,
                "service": lead_data.service or None,
                "message": lead_data.message,
                "salesperson_id": lead_data.salesperson_id,
                "canvasser_id": canvasser_id,
                "status": "New"
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create lead")

            logger.info("Created lead %s", result.data[0]["id"])
            return LeadResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_lead_by_id(self, lead_id: str) -> LeadResponse:
        """Get lead by ID"""
        try:
            result = self.supabase.table("leads")\
                .select("*")\
                .eq("id", lead_id)\
                .maybe_single()\
                .execute()

            row = first_row(result)
            if not row:
                raise HTTPException(status_code=404, detail="Lead not found")

            return LeadResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_leads(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        salesperson_id: Optional[str] = None,
        canvasser_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> List[LeadResponse]:
        """List leads newest first; search matches name, email or service"""
        try:
            query = self.supabase.table("leads").select("*")

            if status and status != "all":
                self._check_status(status)
                query = query.eq("status", status)
            if salesperson_id:
                query = query.eq("salesperson_id", salesperson_id)
            if canvasser_id:
                query = query.eq("canvasser_id", canvasser_id)
            search_filter = ilike_any(["name", "email", "service"], search)
            if search_filter:
                query = query.or_(search_filter)

            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()

            return [LeadResponse(**lead) for lead in result.data]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_lead(self, lead_id: str, lead_data: LeadUpdate) -> LeadResponse:
        """Update lead fields; unset fields are left untouched"""
        try:
            update_data = lead_data.model_dump(exclude_unset=True)
            if "status" in update_data:
                if update_data["status"] is None:
                    raise HTTPException(status_code=400, detail="Lead status cannot be empty")
                self._check_status(update_data["status"])
            for required in ("name", "email", "message"):
                if required in update_data and not update_data[required]:
                    raise HTTPException(status_code=400, detail=f"Lead {required} cannot be empty")
            if update_data.get("salesperson_id"):
                self._check_salesperson(update_data["salesperson_id"])

            if not update_data:
                return self.get_lead_by_id(lead_id)

            update_data["updated_at"] = now_iso()
            result = self.supabase.table("leads")\
                .update(update_data)\
                .eq("id", lead_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Lead not found")

            return LeadResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_status(self, lead_id: str, status: str) -> LeadResponse:
        """Move a lead to another status"""
        self._check_status(status)
        return self.update_lead(lead_id, LeadUpdate(status=status))

    def assign_salesperson(self, lead_id: str, salesperson_id: Optional[str]) -> LeadResponse:
        """Assign (or clear with None) the salesperson working a lead"""
        try:
            self._check_salesperson(salesperson_id)
            result = self.supabase.table("leads")\
                .update({"salesperson_id": salesperson_id, "updated_at": now_iso()})\
                .eq("id", lead_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Lead not found")

            return LeadResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_lead(self, lead_id: str) -> bool:
        """Delete lead"""
        try:
            result = self.supabase.table("leads")\
                .delete()\
                .eq("id", lead_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Lead not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
