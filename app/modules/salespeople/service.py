from supabase import Client
from app.config.catalog import SERVICE_TYPES
from app.modules.salespeople.schemas import (
    SalespersonCreate, SalespersonUpdate, SalespersonResponse
)
from app.core.query import now_iso, first_row
from typing import List, Optional
from fastapi import HTTPException


class SalespersonService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    @staticmethod
    def _normalize_job_types(job_types: Optional[List[str]]) -> List[str]:
        """Drop duplicates while keeping order; reject types the company does not offer"""
        normalized = []
        for job_type in job_types or []:
            if job_type not in SERVICE_TYPES:
                raise HTTPException(status_code=400, detail=f"Unknown job type '{job_type}'")
            if job_type not in normalized:
                normalized.append(job_type)
        return normalized

    def create_salesperson(self, data: SalespersonCreate) -> SalespersonResponse:
        """Create a new salesperson"""
        try:
            result = self.supabase.table("salespeople").insert({
                "name": data.name.strip(),
                "email": data.email,
                "phone": data.phone or None,
                "job_types": self._normalize_job_types(data.job_types),
                "commission_percentage": data.commission_percentage,
                "total_sales": 0,
                "total_profit": 0,
                "active": True
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create salesperson")

            return SalespersonResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_salesperson_by_id(self, salesperson_id: str) -> SalespersonResponse:
        """Get salesperson by ID"""
        try:
            result = self.supabase.table("salespeople")\
                .select("*")\
                .eq("id", salesperson_id)\
                .maybe_single()\
                .execute()

            row = first_row(result)
            if not row:
                raise HTTPException(status_code=404, detail="Salesperson not found")

            return SalespersonResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_salespeople(self, active_only: bool = False, limit: int = 100, offset: int = 0) -> List[SalespersonResponse]:
        """List salespeople newest first"""
        try:
            query = self.supabase.table("salespeople").select("*")
            if active_only:
                query = query.eq("active", True)
            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [SalespersonResponse(**row) for row in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_salesperson(self, salesperson_id: str, data: SalespersonUpdate) -> SalespersonResponse:
        """Update salesperson"""
        try:
            update_data = data.model_dump(exclude_unset=True)
            for required in ("name", "email"):
                if required in update_data and not update_data[required]:
                    raise HTTPException(status_code=400, detail="Name and email are required")
            if "job_types" in update_data:
                update_data["job_types"] = self._normalize_job_types(update_data["job_types"])
            if "phone" in update_data:
                update_data["phone"] = update_data["phone"] or None

            if not update_data:
                return self.get_salesperson_by_id(salesperson_id)

            update_data["updated_at"] = now_iso()
            result = self.supabase.table("salespeople")\
                .update(update_data)\
                .eq("id", salesperson_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Salesperson not found")

            return SalespersonResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def set_active(self, salesperson_id: str, active: Optional[bool] = None) -> SalespersonResponse:
        """Set the active flag; toggles it when `active` is None"""
        try:
            if active is None:
                active = not self.get_salesperson_by_id(salesperson_id).active
            result = self.supabase.table("salespeople")\
                .update({"active": active, "updated_at": now_iso()})\
                .eq("id", salesperson_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Salesperson not found")

            return SalespersonResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_salesperson(self, salesperson_id: str) -> bool:
        """Delete salesperson"""
        try:
            result = self.supabase.table("salespeople")\
                .delete()\
                .eq("id", salesperson_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Salesperson not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
