from supabase import Client
from app.modules.admins.schemas import AdminCreate, AdminResponse
from app.modules.auth.service import AuthService
from app.core.query import first_row
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, supabase: Client, auth_service: Optional[AuthService] = None):
        self.supabase = supabase
        self.auth_service = auth_service

    def list_admins(self) -> List[AdminResponse]:
        try:
            result = self.supabase.table("admins")\
                .select("*")\
                .order("created_at")\
                .execute()
            return [AdminResponse(**row) for row in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_admin(self, data: AdminCreate) -> AdminResponse:
        """Create a login and grant it admin access"""
        username = data.username.strip()
        existing = self.supabase.table("admins")\
            .select("id")\
            .eq("username", username)\
            .limit(1)\
            .execute()
        if existing.data:
            raise HTTPException(status_code=409, detail="Username already taken")

        if self.auth_service is None:
            raise HTTPException(status_code=500, detail="Auth service not configured")
        user_id = self.auth_service.create_login(data.email, data.password, {"username": username})

        try:
            result = self.supabase.table("admins").insert({
                "user_id": user_id,
                "username": username
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create admin")
        except Exception as e:
            logger.error("Admin insert failed for %s, removing login: %s", username, e)
            self.auth_service.delete_login(user_id)
            if isinstance(e, HTTPException):
                raise
            raise HTTPException(status_code=500, detail=str(e))

        logger.info("Created admin %s", username)
        return AdminResponse(**result.data[0])

    def delete_admin(self, admin_id: str, current_user_id: str) -> bool:
        """Revoke admin access; the last admin and the caller's own row are protected"""
        try:
            result = self.supabase.table("admins")\
                .select("*")\
                .eq("id", admin_id)\
                .maybe_single()\
                .execute()
            target = first_row(result)
            if not target:
                raise HTTPException(status_code=404, detail="Admin not found")

            if target["user_id"] == current_user_id:
                raise HTTPException(status_code=400, detail="You cannot delete your own admin account")

            total = self.supabase.table("admins").select("id", count="exact").execute()
            admin_count = total.count if total.count is not None else len(total.data or [])
            if admin_count <= 1:
                raise HTTPException(status_code=400, detail="Cannot delete the last admin")

            self.supabase.table("admins")\
                .delete()\
                .eq("id", admin_id)\
                .execute()
            logger.info("Removed admin %s", target["username"])
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
