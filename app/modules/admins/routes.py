from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.admins.schemas import AdminCreate, AdminResponse
from app.modules.admins.service import AdminService
from app.modules.auth.service import AuthService
from app.core.dependencies import require_permission, get_auth_service
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/admins", tags=["admins"])


def get_admin_service(
    supabase: Client = Depends(get_supabase),
    auth_service: AuthService = Depends(get_auth_service)
) -> AdminService:
    return AdminService(supabase, auth_service)


@router.get("", response_model=List[AdminResponse])
async def list_admins(
    user_data: Dict = Depends(require_permission("admins:read")),
    service: AdminService = Depends(get_admin_service)
):
    """List admin accounts"""
    return service.list_admins()


@router.post("", response_model=AdminResponse, status_code=201)
async def create_admin(
    admin_data: AdminCreate,
    user_data: Dict = Depends(require_permission("admins:create")),
    service: AdminService = Depends(get_admin_service)
):
    """Create a new admin login"""
    return service.create_admin(admin_data)


@router.delete("/{admin_id}", status_code=204)
async def delete_admin(
    admin_id: str,
    user_data: Dict = Depends(require_permission("admins:delete")),
    service: AdminService = Depends(get_admin_service)
):
    """Remove an admin"""
    service.delete_admin(admin_id, user_data["id"])
    return None
