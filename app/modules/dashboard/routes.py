from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.dashboard.schemas import DashboardStats
from app.modules.dashboard.service import DashboardService
from app.core.dependencies import require_permission
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_supabase)) -> DashboardService:
    return DashboardService(supabase)


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    user_data: Dict = Depends(require_permission("dashboard:read")),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Overview counts for the admin dashboard"""
    return service.get_stats()
