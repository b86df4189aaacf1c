from fastapi import APIRouter, Depends, HTTPException
from app.database.supabase_client import get_supabase
from app.modules.canvassers.schemas import (
    CanvasserCreate, CanvasserUpdate, CanvasserResponse, CanvasserStats
)
from app.modules.canvassers.service import CanvasserService
from app.modules.auth.service import AuthService
from app.core.dependencies import require_permission, get_auth_service
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/canvassers", tags=["canvassers"])


def get_canvasser_service(
    supabase: Client = Depends(get_supabase),
    auth_service: AuthService = Depends(get_auth_service)
) -> CanvasserService:
    return CanvasserService(supabase, auth_service)


@router.post("", response_model=CanvasserResponse, status_code=201)
async def create_canvasser(
    canvasser_data: CanvasserCreate,
    user_data: Dict = Depends(require_permission("canvassers:create")),
    service: CanvasserService = Depends(get_canvasser_service)
):
    """Create a canvasser together with a confirmed login"""
    return service.create_canvasser(canvasser_data)


@router.get("", response_model=List[CanvasserResponse])
async def list_canvassers(
    search: Optional[str] = None,
    active_only: bool = False,
    limit: int = 100,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("canvassers:read")),
    service: CanvasserService = Depends(get_canvasser_service)
):
    """List canvassers"""
    return service.list_canvassers(search=search, active_only=active_only, limit=limit, offset=offset)


@router.get("/{canvasser_id}", response_model=CanvasserResponse)
async def get_canvasser(
    canvasser_id: str,
    user_data: Dict = Depends(require_permission("canvassers:read")),
    service: CanvasserService = Depends(get_canvasser_service)
):
    """Get canvasser by ID"""
    return service.get_canvasser_by_id(canvasser_id)


@router.put("/{canvasser_id}", response_model=CanvasserResponse)
async def update_canvasser(
    canvasser_id: str,
    canvasser_data: CanvasserUpdate,
    user_data: Dict = Depends(require_permission("canvassers:update")),
    service: CanvasserService = Depends(get_canvasser_service)
):
    """Update canvasser profile"""
    return service.update_canvasser(canvasser_id, canvasser_data)


@router.post("/{canvasser_id}/toggle-active", response_model=CanvasserResponse)
async def toggle_canvasser_active(
    canvasser_id: str,
    user_data: Dict = Depends(require_permission("canvassers:update")),
    service: CanvasserService = Depends(get_canvasser_service)
):
    """Activate or deactivate a canvasser"""
    return service.toggle_active(canvasser_id)


@router.post("/{canvasser_id}/recompute-stats", response_model=CanvasserStats)
async def recompute_canvasser_stats(
    canvasser_id: str,
    user_data: Dict = Depends(require_permission("canvassers:update")),
    service: CanvasserService = Depends(get_canvasser_service)
):
    """Rebuild visit, lead and conversion stats from logged activities"""
    service.get_canvasser_by_id(canvasser_id)
    stats = service.recompute_stats(canvasser_id)
    if stats is None:
        raise HTTPException(status_code=500, detail="Failed to update canvasser stats")
    return stats


@router.delete("/{canvasser_id}", status_code=204)
async def delete_canvasser(
    canvasser_id: str,
    user_data: Dict = Depends(require_permission("canvassers:delete")),
    service: CanvasserService = Depends(get_canvasser_service)
):
    """Delete canvasser"""
    service.delete_canvasser(canvasser_id)
    return None
