from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.salespeople.schemas import (
    SalespersonCreate, SalespersonUpdate, SalespersonResponse
)
from app.modules.salespeople.service import SalespersonService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/salespeople", tags=["salespeople"])


def get_salesperson_service(supabase: Client = Depends(get_supabase)) -> SalespersonService:
    return SalespersonService(supabase)


@router.post("", response_model=SalespersonResponse, status_code=201)
async def create_salesperson(
    salesperson_data: SalespersonCreate,
    user_data: Dict = Depends(require_permission("salespeople:create")),
    service: SalespersonService = Depends(get_salesperson_service)
):
    """Create a new salesperson"""
    return service.create_salesperson(salesperson_data)


@router.get("", response_model=List[SalespersonResponse])
async def list_salespeople(
    active_only: bool = False,
    limit: int = 100,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("salespeople:read")),
    service: SalespersonService = Depends(get_salesperson_service)
):
    """List salespeople; active_only=true for assignment pickers"""
    return service.list_salespeople(active_only=active_only, limit=limit, offset=offset)


@router.get("/{salesperson_id}", response_model=SalespersonResponse)
async def get_salesperson(
    salesperson_id: str,
    user_data: Dict = Depends(require_permission("salespeople:read")),
    service: SalespersonService = Depends(get_salesperson_service)
):
    """Get salesperson by ID"""
    return service.get_salesperson_by_id(salesperson_id)


@router.put("/{salesperson_id}", response_model=SalespersonResponse)
async def update_salesperson(
    salesperson_id: str,
    salesperson_data: SalespersonUpdate,
    user_data: Dict = Depends(require_permission("salespeople:update")),
    service: SalespersonService = Depends(get_salesperson_service)
):
    """Update salesperson"""
    return service.update_salesperson(salesperson_id, salesperson_data)


@router.post("/{salesperson_id}/toggle-active", response_model=SalespersonResponse)
async def toggle_salesperson_active(
    salesperson_id: str,
    active: Optional[bool] = None,
    user_data: Dict = Depends(require_permission("salespeople:update")),
    service: SalespersonService = Depends(get_salesperson_service)
):
    """Activate or deactivate a salesperson (toggles when active is omitted)"""
    return service.set_active(salesperson_id, active)


@router.delete("/{salesperson_id}", status_code=204)
async def delete_salesperson(
    salesperson_id: str,
    user_data: Dict = Depends(require_permission("salespeople:delete")),
    service: SalespersonService = Depends(get_salesperson_service)
):
    """Delete salesperson"""
    service.delete_salesperson(salesperson_id)
    return None
