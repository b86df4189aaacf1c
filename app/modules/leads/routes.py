from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.leads.schemas import (
    LeadCreate, LeadUpdate, LeadStatusUpdate, LeadAssign, LeadResponse, LEAD_STATUSES
)
from app.modules.leads.service import LeadService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/leads", tags=["leads"])


def get_lead_service(supabase: Client = Depends(get_supabase)) -> LeadService:
    return LeadService(supabase)


@router.get("/statuses", response_model=List[str])
async def list_lead_statuses(
    user_data: Dict = Depends(require_permission("leads:read"))
):
    """Allowed lead statuses, in pipeline order"""
    return LEAD_STATUSES


@router.post("", response_model=LeadResponse, status_code=201)
async def create_lead(
    lead_data: LeadCreate,
    user_data: Dict = Depends(require_permission("leads:create")),
    service: LeadService = Depends(get_lead_service)
):
    """Create a new lead"""
    return service.create_lead(lead_data)


@router.get("", response_model=List[LeadResponse])
async def list_leads(
    search: Optional[str] = None,
    status: Optional[str] = None,
    salesperson_id: Optional[str] = None,
    canvasser_id: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("leads:read")),
    service: LeadService = Depends(get_lead_service)
):
    """List leads, optionally searched and filtered by status"""
    return service.list_leads(
        search=search,
        status=status,
        salesperson_id=salesperson_id,
        canvasser_id=canvasser_id,
        limit=limit,
        offset=offset
    )


@router.get("/{lead_id}", response_model=LeadResponse)
async def get_lead(
    lead_id: str,
    user_data: Dict = Depends(require_permission("leads:read")),
    service: LeadService = Depends(get_lead_service)
):
    """Get lead by ID"""
    return service.get_lead_by_id(lead_id)


@router.put("/{lead_id}", response_model=LeadResponse)
async def update_lead(
    lead_id: str,
    lead_data: LeadUpdate,
    user_data: Dict = Depends(require_permission("leads:update")),
    service: LeadService = Depends(get_lead_service)
):
    """Update lead"""
    return service.update_lead(lead_id, lead_data)


@router.patch("/{lead_id}/status", response_model=LeadResponse)
async def update_lead_status(
    lead_id: str,
    status_data: LeadStatusUpdate,
    user_data: Dict = Depends(require_permission("leads:update")),
    service: LeadService = Depends(get_lead_service)
):
    """Change lead status"""
    return service.update_status(lead_id, status_data.status)


@router.patch("/{lead_id}/salesperson", response_model=LeadResponse)
async def assign_lead_salesperson(
    lead_id: str,
    assign_data: LeadAssign,
    user_data: Dict = Depends(require_permission("leads:update")),
    service: LeadService = Depends(get_lead_service)
):
    """Assign or unassign the lead's salesperson"""
    return service.assign_salesperson(lead_id, assign_data.salesperson_id)


@router.delete("/{lead_id}", status_code=204)
async def delete_lead(
    lead_id: str,
    user_data: Dict = Depends(require_permission("leads:delete")),
    service: LeadService = Depends(get_lead_service)
):
    """Delete lead"""
    service.delete_lead(lead_id)
    return None
