from fastapi import APIRouter, Depends
from app.config.catalog import SERVICE_TYPES
from app.database.supabase_client import get_supabase
from app.modules.quotes.schemas import (
    QuoteCreate, QuoteUpdate, QuoteStatusUpdate, QuoteResponse, QuoteSummary, QUOTE_STATUSES
)
from app.modules.quotes.service import QuoteService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/quotes", tags=["quotes"])


def get_quote_service(supabase: Client = Depends(get_supabase)) -> QuoteService:
    return QuoteService(supabase)


@router.get("/options")
async def get_quote_options(
    user_data: Dict = Depends(require_permission("quotes:read"))
):
    """Service types and statuses accepted by quote forms"""
    return {"service_types": SERVICE_TYPES, "statuses": QUOTE_STATUSES}


@router.get("/summary", response_model=QuoteSummary)
async def get_quote_summary(
    user_data: Dict = Depends(require_permission("quotes:read")),
    service: QuoteService = Depends(get_quote_service)
):
    """Quote counts per status and pending value"""
    return service.get_summary()


@router.post("", response_model=QuoteResponse, status_code=201)
async def create_quote(
    quote_data: QuoteCreate,
    user_data: Dict = Depends(require_permission("quotes:create")),
    service: QuoteService = Depends(get_quote_service)
):
    """Create a new quote"""
    return service.create_quote(quote_data)


@router.get("", response_model=List[QuoteResponse])
async def list_quotes(
    status: Optional[str] = None,
    lead_id: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("quotes:read")),
    service: QuoteService = Depends(get_quote_service)
):
    """List quotes"""
    return service.list_quotes(status=status, lead_id=lead_id, limit=limit, offset=offset)


@router.get("/{quote_id}", response_model=QuoteResponse)
async def get_quote(
    quote_id: str,
    user_data: Dict = Depends(require_permission("quotes:read")),
    service: QuoteService = Depends(get_quote_service)
):
    """Get quote by ID"""
    return service.get_quote_by_id(quote_id)


@router.put("/{quote_id}", response_model=QuoteResponse)
async def update_quote(
    quote_id: str,
    quote_data: QuoteUpdate,
    user_data: Dict = Depends(require_permission("quotes:update")),
    service: QuoteService = Depends(get_quote_service)
):
    """Update quote"""
    return service.update_quote(quote_id, quote_data)


@router.patch("/{quote_id}/status", response_model=QuoteResponse)
async def update_quote_status(
    quote_id: str,
    status_data: QuoteStatusUpdate,
    user_data: Dict = Depends(require_permission("quotes:update")),
    service: QuoteService = Depends(get_quote_service)
):
    """Change quote status"""
    return service.update_status(quote_id, status_data.status)


@router.delete("/{quote_id}", status_code=204)
async def delete_quote(
    quote_id: str,
    user_data: Dict = Depends(require_permission("quotes:delete")),
    service: QuoteService = Depends(get_quote_service)
):
    """Delete quote"""
    service.delete_quote(quote_id)
    return None
