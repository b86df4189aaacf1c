from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.inventory.schemas import (
    InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse, QuantityAdjust
)
from app.modules.inventory.service import InventoryService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/inventory", tags=["inventory"])


def get_inventory_service(supabase: Client = Depends(get_supabase)) -> InventoryService:
    return InventoryService(supabase)


@router.post("", response_model=InventoryItemResponse, status_code=201)
async def create_item(
    item_data: InventoryItemCreate,
    user_data: Dict = Depends(require_permission("inventory:create")),
    service: InventoryService = Depends(get_inventory_service)
):
    """Add an inventory item"""
    return service.create_item(item_data)


@router.get("", response_model=List[InventoryItemResponse])
async def list_items(
    search: Optional[str] = None,
    low_stock: bool = False,
    limit: int = 200,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("inventory:read")),
    service: InventoryService = Depends(get_inventory_service)
):
    """List inventory with stock status"""
    return service.list_items(search=search, low_stock=low_stock, limit=limit, offset=offset)


@router.get("/{item_id}", response_model=InventoryItemResponse)
async def get_item(
    item_id: str,
    user_data: Dict = Depends(require_permission("inventory:read")),
    service: InventoryService = Depends(get_inventory_service)
):
    """Get inventory item by ID"""
    return service.get_item_by_id(item_id)


@router.put("/{item_id}", response_model=InventoryItemResponse)
async def update_item(
    item_id: str,
    item_data: InventoryItemUpdate,
    user_data: Dict = Depends(require_permission("inventory:update")),
    service: InventoryService = Depends(get_inventory_service)
):
    """Update inventory item"""
    return service.update_item(item_id, item_data)


@router.post("/{item_id}/adjust", response_model=InventoryItemResponse)
async def adjust_quantity(
    item_id: str,
    adjust: QuantityAdjust,
    user_data: Dict = Depends(require_permission("inventory:update")),
    service: InventoryService = Depends(get_inventory_service)
):
    """Receive or consume stock"""
    return service.adjust_quantity(item_id, adjust.delta)


@router.delete("/{item_id}", status_code=204)
async def delete_item(
    item_id: str,
    user_data: Dict = Depends(require_permission("inventory:delete")),
    service: InventoryService = Depends(get_inventory_service)
):
    """Delete inventory item"""
    service.delete_item(item_id)
    return None
