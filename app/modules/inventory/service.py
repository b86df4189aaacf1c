from supabase import Client
from app.modules.inventory.schemas import (
    InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse, STOCK_LOW
)
from app.core.query import now_iso, ilike_any, first_row
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class InventoryService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_item(self, item_data: InventoryItemCreate) -> InventoryItemResponse:
        """Create a new inventory item"""
        try:
            payload = item_data.model_dump()
            payload["name"] = payload["name"].strip()
            result = self.supabase.table("inventory").insert(payload).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create inventory item")

            return InventoryItemResponse.from_row(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_item_by_id(self, item_id: str) -> InventoryItemResponse:
        """Get inventory item by ID"""
        try:
            result = self.supabase.table("inventory")\
                .select("*")\
                .eq("id", item_id)\
                .maybe_single()\
                .execute()

            row = first_row(result)
            if not row:
                raise HTTPException(status_code=404, detail="Inventory item not found")

            return InventoryItemResponse.from_row(row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_items(self, search: Optional[str] = None, low_stock: bool = False,
                   limit: int = 200, offset: int = 0) -> List[InventoryItemResponse]:
        """
        List items by name. low_stock keeps only items at or below their
        reorder threshold; the comparison is between two columns so it is
        applied after the select.
        """
        try:
            query = self.supabase.table("inventory").select("*")
            search_filter = ilike_any(["name", "category", "supplier"], search)
            if search_filter:
                query = query.or_(search_filter)
            result = query.order("name")\
                .limit(limit)\
                .offset(offset)\
                .execute()

            items = [InventoryItemResponse.from_row(row) for row in result.data]
            if low_stock:
                items = [item for item in items if item.stock_status == STOCK_LOW]
            return items
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_item(self, item_id: str, item_data: InventoryItemUpdate) -> InventoryItemResponse:
        """Update inventory item"""
        try:
            update_data = item_data.model_dump(exclude_unset=True)
            if "name" in update_data and not (update_data["name"] or "").strip():
                raise HTTPException(status_code=400, detail="Item name cannot be empty")
            for required in ("quantity", "min_stock"):
                if required in update_data and update_data[required] is None:
                    raise HTTPException(status_code=400, detail=f"Item {required} cannot be empty")

            if not update_data:
                return self.get_item_by_id(item_id)

            update_data["updated_at"] = now_iso()
            result = self.supabase.table("inventory")\
                .update(update_data)\
                .eq("id", item_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Inventory item not found")
            return InventoryItemResponse.from_row(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def adjust_quantity(self, item_id: str, delta: int) -> InventoryItemResponse:
        """Add (or remove, with a negative delta) stock"""
        current = self.get_item_by_id(item_id)
        new_quantity = current.quantity + delta
        if new_quantity < 0:
            raise HTTPException(
                status_code=400,
                detail=f"Only {current.quantity} {current.unit or 'units'} of {current.name} in stock"
            )
        try:
            result = self.supabase.table("inventory")\
                .update({"quantity": new_quantity, "updated_at": now_iso()})\
                .eq("id", item_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Inventory item not found")
            item = InventoryItemResponse.from_row(result.data[0])
            if item.stock_status == STOCK_LOW:
                logger.warning("Inventory item %s (%s) is low on stock: %s", item.name, item.id, item.quantity)
            return item
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_item(self, item_id: str) -> bool:
        """Delete inventory item"""
        try:
            result = self.supabase.table("inventory")\
                .delete()\
                .eq("id", item_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Inventory item not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
