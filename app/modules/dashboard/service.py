from supabase import Client
from app.modules.dashboard.schemas import DashboardStats
from app.modules.inventory.schemas import stock_status, STOCK_LOW
from typing import Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _count(self, table: str, **filters: Any) -> int:
        query = self.supabase.table(table).select("id", count="exact")
        for column, value in filters.items():
            query = query.eq(column, value)
        result = query.execute()
        if result.count is not None:
            return result.count
        return len(result.data or [])

    def get_stats(self) -> DashboardStats:
        """Headline counts for the admin overview"""
        try:
            leads = self.supabase.table("leads").select("status").execute().data or []
            inventory = self.supabase.table("inventory").select("quantity, min_stock").execute().data or []

            return DashboardStats(
                total_leads=len(leads),
                new_leads=sum(1 for lead in leads if lead["status"] == "New"),
                in_progress_leads=sum(1 for lead in leads if lead["status"] == "In Progress"),
                quoted_leads=sum(1 for lead in leads if lead["status"] == "Quoted"),
                inventory_items=len(inventory),
                low_stock_items=sum(
                    1 for item in inventory
                    if stock_status(item.get("quantity") or 0, item.get("min_stock") or 0) == STOCK_LOW
                ),
                pending_quotes=self._count("quotes", status="pending"),
                active_canvassers=self._count("canvassers", active=True),
                open_tasks=self._count("tasks", completed=False),
                new_submissions=self._count("form_submissions", status="new")
            )
        except Exception as e:
            logger.error(f"Error building dashboard stats: {e}")
            raise HTTPException(status_code=500, detail=str(e))
