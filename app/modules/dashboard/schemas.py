from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_leads: int
    new_leads: int
    in_progress_leads: int
    quoted_leads: int
    inventory_items: int
    low_stock_items: int
    pending_quotes: int
    active_canvassers: int
    open_tasks: int
    new_submissions: int
