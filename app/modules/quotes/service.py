from supabase import Client
from app.config.catalog import SERVICE_TYPES
from app.modules.quotes.schemas import (
    QuoteCreate, QuoteUpdate, QuoteResponse, QuoteSummary, QUOTE_STATUSES
)
from app.core.query import now_iso, first_row
from typing import List, Optional
from fastapi import HTTPException


class QuoteService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    @staticmethod
    def _validate(service_type: Optional[str] = None, status: Optional[str] = None):
        if service_type is not None and service_type not in SERVICE_TYPES:
            raise HTTPException(status_code=400, detail=f"Unknown service type '{service_type}'")
        if status is not None and status not in QUOTE_STATUSES:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid quote status '{status}'. Allowed: {', '.join(QUOTE_STATUSES)}"
            )

    def create_quote(self, quote_data: QuoteCreate) -> QuoteResponse:
        """Create a new quote"""
        try:
            self._validate(quote_data.service_type, quote_data.status)
            result = self.supabase.table("quotes").insert({
                "client_name": quote_data.client_name.strip(),
                "service_type": quote_data.service_type,
                "estimated_amount": quote_data.estimated_amount,
                "status": quote_data.status,
                "notes": quote_data.notes or None,
                "lead_id": quote_data.lead_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create quote")

            return QuoteResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_quote_by_id(self, quote_id: str) -> QuoteResponse:
        """Get quote by ID"""
        try:
            result = self.supabase.table("quotes")\
                .select("*")\
                .eq("id", quote_id)\
                .maybe_single()\
                .execute()

            row = first_row(result)
            if not row:
                raise HTTPException(status_code=404, detail="Quote not found")

            return QuoteResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_quotes(self, status: Optional[str] = None, lead_id: Optional[str] = None,
                    limit: int = 50, offset: int = 0) -> List[QuoteResponse]:
        """List quotes newest first"""
        try:
            query = self.supabase.table("quotes").select("*")
            if status and status != "all":
                self._validate(status=status)
                query = query.eq("status", status)
            if lead_id:
                query = query.eq("lead_id", lead_id)

            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()

            return [QuoteResponse(**quote) for quote in result.data]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_quote(self, quote_id: str, quote_data: QuoteUpdate) -> QuoteResponse:
        """Update quote"""
        try:
            update_data = quote_data.model_dump(exclude_unset=True)
            for required in ("client_name", "service_type", "estimated_amount", "status"):
                if required in update_data and update_data[required] is None:
                    raise HTTPException(status_code=400, detail=f"Quote {required} cannot be empty")
            self._validate(update_data.get("service_type"), update_data.get("status"))

            if not update_data:
                return self.get_quote_by_id(quote_id)

            update_data["updated_at"] = now_iso()
            result = self.supabase.table("quotes")\
                .update(update_data)\
                .eq("id", quote_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Quote not found")

            return QuoteResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_status(self, quote_id: str, status: str) -> QuoteResponse:
        return self.update_quote(quote_id, QuoteUpdate(status=status))

    def delete_quote(self, quote_id: str) -> bool:
        """Delete quote"""
        try:
            result = self.supabase.table("quotes")\
                .delete()\
                .eq("id", quote_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Quote not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_summary(self) -> QuoteSummary:
        """Counts per status and the value of quotes still pending"""
        try:
            result = self.supabase.table("quotes")\
                .select("status, estimated_amount")\
                .execute()
            rows = result.data or []
            by_status = {status: 0 for status in QUOTE_STATUSES}
            pending_amount = 0.0
            for row in rows:
                by_status[row["status"]] = by_status.get(row["status"], 0) + 1
                if row["status"] == "pending":
                    pending_amount += float(row.get("estimated_amount") or 0)
            return QuoteSummary(
                total=len(rows),
                pending=by_status["pending"],
                by_status=by_status,
                pending_amount=round(pending_amount, 2)
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
