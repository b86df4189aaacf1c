from supabase import Client
from app.modules.form_submissions.schemas import (
    ContactSubmit, SubmissionResponse, SUBMISSION_STATUSES
)
from app.modules.form_submissions.captcha import verify_challenge
from app.core.query import now_iso, first_row
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class FormSubmissionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def submit(self, data: ContactSubmit, ip_address: Optional[str] = None,
               user_agent: Optional[str] = None) -> SubmissionResponse:
        """Store a contact form submission once the math challenge is answered"""
        if not verify_challenge(data.challenge_token, data.answer):
            raise HTTPException(status_code=400, detail="Incorrect or expired answer. Please try again.")
        name, message = data.name.strip(), data.message.strip()
        if not name or not message:
            raise HTTPException(status_code=400, detail="Name, email and message are required")

        try:
            result = self.supabase.table("form_submissions").insert({
                "name": name,
                "email": data.email,
                "phone": (data.phone or "").strip() or None,
                "message": message,
                "source": data.source or "website",
                "status": "new",
                "ip_address": ip_address,
                "user_agent": user_agent
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to submit form")

            logger.info("Contact form submission %s from %s", result.data[0]["id"], data.source)
            return SubmissionResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error storing contact form submission: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_submission(self, submission_id: str) -> SubmissionResponse:
        """Get submission by ID"""
        try:
            result = self.supabase.table("form_submissions")\
                .select("*")\
                .eq("id", submission_id)\
                .maybe_single()\
                .execute()

            row = first_row(result)
            if not row:
                raise HTTPException(status_code=404, detail="Submission not found")

            return SubmissionResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_submissions(self, status: Optional[str] = None, limit: int = 100,
                         offset: int = 0) -> List[SubmissionResponse]:
        """List submissions, newest first"""
        if status and status != "all" and status not in SUBMISSION_STATUSES:
            raise HTTPException(status_code=400, detail=f"Invalid status '{status}'")
        try:
            query = self.supabase.table("form_submissions").select("*")
            if status and status != "all":
                query = query.eq("status", status)
            result = query.order("submitted_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [SubmissionResponse(**row) for row in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_status(self, submission_id: str, status: str, user_id: str) -> SubmissionResponse:
        """Move a submission through new/read/responded/archived"""
        if status not in SUBMISSION_STATUSES:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid status '{status}'. Allowed: {', '.join(SUBMISSION_STATUSES)}"
            )
        update_data = {"status": status}
        if status == "responded":
            update_data["responded_at"] = now_iso()
            update_data["responded_by"] = user_id

        try:
            result = self.supabase.table("form_submissions")\
                .update(update_data)\
                .eq("id", submission_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Submission not found")
            return SubmissionResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_submission(self, submission_id: str) -> bool:
        """Delete submission"""
        try:
            result = self.supabase.table("form_submissions")\
                .delete()\
                .eq("id", submission_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Submission not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
