from fastapi import APIRouter, Depends, Request
from app.database.supabase_client import get_supabase
from app.modules.form_submissions.schemas import (
    ChallengeResponse, ContactSubmit, ContactAck, SubmissionResponse, SubmissionStatusUpdate
)
from app.modules.form_submissions.service import FormSubmissionService
from app.modules.form_submissions.captcha import issue_challenge
from app.core.dependencies import require_permission
from app.core.rate_limit import limiter
from app.config import settings
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(tags=["form-submissions"])


def get_submission_service(supabase: Client = Depends(get_supabase)) -> FormSubmissionService:
    return FormSubmissionService(supabase)


def _client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


# Public contact form

@router.get("/contact/challenge", response_model=ChallengeResponse)
async def get_contact_challenge():
    """Math question that must be answered with the contact form"""
    question, token = issue_challenge()
    return ChallengeResponse(question=question, challenge_token=token, expires_in=settings.captcha_ttl_sec)


@router.post("/contact", response_model=ContactAck, status_code=201)
@limiter.limit(settings.contact_rate_limit)
async def submit_contact_form(
    request: Request,
    submission: ContactSubmit,
    service: FormSubmissionService = Depends(get_submission_service)
):
    """Submit the website contact form"""
    stored = service.submit(
        submission,
        ip_address=_client_ip(request),
        user_agent=request.headers.get("user-agent")
    )
    return ContactAck(id=stored.id)


# Admin inbox

@router.get("/form-submissions", response_model=List[SubmissionResponse])
async def list_submissions(
    status: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("form_submissions:read")),
    service: FormSubmissionService = Depends(get_submission_service)
):
    """List contact form submissions"""
    return service.list_submissions(status=status, limit=limit, offset=offset)


@router.get("/form-submissions/{submission_id}", response_model=SubmissionResponse)
async def get_submission(
    submission_id: str,
    user_data: Dict = Depends(require_permission("form_submissions:read")),
    service: FormSubmissionService = Depends(get_submission_service)
):
    """Get submission by ID"""
    return service.get_submission(submission_id)


@router.patch("/form-submissions/{submission_id}/status", response_model=SubmissionResponse)
async def update_submission_status(
    submission_id: str,
    status_data: SubmissionStatusUpdate,
    user_data: Dict = Depends(require_permission("form_submissions:update")),
    service: FormSubmissionService = Depends(get_submission_service)
):
    """Mark a submission read, responded or archived"""
    return service.update_status(submission_id, status_data.status, user_data["id"])


@router.delete("/form-submissions/{submission_id}", status_code=204)
async def delete_submission(
    submission_id: str,
    user_data: Dict = Depends(require_permission("form_submissions:delete")),
    service: FormSubmissionService = Depends(get_submission_service)
):
    """Delete submission"""
    service.delete_submission(submission_id)
    return None
