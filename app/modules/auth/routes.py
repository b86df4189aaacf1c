from fastapi import APIRouter, Depends, HTTPException, Request
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import LoginRequest, RefreshRequest, TokenResponse, AccessResponse
from app.modules.auth.service import AuthService
from app.core.dependencies import (
    get_auth_service, get_current_token, get_current_user, get_access_cache,
    is_admin, get_active_canvasser, resolve_access, require_admin
)
from app.config.permissions_config import PERMISSION_MATRIX
from supabase import Client
from typing import Dict
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _user_from_auth_response(auth_response) -> Dict:
    return {"id": auth_response.user.id, "email": auth_response.user.email}


@router.post("/login", response_model=TokenResponse)
def admin_login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    supabase: Client = Depends(get_supabase)
):
    """Admin sign-in: valid credentials that do not belong to an admin are rejected"""
    auth_response = service.sign_in(login_data)
    if not is_admin(_user_from_auth_response(auth_response), supabase):
        logger.info("Rejected admin login for non-admin %s", login_data.email)
        service.logout(auth_response.session.access_token)
        raise HTTPException(status_code=403, detail="You need admin privileges to access this area.")
    return service.to_token_response(auth_response, role="admin")


@router.post("/canvasser/login", response_model=TokenResponse)
def canvasser_login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    supabase: Client = Depends(get_supabase)
):
    """Canvasser sign-in: requires an active canvasser record for the email"""
    auth_response = service.sign_in(login_data)
    if get_active_canvasser(_user_from_auth_response(auth_response), supabase) is None:
        logger.info("Rejected canvasser login for %s", login_data.email)
        service.logout(auth_response.session.access_token)
        raise HTTPException(status_code=403, detail="You need canvasser access to view this area.")
    return service.to_token_response(auth_response, role="canvasser")


@router.post("/refresh", response_model=TokenResponse)
async def refresh_session(
    refresh_data: RefreshRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Exchange a refresh token for a new access token"""
    return service.refresh(refresh_data.refresh_token)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=AccessResponse)
def get_me(
    request: Request,
    current_user: Dict = Depends(get_current_user),
    supabase: Client = Depends(get_supabase),
):
    """Get current authenticated user, role flags and permissions (for frontend route guards)."""
    access = resolve_access(current_user, supabase, get_access_cache(request))
    return AccessResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        user_metadata=current_user.get("user_metadata") or {},
        **access
    )


@router.get("/permissions")
async def get_permissions(user_data: Dict = Depends(require_admin)):
    """Permission names and the roles that hold them"""
    return PERMISSION_MATRIX
