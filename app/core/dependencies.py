"""
Core dependencies for route protection and role resolution
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config import settings
from app.config.permissions_config import get_role_permissions
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.auth.service import AuthService
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from supabase import Client
from typing import Callable, List, Optional, Dict, Any
import logging
import time

logger = logging.getLogger(__name__)

security = HTTPBearer()

# Delay before retry n is ROLE_LOOKUP_BACKOFF_SEC * n
ROLE_LOOKUP_BACKOFF_SEC = 1.0

_lookup_executor = ThreadPoolExecutor(max_workers=8, thread_name_prefix="role-lookup")


def _get_request_cache(request: Request) -> Dict[str, Any]:
    """Return request-scoped cache for access data (is_admin, canvasser, permissions)."""
    if not hasattr(request.state, "access_cache"):
        request.state.access_cache = {}
    return request.state.access_cache


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    admin_client: Client = Depends(get_service_supabase)
) -> AuthService:
    return AuthService(supabase, admin_client)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(token)


def lookup_with_retry(label: str, fn: Callable[[], Any], default: Any) -> Any:
    """
    Run a remote lookup with a timeout, retrying with progressive delay.
    Returns `default` once every attempt has failed or timed out.
    """
    attempts = max(1, settings.role_lookup_retries)
    for attempt in range(1, attempts + 1):
        future = _lookup_executor.submit(fn)
        try:
            return future.result(timeout=settings.role_lookup_timeout_sec)
        except FutureTimeoutError:
            future.cancel()
            logger.warning("%s lookup attempt %d timed out after %ss", label, attempt, settings.role_lookup_timeout_sec)
        except Exception as e:
            logger.warning("%s lookup attempt %d failed: %s", label, attempt, e)
        if attempt < attempts:
            time.sleep(ROLE_LOOKUP_BACKOFF_SEC * attempt)
    logger.error("All %s lookup attempts failed", label)
    return default


def is_admin(user_data: dict, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> bool:
    """True if an admins row references the auth user. Uses request-scoped cache when provided."""
    if cache is not None and "is_admin" in cache:
        return cache["is_admin"]

    def _lookup() -> bool:
        result = supabase.table("admins")\
            .select("id")\
            .eq("user_id", user_data["id"])\
            .limit(1)\
            .execute()
        return bool(result.data)

    admin = lookup_with_retry("Admin", _lookup, False)
    if cache is not None:
        cache["is_admin"] = admin
    return admin


def get_active_canvasser(user_data: dict, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> Optional[dict]:
    """Return the active canvassers row matching the user's email, or None."""
    if cache is not None and "canvasser" in cache:
        return cache["canvasser"]
    email = (user_data.get("email") or "").strip().lower()
    if not email:
        return None

    def _lookup() -> Optional[dict]:
        result = supabase.table("canvassers")\
            .select("*")\
            .eq("email", email)\
            .eq("active", True)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    canvasser = lookup_with_retry("Canvasser", _lookup, None)
    if cache is not None:
        cache["canvasser"] = canvasser
    return canvasser


def get_user_permissions(user_data: dict, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> List[str]:
    """Union of the permissions of every role the user holds."""
    if cache is not None and "permission_names" in cache:
        return cache["permission_names"]
    names = set()
    if is_admin(user_data, supabase, cache):
        names.update(get_role_permissions("admin"))
    if get_active_canvasser(user_data, supabase, cache):
        names.update(get_role_permissions("canvasser"))
    permissions = sorted(names)
    if cache is not None:
        cache["permission_names"] = permissions
    return permissions


def resolve_access(user_data: dict, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Role flags, canvasser profile and permission names for the user."""
    canvasser = get_active_canvasser(user_data, supabase, cache)
    return {
        "is_admin": is_admin(user_data, supabase, cache),
        "is_canvasser": canvasser is not None,
        "canvasser": canvasser,
        "permissions": get_user_permissions(user_data, supabase, cache),
    }


def require_permission(required_permission: str):
    """Factory function to create permission check dependency"""
    def check_permission(
        request: Request,
        user_data: dict = Depends(get_current_user),
        supabase: Client = Depends(get_supabase)
    ) -> dict:
        """Dependency to check if user has required permission"""
        cache = _get_request_cache(request)
        user_permissions = get_user_permissions(user_data, supabase, cache)
        if required_permission not in user_permissions:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {required_permission}"
            )
        return user_data
    return check_permission


def require_admin(
    request: Request,
    user_data: dict = Depends(get_current_user),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Dependency for admin-only endpoints that are not tied to one resource"""
    if not is_admin(user_data, supabase, _get_request_cache(request)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You need admin privileges to access this area."
        )
    return user_data


def require_canvasser(required_permission: str):
    """Factory for canvasser portal dependencies; returns the canvassers row"""
    def check_canvasser(
        request: Request,
        user_data: dict = Depends(get_current_user),
        supabase: Client = Depends(get_supabase)
    ) -> dict:
        cache = _get_request_cache(request)
        canvasser = get_active_canvasser(user_data, supabase, cache)
        if canvasser is None:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You need canvasser access to view this area."
            )
        if required_permission not in get_user_permissions(user_data, supabase, cache):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {required_permission}"
            )
        return canvasser
    return check_canvasser


def get_access_cache(request: Request) -> Dict[str, Any]:
    """Dependency that returns request-scoped access cache (populated by the role checks)."""
    return _get_request_cache(request)
