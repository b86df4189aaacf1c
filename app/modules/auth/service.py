import hashlib
import logging
import time
from datetime import datetime, timedelta, timezone
from supabase import Client
from app.modules.auth.schemas import LoginRequest, TokenResponse
from app.config.settings import settings
from app.core.query import parse_timestamp
from fastapi import HTTPException
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_MAX_SIZE = 500


def _token_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def clear_auth_cache(token: Optional[str] = None):
    """Drop one cached token, or the whole cache when no token is given."""
    if token is None:
        _AUTH_USER_CACHE.clear()
    else:
        _AUTH_USER_CACHE.pop(_token_key(token), None)


def session_expired(user_data: Dict[str, Any], now: Optional[datetime] = None) -> bool:
    """True when the last sign-in is older than the configured session age."""
    signed_in = parse_timestamp(user_data.get("last_sign_in_at"))
    if signed_in is None:
        return False
    now = now or datetime.now(timezone.utc)
    return now - signed_in > timedelta(hours=settings.session_max_age_hours)


class AuthService:
    def __init__(self, supabase: Client, admin_client: Optional[Client] = None):
        self.supabase = supabase
        self.admin_client = admin_client

    def sign_in(self, login_data: LoginRequest):
        """Authenticate with Supabase Auth and return the raw auth response"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            raise self._map_sign_in_error(str(e))

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid email or password")
        logger.info("Signed in %s", auth_response.user.email)
        return auth_response

    @staticmethod
    def _map_sign_in_error(message: str) -> HTTPException:
        lowered = message.lower()
        if "invalid login credentials" in lowered:
            return HTTPException(
                status_code=401,
                detail="Invalid email or password. Please check your credentials and try again."
            )
        if "email not confirmed" in lowered:
            return HTTPException(
                status_code=401,
                detail="Please check your email and confirm your account before signing in."
            )
        if "too many requests" in lowered or "rate limit" in lowered:
            return HTTPException(
                status_code=429,
                detail="Too many login attempts. Please wait a moment before trying again."
            )
        return HTTPException(status_code=500, detail=f"Login failed: {message}")

    @staticmethod
    def to_token_response(auth_response, role: Optional[str] = None) -> TokenResponse:
        session = auth_response.session
        return TokenResponse(
            access_token=session.access_token,
            refresh_token=getattr(session, "refresh_token", None),
            expires_in=getattr(session, "expires_in", None),
            token_type="bearer",
            user_id=auth_response.user.id,
            email=auth_response.user.email or "",
            role=role
        )

    def refresh(self, refresh_token: str) -> TokenResponse:
        """Exchange a refresh token for a new session"""
        try:
            auth_response = self.supabase.auth.refresh_session(refresh_token)
        except Exception as e:
            logger.warning("Session refresh failed: %s", e)
            raise HTTPException(status_code=401, detail="Invalid or expired refresh token")
        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid or expired refresh token")
        return self.to_token_response(auth_response)

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = _token_key(token)
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return self._check_session_age(token, user_data)
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
                "last_sign_in_at": getattr(user, "last_sign_in_at", None),
                "created_at": user.created_at,
                "updated_at": user.updated_at
            }
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + settings.auth_cache_ttl_sec)
            return self._check_session_age(token, user_data)
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def _check_session_age(self, token: str, user_data: Dict[str, Any]) -> Dict[str, Any]:
        if session_expired(user_data):
            logger.info("Session for %s expired after %sh", user_data.get("email"), settings.session_max_age_hours)
            clear_auth_cache(token)
            raise HTTPException(status_code=401, detail="Session expired, please sign in again")
        return user_data

    def logout(self, token: str) -> bool:
        """Logout user using Supabase Auth"""
        clear_auth_cache(token)
        try:
            # Supabase access tokens are stateless JWTs; revocation only affects the refresh token
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning("Sign out failed: %s", e)
            return False

    def _require_admin_client(self) -> Client:
        if not settings.supabase_service_role_key or self.admin_client is None:
            raise HTTPException(
                status_code=500,
                detail="Service role key not configured. Cannot create user logins."
            )
        return self.admin_client

    def create_login(self, email: str, password: str, user_metadata: Optional[Dict[str, Any]] = None) -> str:
        """Create a confirmed Supabase Auth user and return its id (requires service role key)"""
        admin_client = self._require_admin_client()
        try:
            response = admin_client.auth.admin.create_user({
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": user_metadata or {}
            })
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=409, detail="A login with this email already exists")
            raise HTTPException(status_code=500, detail=f"Failed to create login: {error_message}")

        if not response.user:
            raise HTTPException(status_code=500, detail="Failed to create login")
        logger.info("Created login for %s", email)
        return response.user.id

    def delete_login(self, user_id: str) -> bool:
        """Remove a Supabase Auth user; failures are logged, not raised"""
        admin_client = self._require_admin_client()
        try:
            admin_client.auth.admin.delete_user(user_id)
            return True
        except Exception as e:
            logger.warning("Failed to delete login %s: %s", user_id, e)
            return False
