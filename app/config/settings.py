from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for creating admin/canvasser logins

    # AWS S3 (lead documents)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_bucket_name: Optional[str] = None

    # Auth
    auth_cache_ttl_sec: int = 60
    role_lookup_timeout_sec: float = 5.0
    role_lookup_retries: int = 3
    session_max_age_hours: int = 24

    # First admin, created by app/scripts/seed_defaults.py when no admin exists
    default_admin_email: Optional[str] = None
    default_admin_password: Optional[str] = None
    default_admin_username: str = "admin"

    # Contact form
    captcha_secret: str = "change-me"
    captcha_ttl_sec: int = 900
    contact_rate_limit: str = "5/minute"

    # App
    app_name: str = "pines-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
