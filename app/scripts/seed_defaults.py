"""
Seed Defaults Script
Ensures a first admin account exists and fills in default page copy.
Safe to run repeatedly: existing admins and edited content are left alone.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from app.config import settings
from app.modules.homepage_content.schemas import DEFAULT_CONTENT
from app.database.supabase_client import SupabaseClient, get_supabase, get_service_supabase
from supabase import Client
from typing import Dict, Optional
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def ensure_default_admin(supabase: Client, email: Optional[str], password: Optional[str],
                         username: str) -> bool:
    """Create the default admin through the create_admin_user database function when no admin exists"""
    existing = supabase.table("admins").select("id").limit(1).execute()
    if existing.data:
        logger.info("Admin already present, skipping default admin")
        return False

    if not email or not password:
        logger.warning("No admin exists and DEFAULT_ADMIN_EMAIL/DEFAULT_ADMIN_PASSWORD are not set")
        return False

    supabase.rpc("create_admin_user", {
        "admin_email": email,
        "admin_password": password,
        "admin_username": username
    }).execute()
    logger.info(f"Created default admin: {username}")
    return True


def seed_homepage_content(supabase: Client, defaults: Dict[str, Dict[str, str]] = DEFAULT_CONTENT) -> int:
    """Insert default page copy for fields that have never been saved"""
    existing = supabase.table("homepage_content")\
        .select("section, field_name")\
        .execute()
    present = {(row["section"], row["field_name"]) for row in existing.data or []}

    missing = [
        {"section": section, "field_name": field_name, "content": content, "content_type": "text"}
        for section, fields in defaults.items()
        for field_name, content in fields.items()
        if (section, field_name) not in present
    ]
    if missing:
        supabase.table("homepage_content").insert(missing).execute()
    logger.info(f"Homepage content seeded: {len(missing)} created, {len(present)} kept")
    return len(missing)


def main():
    """Main function to seed defaults"""
    try:
        supabase = get_service_supabase() if SupabaseClient.has_service_client() else get_supabase()

        logger.info("Starting defaults seeding...")
        ensure_default_admin(
            supabase,
            settings.default_admin_email,
            settings.default_admin_password,
            settings.default_admin_username
        )
        seed_homepage_content(supabase)
        logger.info("Seeding completed successfully!")

    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
