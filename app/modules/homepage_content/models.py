# Supabase table: homepage_content
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- section: text (not null) - e.g. "services", "services_page", "projects_page"
- field_name: text (not null)
- content: text (not null)
- content_type: text (default: 'text')
- updated_at: timestamp (default: now())
- updated_by: uuid (foreign key to auth.users.id, nullable)
- unique (section, field_name)

Everyone may read; writes require an admin.
"""
