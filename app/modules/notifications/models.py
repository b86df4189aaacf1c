# Supabase table: notifications
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null) - recipient
- title: text (not null)
- message: text (not null)
- type: text (not null) - e.g. "info", "lead", "task", "reminder"
- related_lead_id: uuid (foreign key to leads.id, nullable)
- read: boolean (default: false)
- created_at: timestamp (default: now())
"""
