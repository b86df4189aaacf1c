# Supabase table: canvassing_activities
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- canvasser_id: uuid (foreign key to canvassers.id, not null)
- address: text (not null)
- zip_code: text (nullable)
- result: text (not null) - not_interested | maybe | callback | interested | no_answer | not_home
- notes: text (nullable)
- requires_followup: boolean (nullable)
- followup_priority: integer (nullable) - 1 low, 2 medium, 3 high; only set when requires_followup
- visit_date: timestamp (default: now())
- created_at: timestamp (default: now())
"""
