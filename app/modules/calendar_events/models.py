# Supabase table: calendar_events
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- start_time: timestamptz (not null)
- end_time: timestamptz (not null) - must be after start_time
- salesperson_id: uuid (foreign key to salespeople.id, nullable)
- lead_id: uuid (foreign key to leads.id, nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
