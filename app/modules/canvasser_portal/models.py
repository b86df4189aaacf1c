# Supabase tables used by the field portal: time_entries, daily_schedules
# (plus canvassers, canvassing_activities and leads owned by other modules)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
time_entries:
- id: uuid (primary key)
- canvasser_id: uuid (foreign key to canvassers.id, not null)
- clock_in: timestamptz (not null)
- clock_out: timestamptz (nullable) - null while the session is open
- total_hours: numeric (nullable) - rounded to 2 decimals on clock-out
- created_at: timestamp (default: now())

daily_schedules:
- id: uuid (primary key)
- canvasser_id: uuid (foreign key to canvassers.id, not null)
- address: text (not null)
- zip_code: text (nullable)
- assigned_date: date (not null)
- priority: integer (nullable)
- status: text (default: 'pending') - pending | completed | skipped
- completion_time: timestamptz (nullable)
- notes: text (nullable)
- created_at: timestamp (default: now())

A canvasser may only read and write rows carrying their own canvasser_id.
"""
