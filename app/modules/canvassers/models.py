# Supabase table: canvassers
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- name: text (not null)
- email: text (not null) - matches the canvasser's auth.users email
- phone: text (nullable)
- assigned_territories: text[] (nullable)
- hire_date: date (default: current_date)
- active: boolean (default: true) - inactive canvassers cannot use the field portal
- total_visits: integer (default: 0)
- leads_generated: integer (default: 0)
- conversion_rate: numeric (default: 0) - leads_generated / total_visits * 100
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

The login itself lives in auth.users and is created with the service role key.
"""
