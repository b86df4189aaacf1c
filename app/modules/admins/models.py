# Supabase table: admins
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, unique, not null)
- username: text (unique, not null)
- created_at: timestamp (default: now())

A user is an admin exactly when a row with their user_id exists.
"""
