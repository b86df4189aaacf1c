# Supabase table: form_submissions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- name: text (not null)
- email: text (not null)
- phone: text (nullable)
- message: text (not null)
- source: text (default: 'website')
- status: text (default: 'new') - new | read | responded | archived
- ip_address: inet (nullable)
- user_agent: text (nullable)
- submitted_at: timestamp (default: now())
- responded_at: timestamp (nullable)
- responded_by: uuid (foreign key to auth.users.id, nullable)

Anonymous visitors may only insert; reads and updates require an admin.
"""
