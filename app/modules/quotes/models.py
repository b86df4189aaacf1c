# Supabase table: quotes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- client_name: text (not null)
- service_type: text (not null) - one of the company service types
- estimated_amount: numeric (not null)
- status: text (default: 'pending') - pending | approved | rejected | in_review
- notes: text (nullable)
- lead_id: uuid (foreign key to leads.id, nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
