# Supabase table: leads
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- name: text (not null)
- email: text (not null)
- phone: text (nullable)
- service: text (nullable) - requested service type
- message: text (not null)
- status: text (default: 'New') - New | Contacted | Quoted | In Progress | Completed | Lost
- salesperson_id: uuid (foreign key to salespeople.id, nullable)
- canvasser_id: uuid (foreign key to canvassers.id, nullable) - set for leads entered in the field
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
