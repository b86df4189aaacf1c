# Supabase table: tasks
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- salesperson_id: uuid (foreign key to salespeople.id, not null)
- lead_id: uuid (foreign key to leads.id, nullable)
- title: text (not null)
- description: text (nullable)
- due_date: date (nullable)
- priority: integer (default: 2) - 1 low, 2 medium, 3 high
- completed: boolean (default: false)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
