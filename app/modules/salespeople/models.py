# Supabase table: salespeople
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- name: text (not null)
- email: text (not null)
- phone: text (nullable)
- job_types: text[] (nullable) - service types the salesperson sells
- commission_percentage: numeric (default: 0)
- total_sales: numeric (default: 0)
- total_profit: numeric (default: 0)
- active: boolean (default: true)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
