# Supabase table: inventory
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- name: text (not null)
- category: text (nullable)
- quantity: integer (default: 0, never negative)
- unit: text (nullable) - e.g. "sheets", "boxes", "linear ft"
- price: numeric (nullable) - unit price
- supplier: text (nullable)
- min_stock: integer (default: 0) - reorder threshold
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

stock_status is not stored; it is derived from quantity and min_stock.
"""
