# Supabase table: documents
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- lead_id: uuid (foreign key to leads.id, not null)
- salesperson_id: uuid (foreign key to salespeople.id, nullable)
- filename: text (not null) - original upload name
- file_type: text (not null) - MIME type
- file_size: bigint (nullable) - bytes
- file_url: text (not null) - s3://<bucket>/leads/<lead_id>/<uuid>-<filename>
- description: text (nullable)
- created_at: timestamp (default: now())
"""
