"""
Business catalog shared by several modules.
"""

# Services offered by the company; used for lead, quote and salesperson job types
SERVICE_TYPES = [
    "Custom Home Building",
    "Commercial Construction",
    "Renovations & Remodeling",
    "Interior Finishing",
    "General Contracting",
    "Sustainable Building",
]
