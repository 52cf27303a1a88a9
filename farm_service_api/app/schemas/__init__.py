"""
Pydantic schema definitions for API payloads and table rows.
"""
