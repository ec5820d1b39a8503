"""
Pydantic schemas for pipeline results and API request/response validation.
"""
