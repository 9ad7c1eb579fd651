"""
Garment ERP Pydantic Schemas
Request/Response models for the API
"""
