"""
Schemas module - Request/Response schemas for API endpoints.

Everything lives in careerconnect.schemas.schemas; import from there.
"""
