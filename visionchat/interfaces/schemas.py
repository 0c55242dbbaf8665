"""
Pydantic schemas shared by every router.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body returned by the centralized error handlers."""

    error: str
    detail: str | None = None


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Response schema for health check endpoint."""

    status: str
    version: str
    environment: str
    database: str
