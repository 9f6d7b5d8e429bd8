"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Offset pagination metadata returned by list endpoints."""

    total: int = Field(..., description="Number of matching items")
    limit: int
    offset: int
    has_more: bool


class MessageResponse(BaseModel):
    """Generic success envelope for operations without a payload."""

    success: bool = True
    message: str
