"""Notification-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from .common import Pagination


class NotificationResponse(BaseModel):
    """A single notification as seen by its recipient."""

    id: int
    type: str
    message: str
    is_read: bool
    related_id: int | None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class NotificationPage(BaseModel):
    notifications: list[NotificationResponse]
    pagination: Pagination
