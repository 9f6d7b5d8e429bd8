"""Notification inbox endpoints for the StackIt API."""

from typing import Any

from fastapi import APIRouter, Query

from stackit.schemas.common import MessageResponse, Pagination
from stackit.schemas.notification import NotificationPage, NotificationResponse

from ..dependencies import AdminUserDep, CurrentUserDep, NotificationServiceDep

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=NotificationPage)
async def list_notifications(
    current_user: CurrentUserDep,
    service: NotificationServiceDep,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    unread_only: bool = Query(False),
    type_: str | None = Query(None, alias="type"),
) -> NotificationPage:
    """List the caller's notifications, newest first."""
    page = service.list_notifications(
        current_user.id,
        limit=limit,
        offset=offset,
        unread_only=unread_only,
        type_=type_,
    )
    return NotificationPage(
        notifications=[NotificationResponse.model_validate(n) for n in page["notifications"]],
        pagination=Pagination(**page["pagination"]),
    )


@router.get("/unread-count")
async def get_unread_count(
    current_user: CurrentUserDep,
    service: NotificationServiceDep,
) -> dict[str, int]:
    return {"unread_count": service.unread_count(current_user.id)}


@router.get("/stats")
async def get_notification_stats(
    current_user: CurrentUserDep,
    service: NotificationServiceDep,
) -> dict[str, Any]:
    return {"success": True, "stats": service.stats(current_user.id)}


@router.post("/read-all")
async def mark_all_as_read(
    current_user: CurrentUserDep,
    service: NotificationServiceDep,
) -> dict[str, Any]:
    """Mark every notification of the caller as read."""
    changed = service.mark_all_as_read(current_user.id)
    return {"success": True, "message": f"{changed} notifications marked as read", "count": changed}


@router.post("/cleanup")
async def cleanup_old_notifications(
    admin: AdminUserDep,
    service: NotificationServiceDep,
    days_old: int | None = Query(None, ge=0),
) -> dict[str, Any]:
    """Delete notifications older than ``days_old`` days. Admin only."""
    deleted = service.cleanup_old_notifications(days_old)
    return {"success": True, "deleted": deleted}


@router.get("/{notification_id}", response_model=NotificationResponse)
async def get_notification(
    notification_id: int,
    current_user: CurrentUserDep,
    service: NotificationServiceDep,
) -> NotificationResponse:
    notification = service.get_notification(notification_id, current_user.id)
    return NotificationResponse.model_validate(notification)


@router.post("/{notification_id}/read", response_model=MessageResponse)
async def mark_as_read(
    notification_id: int,
    current_user: CurrentUserDep,
    service: NotificationServiceDep,
) -> MessageResponse:
    service.mark_as_read(notification_id, current_user.id)
    return MessageResponse(message="Notification marked as read")


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: int,
    current_user: CurrentUserDep,
    service: NotificationServiceDep,
) -> MessageResponse:
    service.delete_notification(notification_id, current_user.id)
    return MessageResponse(message="Notification deleted")


@router.delete("/")
async def delete_all_notifications(
    current_user: CurrentUserDep,
    service: NotificationServiceDep,
) -> dict[str, Any]:
    """Delete every notification of the caller."""
    deleted = service.delete_all_notifications(current_user.id)
    return {"success": True, "deleted": deleted}
