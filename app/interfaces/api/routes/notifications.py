"""Endpoints for reading administrator notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.domain.entities import Notification, User
from app.infrastructure.database import get_db
from app.infrastructure.repositories import NotificationRepository
from app.interfaces.api.dependencies import require_admin
from app.interfaces.api.schemas import NotificationMarkReadResponse, NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = Query(False),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> list[NotificationRead]:
    """Return the most recent notifications addressed to the current admin."""

    repository = NotificationRepository(db)
    if unread_only:
        notifications = repository.list_unread_for_user(current_user.id, limit=limit)
    else:
        notifications = repository.list_for_user(current_user.id, limit=limit)
    return [_notification_to_schema(notification) for notification in notifications]


@router.patch(
    "/{notification_id}/mark-as-read", response_model=NotificationMarkReadResponse
)
def mark_notification_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> NotificationMarkReadResponse:
    """Mark one of the current admin's notifications as read."""

    notification = NotificationRepository(db).mark_as_read(
        notification_id, user_id=current_user.id
    )
    if notification is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found",
        )
    return NotificationMarkReadResponse(
        message="Notification marked as read",
        notification=_notification_to_schema(notification),
    )
