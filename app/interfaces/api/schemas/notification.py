"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from app.domain.entities import NotificationType


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    related_user_id: int | None = None
    type: NotificationType
    message: str
    event_date: date
    is_read: bool
    created_at: datetime | None = None


class NotificationMarkReadResponse(BaseModel):
    message: str
    notification: NotificationRead


__all__ = ["NotificationMarkReadResponse", "NotificationRead"]
