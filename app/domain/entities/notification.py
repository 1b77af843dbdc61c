"""Domain entities representing notifications delivered to administrators."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class NotificationType(str, Enum):
    """Kinds of notification stored for administrators."""

    BIRTHDAY_REMINDER = "birthday_reminder"
    SALARY_INCREASE_REMINDER = "salary_increase_reminder"
    SALARY_INCREASED = "salary_increased"
    SALARY_THRESHOLD_REACHED = "salary_threshold_reached"
    WELCOME = "welcome"
    BIRTHDAY = "birthday"
    USER_UPDATE = "user_update"
    EMPLOYEE_CREATED = "employee_created"
    GENERAL = "general"


@dataclass
class Notification:
    """Information message delivered to a specific administrator."""

    id: int | None
    user_id: int
    type: NotificationType
    message: str
    event_date: date
    related_user_id: int | None = None
    is_read: bool = False
    created_at: datetime | None = None


@dataclass(frozen=True)
class NotificationIntent:
    """Candidate notification produced by a rule, not yet addressed to anyone.

    ``event_date`` is the day the notice refers to (the birthday, the raise
    date), not the day it was generated.
    """

    type: NotificationType
    event_date: date
    message: str
    related_user_id: int | None = None

    def addressed_to(self, recipient_id: int) -> Notification:
        return Notification(
            id=None,
            user_id=recipient_id,
            type=self.type,
            message=self.message,
            event_date=self.event_date,
            related_user_id=self.related_user_id,
        )


__all__ = ["Notification", "NotificationIntent", "NotificationType"]
