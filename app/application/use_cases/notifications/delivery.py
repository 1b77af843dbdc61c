"""Fan-out of notification intents to administrators."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationIntent, User
from app.infrastructure.email import send_admin_notification_email
from app.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def deliver_to_admins(
    session: Session,
    admins: Sequence[User],
    intent: NotificationIntent,
    *,
    notify_by_email: bool = False,
) -> list[Notification]:
    """Store one copy of ``intent`` for every administrator in ``admins``.

    Administrators that already hold a notification of the same type for the
    same event date are skipped. A failure while storing one copy is logged
    and does not prevent delivery to the remaining administrators.
    """

    repository = NotificationRepository(session)
    created: list[Notification] = []
    for admin in admins:
        if admin.id is None:
            continue
        try:
            saved = repository.create_if_absent(intent.addressed_to(admin.id))
        except Exception:
            session.rollback()
            logger.exception(
                "Could not store %s notification for admin %s",
                intent.type.value,
                admin.id,
            )
            continue

        if saved is None:
            continue
        created.append(saved)
        if notify_by_email and not send_admin_notification_email(admin.email, saved):
            logger.warning(
                "Notification %s was stored but could not be emailed to %s",
                saved.id,
                admin.email,
            )
    return created


__all__ = ["deliver_to_admins"]
