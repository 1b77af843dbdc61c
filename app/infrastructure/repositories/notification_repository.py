"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationType
from app.infrastructure.models import NotificationModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: int,
        *,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel)
        query = query.filter(NotificationModel.user_id == user_id)
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_unread_for_user(
        self, user_id: int, *, limit: int | None = 50
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def exists(
        self, *, user_id: int, notification_type: NotificationType, event_date: date
    ) -> bool:
        query = self.session.query(NotificationModel.id).filter(
            NotificationModel.user_id == user_id,
            NotificationModel.type == notification_type,
            NotificationModel.event_date == event_date,
        )
        return query.first() is not None

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def create_if_absent(self, notification: Notification) -> Notification | None:
        """Insert ``notification`` unless its (recipient, type, event date) exists.

        Returns ``None`` when an equivalent notification is already stored,
        including when a concurrent insert wins the unique constraint.
        """

        if self.exists(
            user_id=notification.user_id,
            notification_type=notification.type,
            event_date=notification.event_date,
        ):
            return None
        try:
            return self.create(notification)
        except IntegrityError:
            self.session.rollback()
            logger.debug(
                "Notification %s for user %s on %s already stored",
                notification.type.value,
                notification.user_id,
                notification.event_date,
            )
            return None

    def mark_as_read(self, notification_id: int, *, user_id: int) -> Notification | None:
        model = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .first()
        )
        if model is None:
            return None
        model.is_read = True
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        model.created_at = (
            ensure_app_naive_datetime(notification.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )
        model.user_id = notification.user_id
        model.related_user_id = notification.related_user_id
        model.type = notification.type
        model.message = notification.message
        model.event_date = notification.event_date
        model.is_read = notification.is_read

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            related_user_id=model.related_user_id,
            type=NotificationType(model.type),
            message=model.message,
            event_date=model.event_date,
            is_read=model.is_read,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
