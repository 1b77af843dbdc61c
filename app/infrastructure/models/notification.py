"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
)

from app.domain.entities import NotificationType
from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for administrator notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "type", "event_date", name="uq_notification_recipient_type_date"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    related_user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=True
    )
    type = Column(
        Enum(
            NotificationType,
            values_callable=lambda types: [item.value for item in types],
        ),
        nullable=False,
    )
    message = Column(Text, nullable=False)
    event_date = Column(Date, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)



__all__ = ["NotificationModel"]
