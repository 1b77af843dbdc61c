"""Tests for notification persistence and deduplication."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from app.domain.entities import NotificationIntent, NotificationType, UserRole
from app.infrastructure.repositories import NotificationRepository, UserRepository

EVENT_DATE = date(2025, 4, 9)


@pytest.fixture()
def admin(create_user):
    return create_user(role=UserRole.ADMIN, first_name="Anna", last_name="Admin")


def _intent(notification_type=NotificationType.BIRTHDAY_REMINDER, event_date=EVENT_DATE):
    return NotificationIntent(
        type=notification_type, event_date=event_date, message="Reminder"
    )


def test_same_triple_is_stored_once(db_session, admin):
    repository = NotificationRepository(db_session)

    first = repository.create_if_absent(_intent().addressed_to(admin.id))
    second = repository.create_if_absent(_intent().addressed_to(admin.id))

    assert first is not None
    assert second is None
    assert len(repository.list_for_user(admin.id)) == 1


def test_different_type_or_date_is_not_a_duplicate(db_session, admin):
    repository = NotificationRepository(db_session)

    repository.create_if_absent(_intent().addressed_to(admin.id))
    repository.create_if_absent(
        _intent(NotificationType.BIRTHDAY).addressed_to(admin.id)
    )
    repository.create_if_absent(
        _intent(event_date=date(2025, 4, 10)).addressed_to(admin.id)
    )

    assert len(repository.list_for_user(admin.id)) == 3


def test_unique_constraint_backs_the_existence_check(db_session, admin):
    repository = NotificationRepository(db_session)
    repository.create(_intent().addressed_to(admin.id))

    with pytest.raises(IntegrityError):
        repository.create(_intent().addressed_to(admin.id))


def test_lost_race_is_treated_as_existing(db_session, admin, monkeypatch):
    repository = NotificationRepository(db_session)
    repository.create(_intent().addressed_to(admin.id))
    monkeypatch.setattr(repository, "exists", lambda **_kwargs: False)

    assert repository.create_if_absent(_intent().addressed_to(admin.id)) is None
    assert len(repository.list_for_user(admin.id)) == 1


def test_mark_as_read_only_for_owner(db_session, admin, create_user):
    other_admin = create_user(role=UserRole.ADMIN, first_name="Boris", last_name="Admin")
    repository = NotificationRepository(db_session)
    saved = repository.create(_intent().addressed_to(admin.id))

    assert repository.mark_as_read(saved.id, user_id=other_admin.id) is None
    updated = repository.mark_as_read(saved.id, user_id=admin.id)

    assert updated is not None and updated.is_read is True
    assert repository.list_unread_for_user(admin.id) == []


def test_salary_increase_date_cannot_move_backwards(db_session, create_user):
    employee = create_user(last_salary_increase_date=date(2025, 3, 10))

    with pytest.raises(ValueError):
        UserRepository(db_session).update_salary(
            employee.id, salary=600, last_salary_increase_date=date(2025, 1, 1)
        )
