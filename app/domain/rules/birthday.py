"""Birthday reminders for employees."""

from __future__ import annotations

import calendar
from datetime import date

from app.domain.entities import NotificationIntent, NotificationType, User

BIRTHDAY_REMINDER_DAYS = 30


def _occurrence_in_year(birth_date: date, year: int) -> date:
    # Feb 29 birthdays are observed on Feb 28 in common years.
    if birth_date.month == 2 and birth_date.day == 29 and not calendar.isleap(year):
        return date(year, 2, 28)
    return date(year, birth_date.month, birth_date.day)


def next_birthday_occurrence(birth_date: date, today: date) -> date:
    """Return the first birthday falling on or after ``today``."""

    occurrence = _occurrence_in_year(birth_date, today.year)
    if occurrence < today:
        occurrence = _occurrence_in_year(birth_date, today.year + 1)
    return occurrence


def evaluate_birthday(
    employee: User,
    today: date,
    *,
    reminder_days: int = BIRTHDAY_REMINDER_DAYS,
) -> list[NotificationIntent]:
    """Return the birthday notifications due for ``employee`` on ``today``."""

    if reminder_days <= 0:
        raise ValueError("Birthday reminder lead time must be at least one day")
    if employee.birth_date is None:
        return []

    occurrence = next_birthday_occurrence(employee.birth_date, today)
    days_until = (occurrence - today).days

    if days_until == reminder_days:
        return [
            NotificationIntent(
                type=NotificationType.BIRTHDAY_REMINDER,
                event_date=occurrence,
                message=f"{employee.full_name} has a birthday in {reminder_days} days",
                related_user_id=employee.id,
            )
        ]
    if days_until == 0:
        return [
            NotificationIntent(
                type=NotificationType.BIRTHDAY,
                event_date=occurrence,
                message=f"Today is {employee.full_name}'s birthday",
                related_user_id=employee.id,
            )
        ]
    return []
