"""Daily scan of employee records for birthday and salary notifications."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy.orm import Session

from app.domain.entities import User, UserRole
from app.domain.rules import (
    BIRTHDAY_REMINDER_DAYS,
    SalaryPolicy,
    evaluate_birthday,
    evaluate_salary_progression,
)
from app.infrastructure.repositories import UserRepository

from .delivery import deliver_to_admins

logger = logging.getLogger(__name__)


@dataclass
class ScanSummary:
    """Counters describing what a scan pass did."""

    today: date
    employees_scanned: int = 0
    salaries_increased: int = 0
    notifications_created: int = 0
    failed_employee_ids: list[int | None] = field(default_factory=list)


def _scan_employee(
    session: Session,
    employee: User,
    admins: Sequence[User],
    *,
    today: date,
    policy: SalaryPolicy,
    birthday_reminder_days: int,
    notify_by_email: bool,
    summary: ScanSummary,
) -> None:
    intents = evaluate_birthday(employee, today, reminder_days=birthday_reminder_days)

    decision = evaluate_salary_progression(employee, today, policy)
    if decision.raises_salary:
        # The raise is committed before any notice about it goes out.
        UserRepository(session).update_salary(
            employee.id,
            salary=decision.new_salary,
            last_salary_increase_date=decision.increase_date,
        )
        summary.salaries_increased += 1
        logger.info(
            "Salary of employee %s increased from %s to %s",
            employee.id,
            employee.salary,
            decision.new_salary,
        )
    intents.extend(decision.intents)

    for intent in intents:
        created = deliver_to_admins(
            session, admins, intent, notify_by_email=notify_by_email
        )
        summary.notifications_created += len(created)


def run_scan_pass(
    session: Session,
    *,
    today: date,
    policy: SalaryPolicy | None = None,
    birthday_reminder_days: int = BIRTHDAY_REMINDER_DAYS,
    notify_by_email: bool = False,
) -> ScanSummary:
    """Evaluate every employee once against ``today``.

    Employees are processed one at a time. An error while handling one
    employee is logged and the pass moves on to the next one.
    """

    policy = policy or SalaryPolicy()
    repository = UserRepository(session)
    admins = repository.list_by_role(UserRole.ADMIN)
    employees = repository.list_by_role(UserRole.EMPLOYEE)
    summary = ScanSummary(today=today)

    if not admins:
        logger.warning("No administrators found; scan notifications will not be stored")

    for employee in employees:
        summary.employees_scanned += 1
        try:
            _scan_employee(
                session,
                employee,
                admins,
                today=today,
                policy=policy,
                birthday_reminder_days=birthday_reminder_days,
                notify_by_email=notify_by_email,
                summary=summary,
            )
        except Exception:
            session.rollback()
            summary.failed_employee_ids.append(employee.id)
            logger.exception("Scan of employee %s failed", employee.id)

    logger.info(
        "Scan pass for %s finished: %s employees, %s raises, %s notifications, %s failures",
        today.isoformat(),
        summary.employees_scanned,
        summary.salaries_increased,
        summary.notifications_created,
        len(summary.failed_employee_ids),
    )
    return summary


__all__ = ["ScanSummary", "run_scan_pass"]
