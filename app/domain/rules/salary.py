"""Automatic salary progression for employees.

Every ``interval_months`` after the last raise (or the hire date, when the
employee never had one) the salary grows by ``step`` up to ``cap``. A
reminder is emitted ``reminder_days`` ahead of the raise date and a
threshold notice once the new salary reaches ``threshold``.

The rule never touches storage: it describes the mutation in a
:class:`SalaryDecision` and the caller applies it. An overdue employee gets a
single step per evaluation, however many intervals were missed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from app.domain.entities import NotificationIntent, NotificationType, User
from app.utils.datetime import add_months


@dataclass(frozen=True)
class SalaryPolicy:
    """Parameters of the automatic raise schedule."""

    cap: float = 1500
    step: float = 200
    threshold: float = 1400
    interval_months: int = 6
    reminder_days: int = 30

    def __post_init__(self) -> None:
        if self.threshold > self.cap:
            raise ValueError("Salary threshold cannot exceed the salary cap")
        if self.step <= 0 or self.interval_months <= 0:
            raise ValueError("Salary step and interval must be positive")
        if self.reminder_days <= 0:
            raise ValueError("Salary reminder lead time must be at least one day")


@dataclass(frozen=True)
class SalaryDecision:
    """Outcome of evaluating the salary rule for one employee."""

    intents: list[NotificationIntent] = field(default_factory=list)
    new_salary: float | None = None
    increase_date: date | None = None

    @property
    def raises_salary(self) -> bool:
        return self.new_salary is not None


def next_increase_date(employee: User, policy: SalaryPolicy) -> date | None:
    """Return the date the next raise becomes due, if it can be computed."""

    basis = employee.salary_basis_date
    if basis is None:
        return None
    return add_months(basis, policy.interval_months)


def _format_amount(amount: float) -> str:
    return f"{amount:g}"


def evaluate_salary_progression(
    employee: User,
    today: date,
    policy: SalaryPolicy | None = None,
) -> SalaryDecision:
    """Decide whether ``employee`` is due a reminder or a raise on ``today``."""

    policy = policy or SalaryPolicy()
    due_date = next_increase_date(employee, policy)
    if due_date is None:
        return SalaryDecision()

    days_until = (due_date - today).days
    intents: list[NotificationIntent] = []

    if days_until == policy.reminder_days:
        intents.append(
            NotificationIntent(
                type=NotificationType.SALARY_INCREASE_REMINDER,
                event_date=due_date,
                message=(
                    f"A salary increase for {employee.full_name} is scheduled "
                    f"in {policy.reminder_days} days."
                ),
                related_user_id=employee.id,
            )
        )

    if days_until > 0 or employee.salary >= policy.cap:
        return SalaryDecision(intents=intents)

    new_salary = min(employee.salary + policy.step, policy.cap)
    intents.append(
        NotificationIntent(
            type=NotificationType.SALARY_INCREASED,
            event_date=today,
            message=(
                f"{employee.full_name}'s salary was automatically increased "
                f"to {_format_amount(new_salary)}."
            ),
            related_user_id=employee.id,
        )
    )
    if new_salary >= policy.threshold:
        intents.append(
            NotificationIntent(
                type=NotificationType.SALARY_THRESHOLD_REACHED,
                event_date=today,
                message=f"{employee.full_name} has reached the salary threshold.",
                related_user_id=employee.id,
            )
        )
    return SalaryDecision(intents=intents, new_salary=new_salary, increase_date=today)
