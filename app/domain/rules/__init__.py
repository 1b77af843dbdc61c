"""Pure rules evaluated for every employee during a scan pass."""

from .birthday import (
    BIRTHDAY_REMINDER_DAYS,
    evaluate_birthday,
    next_birthday_occurrence,
)
from .salary import (
    SalaryDecision,
    SalaryPolicy,
    evaluate_salary_progression,
    next_increase_date,
)

__all__ = [
    "BIRTHDAY_REMINDER_DAYS",
    "SalaryDecision",
    "SalaryPolicy",
    "evaluate_birthday",
    "evaluate_salary_progression",
    "next_birthday_occurrence",
    "next_increase_date",
]
