"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import date, datetime

from .role import UserRole


@dataclass
class User:
    """Core attributes describing an employee or administrator."""

    id: int | None
    role: UserRole
    first_name: str
    last_name: str
    email: str
    password: str
    birth_date: date | None
    hire_date: date | None
    salary: float
    last_salary_increase_date: date | None
    is_active: bool = True
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def salary_basis_date(self) -> date | None:
        """Date the next raise is counted from: the last raise, else the hire date."""

        return self.last_salary_increase_date or self.hire_date

    def has_role(self, role: UserRole | str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return UserRole(role) is self.role

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(UserRole.ADMIN)
