"""Use case creating the bootstrap administrator account."""

import logging
from datetime import date

from sqlalchemy.orm import Session

from app.domain.entities import User, UserRole
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash

logger = logging.getLogger(__name__)


def ensure_default_admin(
    session: Session, *, email: str, password: str, today: date
) -> User | None:
    """Create an administrator when the database has none.

    Returns the created user, or ``None`` when an administrator already exists.
    """

    repository = UserRepository(session)
    if repository.exists_with_role(UserRole.ADMIN):
        return None

    admin = User(
        id=None,
        role=UserRole.ADMIN,
        first_name="Default",
        last_name="Admin",
        email=email,
        password=get_password_hash(password),
        birth_date=None,
        hire_date=today,
        salary=0,
        last_salary_increase_date=None,
    )
    created = repository.create(admin)
    logger.info("Default administrator created: %s", created.email)
    return created
