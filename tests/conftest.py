"""Shared fixtures: an in-memory database and user factories."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from datetime import date
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["SCAN_ENABLED"] = "false"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from app.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from app.domain.entities import User, UserRole  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.repositories import UserRepository  # noqa: E402


@pytest.fixture()
def db_session() -> Iterator:
    """Yield a session bound to a freshly created schema."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


def build_user(
    *,
    role: UserRole = UserRole.EMPLOYEE,
    first_name: str = "Ivan",
    last_name: str = "Petrov",
    email: str | None = None,
    birth_date: date | None = date(1990, 6, 15),
    hire_date: date | None = date(2020, 1, 10),
    salary: float = 400,
    last_salary_increase_date: date | None = None,
    user_id: int | None = None,
) -> User:
    return User(
        id=user_id,
        role=role,
        first_name=first_name,
        last_name=last_name,
        email=email or f"{first_name}.{last_name}@example.com".lower(),
        password="not-a-real-hash",
        birth_date=birth_date,
        hire_date=hire_date,
        salary=salary,
        last_salary_increase_date=last_salary_increase_date,
    )


@pytest.fixture()
def create_user(db_session) -> Callable[..., User]:
    """Persist users built with :func:`build_user`."""

    def _create(**overrides) -> User:
        return UserRepository(db_session).create(build_user(**overrides))

    return _create


@pytest.fixture()
def admins(create_user) -> list[User]:
    return [
        create_user(role=UserRole.ADMIN, first_name="Anna", last_name="Admin"),
        create_user(role=UserRole.ADMIN, first_name="Boris", last_name="Admin"),
    ]
