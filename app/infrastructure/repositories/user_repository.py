"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from app.domain.entities import User, UserRole
from app.infrastructure.models import UserModel


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_by_role(self, role: UserRole, *, active_only: bool = True) -> Sequence[User]:
        query = self.session.query(UserModel).filter(UserModel.role == role)
        if active_only:
            query = query.filter(UserModel.is_active.is_(True))
        query = query.order_by(UserModel.id)
        return [self._to_entity(model) for model in query.all()]

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter_by(email=email).first()
        return self._to_entity(model) if model else None

    def exists_with_role(self, role: UserRole) -> bool:
        query = self.session.query(UserModel.id).filter(UserModel.role == role)
        return query.first() is not None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_salary(
        self, user_id: int, *, salary: float, last_salary_increase_date: date
    ) -> User:
        """Persist a salary change and commit it immediately."""

        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        if (
            model.last_salary_increase_date is not None
            and last_salary_increase_date < model.last_salary_increase_date
        ):
            msg = (
                f"Salary increase date for user {user_id} cannot move back from "
                f"{model.last_salary_increase_date} to {last_salary_increase_date}"
            )
            raise ValueError(msg)
        model.salary = salary
        model.last_salary_increase_date = last_salary_increase_date
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=UserRole(model.role),
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            password=model.password,
            birth_date=model.birth_date,
            hire_date=model.hire_date,
            salary=model.salary,
            last_salary_increase_date=model.last_salary_increase_date,
            is_active=model.is_active,
            created_at=model.created_at,
        )

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.role = user.role
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.email = user.email
        model.password = user.password
        model.birth_date = user.birth_date
        model.hire_date = user.hire_date
        model.salary = user.salary
        model.last_salary_increase_date = user.last_salary_increase_date
        model.is_active = user.is_active
        if user.created_at is not None:
            model.created_at = user.created_at


__all__ = ["UserRepository"]
