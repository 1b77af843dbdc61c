"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, Date, DateTime, Enum, Float, Integer, String, func

from app.domain.entities import UserRole
from app.infrastructure.database import Base


class UserModel(Base):
    """Database representation of employees and administrators."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    role = Column(
        Enum(UserRole, values_callable=lambda roles: [role.value for role in roles]),
        nullable=False,
        default=UserRole.EMPLOYEE,
        index=True,
    )
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    birth_date = Column(Date, nullable=True)
    hire_date = Column(Date, nullable=True)
    salary = Column(Float, nullable=False, default=400)
    last_salary_increase_date = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["UserModel"]
