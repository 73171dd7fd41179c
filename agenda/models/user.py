"""User model definitions."""

import enum

from sqlalchemy import Column, DateTime, Integer, String, func

from agenda.database import Base


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class User(Base):
    """Represents an account; owns classes and tasks."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # argon2/bcrypt hash
    role = Column(String(20), nullable=False, default=UserRole.USER.value, server_default=UserRole.USER.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
