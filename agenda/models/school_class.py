"""Weekly class schedule model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from agenda.database import Base

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class SchoolClass(Base):
    """Represents a recurring weekly class owned by one user."""
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    professor = Column(String(255))
    day = Column(String(20), nullable=False)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)
    classroom = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
