"""Task model definitions."""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text, false, func

from agenda.database import Base


class Task(Base):
    """Represents a to-do item, optionally linked to one of the owner's classes."""
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Deleting the class unlinks the task instead of removing it.
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="SET NULL"), nullable=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    due_date = Column(Date)
    completed = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
