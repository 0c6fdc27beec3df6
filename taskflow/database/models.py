"""SQLAlchemy database models for TaskFlow."""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index

from typing import Union, TypeVar
from taskflow.database.database import Base
from taskflow.models.task import TaskCategory, TaskPriority

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string).

    Args:
        enum_obj: Enum instance or string value

    Returns:
        String value of the enum, or the string itself if already a string
    """
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_user_completed", "user_id", "completed"),
        Index("ix_tasks_user_due_date", "user_id", "due_date"),
        Index("ix_tasks_user_priority", "user_id", "priority"),
        Index("ix_tasks_user_category", "user_id", "category"),
        Index("ix_tasks_user_created_at", "user_id", "created_at"),
    )

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # User association
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Basic fields
    title = Column(String(100), nullable=False)
    description = Column(String(1000), nullable=False, default="")
    due_date = Column(DateTime, nullable=True)

    # Classification fields
    priority = Column(String, nullable=False, default=TaskPriority.MEDIUM.value)
    category = Column(String(50), nullable=False, default=TaskCategory.UNCATEGORIZED.value)

    # Completion
    completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from taskflow.models.task import Task

        return Task(
            id=self.id,
            user_id=self.user_id,
            title=self.title,
            description=self.description or "",
            due_date=self.due_date,
            priority=self.priority or TaskPriority.MEDIUM.value,
            category=self.category or TaskCategory.UNCATEGORIZED.value,
            completed=bool(self.completed),
            completed_at=self.completed_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, task):
        """Create database model from Pydantic model."""
        return cls(
            id=task.id,
            user_id=task.user_id,
            title=task.title,
            description=task.description or "",
            due_date=task.due_date,
            # Pydantic with use_enum_values=True returns strings, but accept enums too
            priority=enum_to_value(task.priority),
            category=task.category,
            completed=task.completed,
            completed_at=task.completed_at,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class UserDB(Base):
    """Database model for User."""

    __tablename__ = "users"

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # User profile
    username = Column(String(30), nullable=False, unique=True, index=True)
    email = Column(String, nullable=False, unique=True, index=True)

    # PBKDF2 hash (see taskflow.auth.passwords); never leaves the repository layer
    password_hash = Column(String, nullable=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from taskflow.models.user import User
        return User(
            id=self.id,
            username=self.username,
            email=self.email,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, user, password_hash: str):
        """Create database model from Pydantic model plus its password hash."""
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            password_hash=password_hash,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
