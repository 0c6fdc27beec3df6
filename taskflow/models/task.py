"""Task data models for TaskFlow."""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class TaskPriority(str, Enum):
    """Task priority enumeration."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskCategory(str, Enum):
    """Suggested task category vocabulary.

    Stored categories are free-form strings; this vocabulary is what the
    classifier is asked to choose from.
    """
    WORK = "work"
    PERSONAL = "personal"
    SHOPPING = "shopping"
    HEALTH = "health"
    LEARNING = "learning"
    FINANCE = "finance"
    HOME = "home"
    SOCIAL = "social"
    TRAVEL = "travel"
    UNCATEGORIZED = "uncategorized"


class TaskStatus(str, Enum):
    """Derived task status (never stored)."""
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"
    DUE_SOON = "due-soon"


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to naive UTC.

    All timestamps are stored and compared as naive UTC; aware values coming
    in over the wire (e.g. with a trailing 'Z') are converted first.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class Task(BaseModel):
    """Canonical Task model."""

    id: str = Field(..., description="Unique task identifier (UUID v4)")
    user_id: str = Field(..., alias="userId", description="User ID who owns this task")
    title: str = Field(..., min_length=1, max_length=100, description="Task title")
    description: Optional[str] = Field("", max_length=1000, description="Task description")
    due_date: Optional[datetime] = Field(None, alias="dueDate", description="Task due date")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    category: str = Field(
        TaskCategory.UNCATEGORIZED.value, max_length=50, description="Free-form task category"
    )
    completed: bool = Field(False, description="Whether the task is completed")
    completed_at: Optional[datetime] = Field(
        None, alias="completedAt", description="When the task was last marked completed"
    )
    created_at: datetime = Field(..., alias="createdAt", description="Task creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Task last update timestamp")

    @field_validator("due_date", "completed_at", "created_at", "updated_at")
    @classmethod
    def normalize_datetimes(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        populate_by_name = True


class ClassificationResult(BaseModel):
    """Category/priority guess produced by the classifier gateway.

    Categories outside the suggested vocabulary are accepted as-is.
    """

    category: str = Field(..., min_length=1, max_length=50)
    priority: TaskPriority
    suggested_due_date: Optional[str] = Field(None, alias="suggestedDueDate")

    @field_validator("suggested_due_date", mode="before")
    @classmethod
    def coerce_suggested_due_date(cls, value):
        # Optional hint: numbers become strings, anything else is dropped
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return None

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        populate_by_name = True


class GroupCount(BaseModel):
    """One entry of a grouped count (by priority or by category)."""

    key: str
    count: int


class TaskStatisticsSnapshot(BaseModel):
    """Statistics computed on demand over one user's tasks."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    due_this_week: int = Field(0, alias="dueThisWeek")
    by_priority: List[GroupCount] = Field(default_factory=list, alias="byPriority")
    by_category: List[GroupCount] = Field(default_factory=list, alias="byCategory")
    completion_rate: float = Field(0.0, alias="completionRate")
    insights: str = ""

    class Config:
        """Pydantic configuration."""
        populate_by_name = True


class SmartSuggestions(BaseModel):
    """Structured suggestions derived from a sample of tasks."""

    suggested_categories: List[str] = Field(default_factory=list, alias="suggestedCategories")
    time_management_tips: List[str] = Field(default_factory=list, alias="timeManagementTips")
    common_themes: List[str] = Field(default_factory=list, alias="commonThemes")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True


class ActivityDay(BaseModel):
    """Tasks created/completed on one calendar day."""

    date: str
    tasks_created: int = Field(0, alias="tasksCreated")
    tasks_completed: int = Field(0, alias="tasksCompleted")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
