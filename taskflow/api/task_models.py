"""Request/response models for task endpoints."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from taskflow.models.constants import (
    CATEGORY_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from taskflow.models.task import SmartSuggestions, Task, TaskPriority, to_naive_utc
from taskflow.models.user import User


def _strip(value: Optional[str]) -> Optional[str]:
    return value.strip() if isinstance(value, str) else value


def _future_due_date(value: Optional[datetime]) -> Optional[datetime]:
    value = to_naive_utc(value)
    if value is not None and value <= datetime.utcnow():
        raise ValueError("Due date must be in the future")
    return value


class TaskFields(BaseModel):
    """Fields shared by create and update payloads."""
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    due_date: Optional[datetime] = Field(None, alias="dueDate")
    priority: Optional[TaskPriority] = None
    category: Optional[str] = Field(None, max_length=CATEGORY_MAX_LENGTH)
    completed: Optional[bool] = None

    strip_text = field_validator("description", "category", mode="before")(_strip)
    check_due_date = field_validator("due_date")(_future_due_date)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        populate_by_name = True


class TaskCreateRequest(TaskFields):
    """Request model for task creation."""
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)

    strip_title = field_validator("title", mode="before")(_strip)


class TaskUpdateRequest(TaskFields):
    """Request model for task update. Only fields present in the body are applied."""
    title: Optional[str] = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)

    strip_title = field_validator("title", mode="before")(_strip)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(..., alias="totalPages")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True


class TaskListResponse(BaseModel):
    """Response for task listing."""
    tasks: List[Task]
    pagination: Pagination


class BulkUpdateRequest(BaseModel):
    """Request model for bulk completion updates."""
    task_ids: List[str] = Field(..., alias="taskIds", min_length=1)
    completed: bool

    class Config:
        """Pydantic configuration."""
        populate_by_name = True


class BulkUpdateResponse(BaseModel):
    message: str
    updated: int


class MessageResponse(BaseModel):
    message: str


class SuggestionResponse(BaseModel):
    """Response for single-task improvement suggestions."""
    task_id: str = Field(..., alias="taskId")
    suggestions: str

    class Config:
        """Pydantic configuration."""
        populate_by_name = True


class SmartSuggestionResponse(BaseModel):
    suggestions: SmartSuggestions


class TaskExport(BaseModel):
    """Downloadable export of a user's tasks (and optionally the user)."""
    user: Optional[User] = None
    tasks: List[Task]
    exported_at: datetime = Field(..., alias="exportedAt")
    total_tasks: int = Field(..., alias="totalTasks")
    completed_tasks: int = Field(..., alias="completedTasks")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
