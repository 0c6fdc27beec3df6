"""Task creation factory for TaskFlow.

This module centralizes task creation logic and the completion-state
transition so both are applied consistently across the application.
"""

import uuid
from datetime import datetime
from typing import Optional

from taskflow.models.task import Task
from taskflow.models.constants import DEFAULT_CATEGORY, DEFAULT_PRIORITY


def create_task_base(
    user_id: str,
    title: str,
    description: Optional[str] = None,
    due_date: Optional[datetime] = None,
    category: Optional[str] = None,
    priority: Optional[str] = None,
    completed: bool = False,
    now: Optional[datetime] = None,
) -> Task:
    """Create a task with defaults, allowing overrides.

    Category and priority are expected to be resolved before this is called;
    the defaults here only apply when a caller skips resolution entirely.

    Args:
        user_id: User ID who owns this task (required)
        title: Task title (required)
        description: Task description
        due_date: Optional due date (naive UTC)
        category: Resolved category (defaults to 'uncategorized')
        priority: Resolved priority (defaults to 'medium')
        completed: Initial completion state
        now: Creation instant (defaults to current UTC time)

    Returns:
        Task object with defaults applied
    """
    now = now or datetime.utcnow()
    task = Task(
        id=str(uuid.uuid4()),
        user_id=user_id,
        title=title,
        description=description or "",
        due_date=due_date,
        category=category or DEFAULT_CATEGORY,
        priority=priority or DEFAULT_PRIORITY,
        completed=False,
        created_at=now,
        updated_at=now,
    )
    return apply_completion(task, completed, now) if completed else task


def apply_completion(task: Task, completed: bool, now: Optional[datetime] = None) -> Task:
    """Return a copy of the task with the completion transition applied.

    completed_at is stamped when the task goes from open to completed and
    cleared when it is reopened. Setting the same state again leaves it as is.
    """
    if completed == task.completed:
        return task
    now = now or datetime.utcnow()
    return task.model_copy(
        update={
            "completed": completed,
            "completed_at": now if completed else None,
            "updated_at": now,
        }
    )
