"""Repository layer for task database operations."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import asc, case, desc, or_

from taskflow.models.task import Task, TaskPriority
from taskflow.models.task_factory import apply_completion
from taskflow.database.models import TaskDB, enum_to_value

logger = logging.getLogger(__name__)

# Sortable wire field names -> columns
SORT_COLUMNS = {
    "dueDate": TaskDB.due_date,
    "createdAt": TaskDB.created_at,
    "updatedAt": TaskDB.updated_at,
    "title": TaskDB.title,
    "category": TaskDB.category,
    "completed": TaskDB.completed,
}

# Priority sorts by rank (low < medium < high), not alphabetically
_PRIORITY_ORDER = case(
    {
        TaskPriority.LOW.value: 0,
        TaskPriority.MEDIUM.value: 1,
        TaskPriority.HIGH.value: 2,
    },
    value=TaskDB.priority,
    else_=1,
)


@dataclass
class TaskFilters:
    """Optional list filters; None (or 'all' for category/priority) means unfiltered."""

    completed: Optional[bool] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    search: Optional[str] = None


class TaskRepository:
    """Repository for Task database operations. Every query is scoped to one user."""

    def __init__(self, db: Session):
        self.db = db

    def _filtered(self, user_id: str, filters: Optional[TaskFilters] = None):
        query = self.db.query(TaskDB).filter(TaskDB.user_id == user_id)
        if filters is None:
            return query
        if filters.completed is not None:
            query = query.filter(TaskDB.completed == filters.completed)
        if filters.category and filters.category != "all":
            query = query.filter(TaskDB.category == filters.category)
        if filters.priority and filters.priority != "all":
            query = query.filter(TaskDB.priority == filters.priority)
        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.filter(or_(TaskDB.title.ilike(pattern), TaskDB.description.ilike(pattern)))
        return query

    def create(self, task: Task) -> Task:
        """Create a new task."""
        try:
            task_db = TaskDB.from_pydantic(task)
            self.db.add(task_db)
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Created task {task.id}: {task.title[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, user_id: str, task_id: str) -> Optional[Task]:
        """Get task by ID for a specific user."""
        task_db = self.db.query(TaskDB).filter(
            TaskDB.id == task_id,
            TaskDB.user_id == user_id,
        ).first()
        return task_db.to_pydantic() if task_db else None

    def get_all(self, user_id: str, limit: Optional[int] = None) -> List[Task]:
        """Get all tasks for a user in storage order (optionally only the first `limit`)."""
        query = self._filtered(user_id)
        if limit is not None:
            query = query.limit(limit)
        return [task_db.to_pydantic() for task_db in query.all()]

    def list(
        self,
        user_id: str,
        filters: Optional[TaskFilters] = None,
        sort_by: str = "dueDate",
        sort_order: str = "asc",
        page: int = 1,
        limit: int = 10,
    ) -> List[Task]:
        """List a page of tasks matching filters, sorted by a wire field name.

        Unknown sort fields fall back to dueDate. Ties are broken by
        creation time (newest first) so pagination is stable.
        """
        direction = desc if sort_order == "desc" else asc
        if sort_by == "priority":
            order = direction(_PRIORITY_ORDER)
        else:
            order = direction(SORT_COLUMNS.get(sort_by, TaskDB.due_date))

        tasks_db = (
            self._filtered(user_id, filters)
            .order_by(order, desc(TaskDB.created_at), TaskDB.id)
            .offset((max(page, 1) - 1) * limit)
            .limit(limit)
            .all()
        )
        return [task_db.to_pydantic() for task_db in tasks_db]

    def count(self, user_id: str, filters: Optional[TaskFilters] = None) -> int:
        """Count tasks matching filters."""
        return self._filtered(user_id, filters).count()

    def update(self, task: Task) -> Task:
        """Update an existing task (user_id must match task.user_id)."""
        task_db = self.db.query(TaskDB).filter(
            TaskDB.id == task.id,
            TaskDB.user_id == task.user_id,
        ).first()
        if not task_db:
            raise ValueError(f"Task {task.id} not found")

        task_db.title = task.title
        task_db.description = task.description or ""
        task_db.due_date = task.due_date
        task_db.priority = enum_to_value(task.priority)
        task_db.category = task.category
        task_db.completed = task.completed
        task_db.completed_at = task.completed_at
        task_db.updated_at = task.updated_at

        try:
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Updated task {task.id}: {task.title[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, user_id: str, task_id: str) -> bool:
        """Delete a task by ID for a specific user."""
        task_db = self.db.query(TaskDB).filter(
            TaskDB.id == task_id,
            TaskDB.user_id == user_id,
        ).first()
        if not task_db:
            return False

        try:
            self.db.delete(task_db)
            self.db.commit()
            logger.debug(f"Deleted task {task_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete_all_for_user(self, user_id: str) -> int:
        """Delete every task owned by a user. Returns the number deleted."""
        try:
            affected = (
                self.db.query(TaskDB)
                .filter(TaskDB.user_id == user_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
            logger.debug(f"Deleted {affected} tasks for user {user_id}")
            return int(affected)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete tasks for user {user_id}: {type(e).__name__}: {str(e)}")
            raise

    def bulk_set_completed(self, user_id: str, task_ids: List[str], completed: bool) -> int:
        """Set completion on several tasks, applying the completed_at transition per task.

        Unknown IDs and IDs owned by other users are ignored. Returns the
        number of tasks matched.
        """
        unique_ids = list(dict.fromkeys(task_ids))
        if not unique_ids:
            return 0

        tasks_db = self.db.query(TaskDB).filter(
            TaskDB.user_id == user_id,
            TaskDB.id.in_(unique_ids),
        ).all()

        now = datetime.utcnow()
        for task_db in tasks_db:
            updated = apply_completion(task_db.to_pydantic(), completed, now)
            task_db.completed = updated.completed
            task_db.completed_at = updated.completed_at
            task_db.updated_at = updated.updated_at

        try:
            self.db.commit()
            logger.debug(f"Set completed={completed} on {len(tasks_db)} tasks for user {user_id}")
            return len(tasks_db)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to bulk update tasks for user {user_id}: {type(e).__name__}: {str(e)}")
            raise
