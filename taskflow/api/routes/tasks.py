"""Task endpoints: CRUD, completion toggles, statistics and AI suggestions."""

import logging
import math
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from taskflow.api.dependencies import get_classifier, get_narrator
from taskflow.api.task_models import (
    BulkUpdateRequest,
    BulkUpdateResponse,
    MessageResponse,
    Pagination,
    SmartSuggestionResponse,
    SuggestionResponse,
    TaskCreateRequest,
    TaskExport,
    TaskListResponse,
    TaskUpdateRequest,
)
from taskflow.auth.dependencies import get_current_user
from taskflow.database.database import get_db
from taskflow.database.repository import TaskFilters, TaskRepository
from taskflow.engine.classifier import ClassifierGateway
from taskflow.engine.insights import InsightNarrator
from taskflow.engine.resolver import resolve_fields, resolve_update_fields
from taskflow.engine.statistics import compute_statistics, due_soon_tasks, overdue_tasks
from taskflow.models.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_LIMIT,
    MAX_PAGE_LIMIT,
    SMART_SUGGESTION_SAMPLE_SIZE,
)
from taskflow.models.task import Task, TaskStatisticsSnapshot
from taskflow.models.task_factory import apply_completion, create_task_base
from taskflow.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

# Fields that cannot be cleared with an explicit null
_NON_NULLABLE_FIELDS = ("title", "category", "priority", "completed")


def _get_task_or_404(repo: TaskRepository, user_id: str, task_id: str) -> Task:
    task = repo.get(user_id, task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("", response_model=TaskListResponse)
def list_tasks(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    completed: Optional[bool] = None,
    category: Optional[str] = None,
    priority: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: str = Query("dueDate", alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder", pattern="^(asc|desc)$"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the current user's tasks with filtering, sorting and pagination."""
    repo = TaskRepository(db)
    filters = TaskFilters(completed=completed, category=category, priority=priority, search=search)
    tasks = repo.list(
        current_user.id,
        filters,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    total = repo.count(current_user.id, filters)
    return TaskListResponse(
        tasks=tasks,
        pagination=Pagination(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit)),
    )


@router.get("/stats/overview", response_model=TaskStatisticsSnapshot)
def get_task_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    narrator: InsightNarrator = Depends(get_narrator),
):
    """Statistics over all of the user's tasks plus AI insights."""
    tasks = TaskRepository(db).get_all(current_user.id)
    return compute_statistics(tasks, datetime.utcnow(), narrator)


@router.get("/due-soon", response_model=List[Task])
def get_due_soon_tasks(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Open tasks due within the next seven days."""
    tasks = TaskRepository(db).get_all(current_user.id)
    return due_soon_tasks(tasks, datetime.utcnow())


@router.get("/overdue", response_model=List[Task])
def get_overdue_tasks(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Open tasks whose due date has passed."""
    tasks = TaskRepository(db).get_all(current_user.id)
    return overdue_tasks(tasks, datetime.utcnow())


@router.patch("/bulk-update", response_model=BulkUpdateResponse)
def bulk_update_tasks(
    request: BulkUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Mark several tasks completed or open at once."""
    updated = TaskRepository(db).bulk_set_completed(current_user.id, request.task_ids, request.completed)
    return BulkUpdateResponse(message=f"{updated} tasks updated", updated=updated)


@router.get("/export")
def export_tasks(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Download all of the user's tasks as a JSON attachment."""
    tasks = TaskRepository(db).get_all(current_user.id)
    export = TaskExport(
        tasks=tasks,
        exported_at=datetime.utcnow(),
        total_tasks=len(tasks),
        completed_tasks=sum(1 for t in tasks if t.completed),
    )
    return JSONResponse(
        content=export.model_dump(mode="json", by_alias=True, exclude={"user"}),
        headers={"Content-Disposition": "attachment; filename=tasks-export.json"},
    )


@router.get("/suggestions/smart", response_model=SmartSuggestionResponse)
def get_smart_suggestions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    narrator: InsightNarrator = Depends(get_narrator),
):
    """Structured AI suggestions over a sample of the user's tasks."""
    tasks = TaskRepository(db).get_all(current_user.id, limit=SMART_SUGGESTION_SAMPLE_SIZE)
    return SmartSuggestionResponse(suggestions=narrator.smart_suggestions(tasks))


@router.get("/{task_id}", response_model=Task)
def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get a single task."""
    return _get_task_or_404(TaskRepository(db), current_user.id, task_id)


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task(
    request: TaskCreateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    classifier: ClassifierGateway = Depends(get_classifier),
):
    """Create a task, filling in missing category/priority via the classifier."""
    category, priority = resolve_fields(
        classifier,
        request.title,
        request.description,
        category=request.category,
        priority=request.priority,
    )
    task = create_task_base(
        user_id=current_user.id,
        title=request.title,
        description=request.description,
        due_date=request.due_date,
        category=category,
        priority=priority,
        completed=bool(request.completed),
    )
    created = TaskRepository(db).create(task)
    logger.info(f"User {current_user.id} created task {created.id} ({category}/{priority})")
    return created


@router.put("/{task_id}", response_model=Task)
def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    classifier: ClassifierGateway = Depends(get_classifier),
):
    """Update a task; a changed title/description triggers reclassification
    of whichever of category/priority the request leaves out."""
    repo = TaskRepository(db)
    stored = _get_task_or_404(repo, current_user.id, task_id)

    changes = {
        field: value
        for field, value in request.model_dump(exclude_unset=True).items()
        if value is not None or field not in _NON_NULLABLE_FIELDS
    }
    if "description" in changes and changes["description"] is None:
        changes["description"] = ""
    changes = resolve_update_fields(classifier, stored, changes)

    now = datetime.utcnow()
    completed = changes.pop("completed", stored.completed)
    updated = stored.model_copy(update={**changes, "updated_at": now})
    updated = apply_completion(updated, completed, now)
    return repo.update(updated)


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a task."""
    if not TaskRepository(db).delete(current_user.id, task_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return MessageResponse(message="Task deleted successfully")


@router.patch("/{task_id}/toggle", response_model=Task)
def toggle_task_completion(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Flip a task between completed and open."""
    repo = TaskRepository(db)
    task = _get_task_or_404(repo, current_user.id, task_id)
    return repo.update(apply_completion(task, not task.completed))


@router.get("/{task_id}/suggestions", response_model=SuggestionResponse)
def get_task_suggestions(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    narrator: InsightNarrator = Depends(get_narrator),
):
    """AI feedback on how to improve one task."""
    task = _get_task_or_404(TaskRepository(db), current_user.id, task_id)
    return SuggestionResponse(task_id=task.id, suggestions=narrator.suggest_improvements(task))
