"""Task statistics aggregation for TaskFlow dashboards.

Everything here is a pure function of a task list and an evaluation instant
`now` (naive UTC), except `compute_statistics` which also asks the insight
narrator for a prose summary.
"""

from collections import Counter
from datetime import datetime, timedelta
from typing import Dict, Iterable, List

from taskflow.engine.insights import InsightNarrator
from taskflow.models.constants import (
    ACTIVITY_DEFAULT_DAYS,
    DUE_SOON_DAYS,
    INSIGHT_SAMPLE_SIZE,
    NO_TASKS_INSIGHT,
)
from taskflow.models.task import (
    ActivityDay,
    GroupCount,
    Task,
    TaskPriority,
    TaskStatisticsSnapshot,
    TaskStatus,
)

_PRIORITY_RANK = {
    TaskPriority.HIGH.value: 0,
    TaskPriority.MEDIUM.value: 1,
    TaskPriority.LOW.value: 2,
}


def is_overdue(task: Task, now: datetime) -> bool:
    """Open task whose due date has passed."""
    return not task.completed and task.due_date is not None and task.due_date < now


def is_due_soon(task: Task, now: datetime, days: int = DUE_SOON_DAYS) -> bool:
    """Open task due within [now, now + days]."""
    return (
        not task.completed
        and task.due_date is not None
        and now <= task.due_date <= now + timedelta(days=days)
    )


def task_status(task: Task, now: datetime) -> TaskStatus:
    """Derive the display status of a task."""
    if task.completed:
        return TaskStatus.COMPLETED
    if is_overdue(task, now):
        return TaskStatus.OVERDUE
    if is_due_soon(task, now):
        return TaskStatus.DUE_SOON
    return TaskStatus.PENDING


def group_counts(values: Iterable[str]) -> List[GroupCount]:
    """Count occurrences of each distinct value (one entry per key, first-seen order)."""
    return [GroupCount(key=key, count=count) for key, count in Counter(values).items()]


def completion_rate(completed: int, total: int) -> float:
    return completed / total if total > 0 else 0.0


def aggregate(tasks: List[Task], now: datetime) -> TaskStatisticsSnapshot:
    """Aggregate counts and groupings over one user's tasks.

    The `insights` field is left empty; see `compute_statistics`.

    Args:
        tasks: All tasks of one user
        now: Evaluation instant (naive UTC)

    Returns:
        TaskStatisticsSnapshot with scalar counts, groupings and completion rate
    """
    total = len(tasks)
    completed = sum(1 for task in tasks if task.completed)
    return TaskStatisticsSnapshot(
        total=total,
        completed=completed,
        pending=total - completed,
        overdue=sum(1 for task in tasks if is_overdue(task, now)),
        due_this_week=sum(1 for task in tasks if is_due_soon(task, now)),
        by_priority=group_counts(task.priority for task in tasks),
        by_category=group_counts(task.category for task in tasks),
        completion_rate=completion_rate(completed, total),
    )


def compute_statistics(
    tasks: List[Task],
    now: datetime,
    narrator: InsightNarrator,
) -> TaskStatisticsSnapshot:
    """Aggregate statistics and attach AI insights.

    The narrator sees at most the first INSIGHT_SAMPLE_SIZE tasks in the
    order given. With no tasks the narrator is not called at all.
    """
    snapshot = aggregate(tasks, now)
    if snapshot.total == 0:
        snapshot.insights = NO_TASKS_INSIGHT
    else:
        snapshot.insights = narrator.summarize(tasks[:INSIGHT_SAMPLE_SIZE])
    return snapshot


def overdue_tasks(tasks: List[Task], now: datetime) -> List[Task]:
    """Overdue tasks, oldest due date first."""
    return sorted((t for t in tasks if is_overdue(t, now)), key=lambda t: t.due_date)


def due_soon_tasks(tasks: List[Task], now: datetime, days: int = DUE_SOON_DAYS) -> List[Task]:
    """Tasks due within `days`, by due date then priority (high first)."""
    return sorted(
        (t for t in tasks if is_due_soon(t, now, days)),
        key=lambda t: (t.due_date, _PRIORITY_RANK.get(t.priority, len(_PRIORITY_RANK))),
    )


def profile_stats(tasks: List[Task]) -> Dict[str, int]:
    """Headline counts shown on the user profile."""
    return {
        "totalTasks": len(tasks),
        "completedTasks": sum(1 for t in tasks if t.completed),
        "highPriorityTasks": sum(1 for t in tasks if t.priority == TaskPriority.HIGH.value),
    }


def user_activity(tasks: List[Task], now: datetime, days: int = ACTIVITY_DEFAULT_DAYS) -> List[ActivityDay]:
    """Per-day created/completed counts over the last `days` days.

    Rows are keyed on each task's creation date, so a completion is counted
    on the day its task was created. Days without activity are omitted.
    """
    start = now - timedelta(days=days)
    rows: Dict[str, ActivityDay] = {}
    for task in tasks:
        created_in_window = task.created_at >= start
        completed_in_window = task.completed_at is not None and task.completed_at >= start
        if not (created_in_window or completed_in_window):
            continue
        day = task.created_at.strftime("%Y-%m-%d")
        row = rows.setdefault(day, ActivityDay(date=day))
        if created_in_window:
            row.tasks_created += 1
        if completed_in_window:
            row.tasks_completed += 1
    return [rows[day] for day in sorted(rows)]
