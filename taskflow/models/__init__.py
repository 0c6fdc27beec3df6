"""Data models for TaskFlow."""

from taskflow.models.task import (
    Task,
    TaskPriority,
    TaskCategory,
    TaskStatus,
    ClassificationResult,
    GroupCount,
    TaskStatisticsSnapshot,
    SmartSuggestions,
    ActivityDay,
)
from taskflow.models.user import User

__all__ = [
    "Task",
    "TaskPriority",
    "TaskCategory",
    "TaskStatus",
    "ClassificationResult",
    "GroupCount",
    "TaskStatisticsSnapshot",
    "SmartSuggestions",
    "ActivityDay",
    "User",
]
