"""Constants for TaskFlow.

This module centralizes all magic numbers and default values used throughout the application.
"""

from taskflow.models.task import TaskCategory, TaskPriority


# Task defaults (the fallback classification)
DEFAULT_CATEGORY = TaskCategory.UNCATEGORIZED.value
DEFAULT_PRIORITY = TaskPriority.MEDIUM.value

# Field limits
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
CATEGORY_MAX_LENGTH = 50
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6

# Statistics windows
DUE_SOON_DAYS = 7
ACTIVITY_DEFAULT_DAYS = 30

# AI prompt sampling
INSIGHT_SAMPLE_SIZE = 10
SMART_SUGGESTION_SAMPLE_SIZE = 15

# AI fallback text
NO_TASKS_INSIGHT = "No tasks available for analysis."
INSIGHT_FAILURE = "Unable to generate insights at this time."
INSIGHT_EMPTY_REPLY = "No insights available at this time."
SUGGESTION_FAILURE = "Unable to generate suggestions at this time."
SUGGESTION_EMPTY_REPLY = "No suggestions available."
SMART_SUGGESTION_EMPTY_TIP = "Start by adding some tasks to get personalized suggestions."
SMART_SUGGESTION_FAILURE_TIP = "Focus on completing high-priority tasks first."

# Pagination
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100
