"""Insight narrator: natural-language productivity feedback over tasks.

Like the classifier gateway, every operation here degrades to a static
fallback instead of raising.
"""

import json
import logging
from typing import List

from taskflow.integrations.openai_client import CompletionClient, strip_code_fences
from taskflow.models.constants import (
    INSIGHT_EMPTY_REPLY,
    INSIGHT_FAILURE,
    INSIGHT_SAMPLE_SIZE,
    NO_TASKS_INSIGHT,
    SMART_SUGGESTION_EMPTY_TIP,
    SMART_SUGGESTION_FAILURE_TIP,
    SMART_SUGGESTION_SAMPLE_SIZE,
    SUGGESTION_EMPTY_REPLY,
    SUGGESTION_FAILURE,
)
from taskflow.models.task import SmartSuggestions, Task

logger = logging.getLogger(__name__)

INSIGHTS_SYSTEM_PROMPT = (
    "You are a productivity coach. Provide concise, helpful insights. "
    "Respond with plain text only, no markdown."
)

INSIGHTS_PROMPT_TEMPLATE = """Analyze these tasks and provide brief, helpful productivity insights (max 3 sentences):
{tasks}

Focus on:
1. Patterns in task categories or priorities
2. Suggestions for time management or organization
3. Whether many tasks are overdue or due soon
4. General productivity tips

Keep the response concise and actionable."""

IMPROVEMENT_SYSTEM_PROMPT = (
    "You are a productivity expert. Provide constructive feedback on tasks. "
    "Be specific and helpful."
)

IMPROVEMENT_PROMPT_TEMPLATE = """Review this task and suggest improvements:
{task}

Consider:
1. Could the title be more specific or actionable?
2. Is the description clear and helpful?
3. Is the priority appropriate?
4. Is the category the best fit?
5. Any other suggestions for improvement?

Provide concise, constructive feedback."""

SMART_SYSTEM_PROMPT = (
    "You are a productivity analyst. Analyze tasks and provide structured "
    "suggestions. Respond with valid JSON only."
)

SMART_PROMPT_TEMPLATE = """Analyze these tasks and respond with ONLY a JSON object containing:
- suggestedCategories: array of suggested task categories based on patterns
- timeManagementTips: array of 2-3 time management tips
- commonThemes: array of common themes or patterns noticed

Tasks: {tasks}

Respond with valid JSON only, no additional text."""


def serialize_tasks(tasks: List[Task]) -> str:
    """Render tasks as indented JSON for a prompt (wire field names)."""
    return json.dumps(
        [task.model_dump(mode="json", by_alias=True, exclude={"user_id"}) for task in tasks],
        indent=2,
    )


class InsightNarrator:
    """Wraps the completion capability to describe a user's tasks in prose."""

    def __init__(self, client: CompletionClient):
        self.client = client

    def summarize(self, tasks: List[Task]) -> str:
        """Summarize a task list in at most three actionable sentences.

        Only the first INSIGHT_SAMPLE_SIZE tasks are sent. An empty list
        short-circuits without calling the service.
        """
        if not tasks:
            return NO_TASKS_INSIGHT

        try:
            reply = self.client.complete(
                INSIGHTS_SYSTEM_PROMPT,
                INSIGHTS_PROMPT_TEMPLATE.format(tasks=serialize_tasks(tasks[:INSIGHT_SAMPLE_SIZE])),
                temperature=0.7,
                max_tokens=200,
            )
        except Exception as e:
            logger.error(f"Insight generation failed: {type(e).__name__}")
            return INSIGHT_FAILURE

        return reply.strip() or INSIGHT_EMPTY_REPLY

    def suggest_improvements(self, task: Task) -> str:
        """Constructive feedback on a single task."""
        try:
            reply = self.client.complete(
                IMPROVEMENT_SYSTEM_PROMPT,
                IMPROVEMENT_PROMPT_TEMPLATE.format(task=serialize_tasks([task])),
                temperature=0.5,
                max_tokens=250,
            )
        except Exception as e:
            logger.error(f"Task improvement suggestions failed for {task.id}: {type(e).__name__}")
            return SUGGESTION_FAILURE

        return reply.strip() or SUGGESTION_EMPTY_REPLY

    def smart_suggestions(self, tasks: List[Task]) -> SmartSuggestions:
        """Structured category/tip/theme suggestions over a task sample."""
        if not tasks:
            return SmartSuggestions(time_management_tips=[SMART_SUGGESTION_EMPTY_TIP])

        try:
            reply = self.client.complete(
                SMART_SYSTEM_PROMPT,
                SMART_PROMPT_TEMPLATE.format(tasks=serialize_tasks(tasks[:SMART_SUGGESTION_SAMPLE_SIZE])),
                temperature=0.4,
                max_tokens=300,
            )
            payload = json.loads(strip_code_fences(reply))
            if not isinstance(payload, dict):
                raise ValueError("Smart suggestions reply is not a JSON object")
            return SmartSuggestions.model_validate(payload)
        except Exception as e:
            logger.error(f"Smart suggestions failed: {type(e).__name__}")
            return SmartSuggestions(time_management_tips=[SMART_SUGGESTION_FAILURE_TIP])
