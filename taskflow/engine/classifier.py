"""Classifier gateway: AI-assisted category/priority guesses for tasks.

`ClassifierGateway.classify` is total. Any failure (no credential, API error,
timeout, unparseable or invalid reply) yields the fallback classification
instead of an exception, so task creation and update never depend on the
completion service being healthy.
"""

import json
import logging

from taskflow.integrations.openai_client import CompletionClient, strip_code_fences
from taskflow.models.constants import DEFAULT_CATEGORY, DEFAULT_PRIORITY
from taskflow.models.task import ClassificationResult, TaskCategory, TaskPriority

logger = logging.getLogger(__name__)

CLASSIFY_SYSTEM_PROMPT = (
    "You are a task analysis assistant. Always respond with valid JSON only. "
    "Do not include any additional text."
)

CLASSIFY_PROMPT_TEMPLATE = """Analyze this task and respond with ONLY a JSON object containing "category", "priority", and optionally "suggestedDueDate".

Title: {title}
Description: {description}

Categories: {categories}
Priority: {priorities} (based on urgency and importance)
SuggestedDueDate: if the task seems time-sensitive, suggest a due date in YYYY-MM-DD format

Example response:
{{"category": "work", "priority": "high", "suggestedDueDate": "2024-12-15"}}

Respond with valid JSON only."""


def fallback_classification() -> ClassificationResult:
    """The fixed classification used whenever the service cannot provide one."""
    return ClassificationResult(category=DEFAULT_CATEGORY, priority=DEFAULT_PRIORITY)


def build_classification_prompt(title: str, description: str) -> str:
    return CLASSIFY_PROMPT_TEMPLATE.format(
        title=title,
        description=description,
        categories=", ".join(c.value for c in TaskCategory),
        priorities=", ".join(p.value for p in TaskPriority),
    )


def parse_classification(reply: str) -> ClassificationResult:
    """Parse a classifier reply, stripping code fences first.

    Raises:
        ValueError: If the reply is not a JSON object with a usable category
            and a priority of low/medium/high.
    """
    payload = json.loads(strip_code_fences(reply))
    if not isinstance(payload, dict):
        raise ValueError("Classifier reply is not a JSON object")
    return ClassificationResult.model_validate(payload)


class ClassifierGateway:
    """Wraps the completion capability to guess a task's category and priority."""

    def __init__(self, client: CompletionClient):
        self.client = client

    def classify(self, title: str, description: str = "") -> ClassificationResult:
        """Guess category/priority (and optionally a due date) for a task.

        Args:
            title: Task title (may be empty)
            description: Task description (may be empty)

        Returns:
            The parsed ClassificationResult; out-of-vocabulary categories are
            passed through unchanged. On any failure, the fallback
            classification ('uncategorized', 'medium').
        """
        try:
            reply = self.client.complete(
                CLASSIFY_SYSTEM_PROMPT,
                build_classification_prompt(title or "", description or ""),
                temperature=0.3,
                max_tokens=150,
            )
            result = parse_classification(reply)
        except ValueError as e:
            # JSONDecodeError and pydantic ValidationError are ValueErrors
            logger.warning(f"Malformed classifier reply, using fallback: {type(e).__name__}")
            return fallback_classification()
        except Exception as e:
            logger.error(f"Classifier unavailable, using fallback: {type(e).__name__}")
            return fallback_classification()

        logger.debug(f"Classified task as {result.category}/{result.priority}")
        return result
