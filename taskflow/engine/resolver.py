"""Task field resolution: merge user-supplied and AI-derived category/priority.

Rules:
1. Explicit user values always win.
2. The classifier is consulted only when at least one of category/priority
   is missing.
3. Whatever is still missing after that falls back to 'uncategorized'/'medium'.

On update, classification is re-run only when the title or description
actually changes, and only fields absent from the update payload take the
new classification.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from taskflow.engine.classifier import ClassifierGateway
from taskflow.models.constants import DEFAULT_CATEGORY, DEFAULT_PRIORITY
from taskflow.models.task import Task

logger = logging.getLogger(__name__)


def resolve_fields(
    classifier: ClassifierGateway,
    title: str,
    description: Optional[str] = None,
    category: Optional[str] = None,
    priority: Optional[str] = None,
) -> Tuple[str, str]:
    """Resolve the (category, priority) pair for a task.

    Args:
        classifier: Gateway used when a field is missing
        title: Task title
        description: Task description (empty string if absent)
        category: User-supplied category, if any
        priority: User-supplied priority, if any

    Returns:
        (category, priority), both always set
    """
    if category and priority:
        return category, priority

    guessed_category: Optional[str] = None
    guessed_priority: Optional[str] = None
    try:
        result = classifier.classify(title, description or "")
        guessed_category = result.category
        guessed_priority = result.priority
    except Exception as e:
        # classify() is total; this only triggers for a misbehaving gateway
        logger.error(f"Classification failed during field resolution: {type(e).__name__}")

    return (
        category or guessed_category or DEFAULT_CATEGORY,
        priority or guessed_priority or DEFAULT_PRIORITY,
    )


def needs_reclassification(stored: Task, changes: Dict[str, Any]) -> bool:
    """True if the update changes the stored title or description."""
    new_title = changes.get("title")
    new_description = changes.get("description")
    return (
        (new_title is not None and new_title != stored.title)
        or (new_description is not None and new_description != (stored.description or ""))
    )


def resolve_update_fields(
    classifier: ClassifierGateway,
    stored: Task,
    changes: Dict[str, Any],
) -> Dict[str, Any]:
    """Fill category/priority into an update payload when reclassification applies.

    Args:
        classifier: Gateway used for reclassification
        stored: The task as currently persisted
        changes: Fields explicitly present in the update request

    Returns:
        A new dict of changes. Unchanged from the input when the title and
        description are unchanged; otherwise category/priority are added for
        whichever of them the caller did not supply.
    """
    if not needs_reclassification(stored, changes):
        return dict(changes)

    title = changes.get("title") or stored.title
    description = changes["description"] if "description" in changes else stored.description
    category, priority = resolve_fields(
        classifier,
        title,
        description or "",
        category=changes.get("category"),
        priority=changes.get("priority"),
    )
    return {**changes, "category": category, "priority": priority}
