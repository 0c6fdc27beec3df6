"""Task classification and statistics engine for TaskFlow."""

from taskflow.engine.classifier import ClassifierGateway, fallback_classification
from taskflow.engine.insights import InsightNarrator
from taskflow.engine.resolver import resolve_fields, resolve_update_fields
from taskflow.engine.statistics import aggregate, compute_statistics, task_status

__all__ = [
    "ClassifierGateway",
    "fallback_classification",
    "InsightNarrator",
    "resolve_fields",
    "resolve_update_fields",
    "aggregate",
    "compute_statistics",
    "task_status",
]
