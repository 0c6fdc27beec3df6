"""External service integrations for TaskFlow."""

from taskflow.integrations.openai_client import (
    CompletionClient,
    CompletionUnavailable,
    OpenAIClient,
    strip_code_fences,
)
from taskflow.integrations.canned import CannedCompletionClient

__all__ = [
    "CompletionClient",
    "CompletionUnavailable",
    "OpenAIClient",
    "CannedCompletionClient",
    "strip_code_fences",
]
