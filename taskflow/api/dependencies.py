"""FastAPI dependencies wiring the AI components.

One completion client is built lazily per process and shared by the
classifier gateway and the insight narrator. Tests replace
`get_completion_client` through `app.dependency_overrides`.
"""

from functools import lru_cache

from fastapi import Depends

from taskflow.config import OPENAI_API_KEY, OPENAI_MODEL, OPENAI_TIMEOUT_SEC
from taskflow.engine.classifier import ClassifierGateway
from taskflow.engine.insights import InsightNarrator
from taskflow.integrations.openai_client import CompletionClient, OpenAIClient


@lru_cache(maxsize=1)
def _build_completion_client() -> OpenAIClient:
    return OpenAIClient(api_key=OPENAI_API_KEY, model=OPENAI_MODEL, timeout=OPENAI_TIMEOUT_SEC)


def get_completion_client() -> CompletionClient:
    return _build_completion_client()


def get_classifier(client: CompletionClient = Depends(get_completion_client)) -> ClassifierGateway:
    return ClassifierGateway(client)


def get_narrator(client: CompletionClient = Depends(get_completion_client)) -> InsightNarrator:
    return InsightNarrator(client)
