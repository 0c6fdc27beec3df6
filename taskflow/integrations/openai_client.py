"""Text-completion integration for TaskFlow.

The classifier gateway and the insight narrator only depend on the
`CompletionClient` capability defined here. `OpenAIClient` is the production
implementation backed by the OpenAI chat completions API.
"""

import logging
import re
from typing import Optional, Protocol

from openai import OpenAI, APIError

logger = logging.getLogger(__name__)

# Matches a leading ```json / ``` fence and a trailing ``` fence.
_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class CompletionUnavailable(RuntimeError):
    """Raised when no completion could be obtained (no credential or API error)."""


class CompletionClient(Protocol):
    """Capability: turn a prompt into free-form text.

    Implementations raise on any failure; callers decide how to degrade.
    """

    @property
    def available(self) -> bool:
        ...

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float = 0.3,
        max_tokens: int = 150,
    ) -> str:
        ...


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence markup wrapped around a JSON reply."""
    return _CODE_FENCE_RE.sub("", text.strip()).strip()


class OpenAIClient:
    """CompletionClient backed by the OpenAI API."""

    def __init__(self, api_key: Optional[str] = None, model: str = "gpt-3.5-turbo", timeout: float = 15.0):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key. If empty the client initializes but every
                call raises CompletionUnavailable, which callers turn into
                their fallback values.
            model: Chat model name
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key
        self.model = model
        self.client = None

        if self.api_key:
            self.client = OpenAI(api_key=self.api_key, timeout=timeout, max_retries=0)
        else:
            logger.warning("OPENAI_API_KEY not configured. AI classification and insights will use fallbacks.")

    @property
    def available(self) -> bool:
        return self.client is not None

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float = 0.3,
        max_tokens: int = 150,
    ) -> str:
        """Send one chat completion request and return the stripped reply text.

        An empty reply is returned as an empty string.

        Raises:
            CompletionUnavailable: If the client is not configured or the API
                reports an error.
        """
        if not self.client:
            raise CompletionUnavailable("OpenAI client not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except APIError as e:
            error_code = getattr(e, 'code', None)
            status_code = getattr(e, 'status_code', None)

            if error_code == 'insufficient_quota':
                logger.warning("OpenAI API quota insufficient. Please check billing/payment method in OpenAI dashboard.")
            elif status_code == 429:
                logger.warning("OpenAI API rate limit exceeded.")
            else:
                logger.error(f"OpenAI API error: {status_code or 'unknown'} ({error_code or 'unknown'})")
            # Don't chain the message: it may echo request content
            raise CompletionUnavailable(f"OpenAI API error ({status_code or 'unknown'})") from None

        content = response.choices[0].message.content if response.choices else None
        return (content or "").strip()
