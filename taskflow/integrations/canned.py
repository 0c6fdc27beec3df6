"""Canned CompletionClient for tests and offline development."""

from typing import Dict, List, Optional, Union


class CannedCompletionClient:
    """CompletionClient that replays queued replies instead of calling a service.

    Each queued item is either a reply string or an exception instance that
    `complete` raises. When the queue is empty `default` is returned (or
    raised). Every call is recorded in `calls`.
    """

    def __init__(
        self,
        replies: Optional[List[Union[str, Exception]]] = None,
        default: Union[str, Exception] = "",
        available: bool = True,
    ):
        self.replies = list(replies or [])
        self.default = default
        self._available = available
        self.calls: List[Dict[str, object]] = []

    @property
    def available(self) -> bool:
        return self._available

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def queue(self, *replies: Union[str, Exception]) -> None:
        self.replies.extend(replies)

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float = 0.3,
        max_tokens: int = 150,
    ) -> str:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        reply = self.replies.pop(0) if self.replies else self.default
        if isinstance(reply, Exception):
            raise reply
        return reply
