"""Tests for the insight narrator."""

import json

from taskflow.engine.insights import InsightNarrator, serialize_tasks
from taskflow.integrations.canned import CannedCompletionClient
from taskflow.integrations.openai_client import CompletionUnavailable


def _prompt_tasks(prompt: str) -> list:
    """Pull the JSON task array back out of a rendered prompt."""
    start = prompt.index("[")
    end = prompt.rindex("]") + 1
    return json.loads(prompt[start:end])


class TestSummarize:
    def test_empty_list_makes_no_call(self):
        client = CannedCompletionClient(default="unused")
        assert InsightNarrator(client).summarize([]) == "No tasks available for analysis."
        assert client.call_count == 0

    def test_sends_at_most_ten_tasks(self, make_task):
        tasks = [make_task(title=f"Task {i}") for i in range(25)]
        client = CannedCompletionClient(default="Group similar errands together.")

        result = InsightNarrator(client).summarize(tasks)

        assert result == "Group similar errands together."
        sent = _prompt_tasks(client.calls[0]["user_prompt"])
        assert [t["title"] for t in sent] == [f"Task {i}" for i in range(10)]
        assert client.calls[0]["temperature"] == 0.7
        assert client.calls[0]["max_tokens"] == 200

    def test_service_failure_returns_fallback(self, sample_task):
        client = CannedCompletionClient(default=CompletionUnavailable("quota"))
        assert InsightNarrator(client).summarize([sample_task]) == "Unable to generate insights at this time."

    def test_empty_reply_returns_fallback(self, sample_task):
        client = CannedCompletionClient(default="   ")
        assert InsightNarrator(client).summarize([sample_task]) == "No insights available at this time."

    def test_serialized_tasks_use_wire_names_without_owner(self, sample_task):
        payload = json.loads(serialize_tasks([sample_task]))[0]
        assert "userId" not in payload
        assert payload["title"] == "Test Task"
        assert "dueDate" in payload


class TestSuggestImprovements:
    def test_returns_reply(self, sample_task):
        client = CannedCompletionClient(default="Make the title more specific.")
        assert InsightNarrator(client).suggest_improvements(sample_task) == "Make the title more specific."
        assert "Test Task" in client.calls[0]["user_prompt"]

    def test_failure_fallback(self, sample_task):
        client = CannedCompletionClient(default=RuntimeError("boom"))
        assert InsightNarrator(client).suggest_improvements(sample_task) == "Unable to generate suggestions at this time."

    def test_empty_reply_fallback(self, sample_task):
        client = CannedCompletionClient(default="")
        assert InsightNarrator(client).suggest_improvements(sample_task) == "No suggestions available."


class TestSmartSuggestions:
    def test_empty_list_makes_no_call(self):
        client = CannedCompletionClient()
        result = InsightNarrator(client).smart_suggestions([])

        assert client.call_count == 0
        assert result.time_management_tips == ["Start by adding some tasks to get personalized suggestions."]
        assert result.suggested_categories == []

    def test_parses_fenced_json(self, make_task):
        reply = "```json\n" + json.dumps({
            "suggestedCategories": ["work", "errands"],
            "timeManagementTips": ["Batch errands"],
            "commonThemes": ["deadlines"],
        }) + "\n```"
        client = CannedCompletionClient(default=reply)

        result = InsightNarrator(client).smart_suggestions([make_task() for _ in range(20)])

        assert result.suggested_categories == ["work", "errands"]
        assert result.time_management_tips == ["Batch errands"]
        assert result.common_themes == ["deadlines"]
        assert len(_prompt_tasks(client.calls[0]["user_prompt"])) == 15

    def test_malformed_reply_fallback(self, sample_task):
        client = CannedCompletionClient(default="Here are some ideas!")
        result = InsightNarrator(client).smart_suggestions([sample_task])
        assert result.time_management_tips == ["Focus on completing high-priority tasks first."]
