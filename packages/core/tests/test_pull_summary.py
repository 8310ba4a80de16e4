"""Tests for the PR-level summary."""

from prdigest_core.config import PR_ERROR_TEXT, PR_TOO_BIG_TEXT, SUMMARY_ERROR_TEXT
from prdigest_core.prompts import PR_SYSTEM_PROMPT
from prdigest_core.providers.base import BaseSummarizer
from prdigest_core.pull_summary import summarize_pr


class _StubSummarizer(BaseSummarizer):
    def __init__(self, reply="* PR の要約"):
        self.reply = reply
        self.calls = []

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


def test_returns_synthesized_summary():
    summarizer = _StubSummarizer()
    result = summarize_pr({"a.py": "* a"}, [("1" * 40, "* one")], summarizer)
    assert result == "* PR の要約"
    system, user = summarizer.calls[0]
    assert system == PR_SYSTEM_PROMPT
    assert "Commit #1:\n* one" in user
    assert "File a.py:\n* a" in user


def test_too_big_returns_distinct_error_without_call():
    summarizer = _StubSummarizer()
    result = summarize_pr({"a.py": "x" * 5000}, [], summarizer, max_length=1000)
    assert result == PR_TOO_BIG_TEXT
    assert summarizer.calls == []


def test_model_failure_returns_pr_error_text():
    result = summarize_pr({}, [("1" * 40, "* one")], _StubSummarizer(reply=RuntimeError("boom")))
    assert result == PR_ERROR_TEXT
    assert result != SUMMARY_ERROR_TEXT
