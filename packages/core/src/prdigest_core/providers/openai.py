from __future__ import annotations

from openai import OpenAI

from prdigest_core.errors import CompletionFailure
from prdigest_core.providers.base import BaseSummarizer


class OpenAISummarizer(BaseSummarizer):
    """Default provider: one chat completion per summary, first choice wins."""

    MODEL = "gpt-4o-mini"
    TEMPERATURE = 0.5

    def __init__(self, api_key: str):
        self.client = OpenAI(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str | None:
        response = self.client.chat.completions.create(
            model=self.MODEL,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
        )
        if not response.choices:
            raise CompletionFailure("response contained no choices")
        return response.choices[0].message.content
