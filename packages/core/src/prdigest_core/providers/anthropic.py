from __future__ import annotations

from prdigest_core.errors import CompletionFailure
from prdigest_core.providers.base import BaseSummarizer


class AnthropicSummarizer(BaseSummarizer):
    """Claude provider, installed with the ``anthropic`` extra."""

    MODEL = "claude-sonnet-4-20250514"
    TEMPERATURE = 0.5

    def __init__(self, api_key: str):
        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "model: anthropic needs the Anthropic SDK, which prdigest does not install by default. "
                "Run `pip install 'prdigest[anthropic]'` or switch to model: openai."
            )
        self.client = anthropic.Anthropic(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str | None:
        message = self.client.messages.create(
            model=self.MODEL,
            max_tokens=self.MAX_TOKENS,
            temperature=self.TEMPERATURE,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        # Summaries are plain text; tool-use and thinking blocks carry no "text".
        parts = [block.text for block in message.content if getattr(block, "type", None) == "text"]
        if not parts:
            raise CompletionFailure(f"no text in response (stop_reason={message.stop_reason})")
        return "".join(parts).strip()
