"""Base summarizer implementing the Template Method pattern.

All providers share the same request algorithm:
    request_summary() → size pre-check → _complete() → _call_api()   ← only this differs per provider

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the first choice's text

Summaries are best-effort. request_summary never raises: an oversized
prompt or a failed call is logged and replaced by a fixed error string, so
the caller always has something to post.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from prdigest_core.config import SUMMARY_ERROR_TEXT
from prdigest_core.errors import CompletionFailure, PromptTooLarge
from prdigest_core.prompts import check_prompt_length

logger = logging.getLogger(__name__)

# Shared defaults. Subclasses may override as class attributes if needed.
_MAX_TOKENS = 512
_MAX_QUERY_LENGTH = 20000


class BaseSummarizer(ABC):
    MODEL: str = ""
    TEMPERATURE: float = 0.5
    MAX_TOKENS: int = _MAX_TOKENS
    MAX_QUERY_LENGTH: int = _MAX_QUERY_LENGTH

    def configure(
        self,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        max_query_length: int | None = None,
    ) -> BaseSummarizer:
        """Override the class-level defaults on this instance; None keeps the default."""
        if model:
            self.MODEL = model
        if temperature is not None:
            self.TEMPERATURE = temperature
        if max_tokens is not None:
            self.MAX_TOKENS = max_tokens
        if max_query_length is not None:
            self.MAX_QUERY_LENGTH = max_query_length
        return self

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def request_summary(self, system_prompt: str, user_prompt: str, error_text: str = SUMMARY_ERROR_TEXT) -> str:
        """Send one completion request and return its text, or ``error_text``."""
        try:
            check_prompt_length(user_prompt, self.MAX_QUERY_LENGTH)
            return self._complete(system_prompt, user_prompt)
        except PromptTooLarge as e:
            logger.warning("%s: prompt not sent: %s", self.__class__.__name__, e)
        except CompletionFailure as e:
            logger.error("%s API failed: %s", self.__class__.__name__, e)
        return error_text

    # ------------------------------------------------------------------ #
    # Abstract: implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str | None:
        """Make a single API call and return the first choice's text.

        May raise anything or return None; _complete turns both into a
        CompletionFailure.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _complete(self, system_prompt: str, user_prompt: str) -> str:
        logger.debug(
            "%s: requesting summary (%d prompt chars, model %s)",
            self.__class__.__name__,
            len(user_prompt),
            self.MODEL,
        )
        try:
            text = self._call_api(system_prompt, user_prompt)
        except CompletionFailure:
            raise
        except Exception as e:
            raise CompletionFailure(str(e)) from e
        if not text:
            raise CompletionFailure("response contained no text")
        return text
