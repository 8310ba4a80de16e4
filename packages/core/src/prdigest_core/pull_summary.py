"""Pull-request-level summary synthesized from the file and commit summaries."""

from __future__ import annotations

import logging

from prdigest_core.config import PR_ERROR_TEXT, PR_TOO_BIG_TEXT
from prdigest_core.errors import PromptTooLarge
from prdigest_core.prompts import PR_SYSTEM_PROMPT, build_pr_prompt

logger = logging.getLogger(__name__)


def summarize_pr(
    file_summaries: dict[str, str],
    commit_summaries: list[tuple[str, str]],
    summarizer,
    max_length: int = 20000,
) -> str:
    """Return a short PR summary, or one of the fixed PR error strings."""
    try:
        prompt = build_pr_prompt(file_summaries, commit_summaries, max_length)
    except PromptTooLarge as e:
        logger.warning("Not summarizing PR: %s", e)
        return PR_TOO_BIG_TEXT
    return summarizer.request_summary(PR_SYSTEM_PROMPT, prompt, error_text=PR_ERROR_TEXT)
