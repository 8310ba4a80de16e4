"""Exceptions raised by the summarization core.

Only MissingFileList is allowed to escape a summarizer. PromptTooLarge and
CompletionFailure are caught at the model-call site and turned into a fixed
error string so one file or commit can never abort the whole run.
"""

from __future__ import annotations


class PrdigestError(Exception):
    """Base class for all prdigest errors."""


class PromptTooLarge(PrdigestError):
    """The assembled prompt is longer than the configured character budget."""

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"Prompt is {length} characters, limit is {limit}")


class CompletionFailure(PrdigestError):
    """The completion API call failed or returned no usable choice."""


class MissingFileList(PrdigestError):
    """The hosting API returned a commit without its list of files."""

    def __init__(self, sha: str):
        self.sha = sha
        super().__init__(f"Commit {sha} has no file list")
