"""Per-file summaries posted as inline review comments.

A summary comment is keyed by the pair of blob shas it describes: the file
in the base commit ("None" for an added file) and the file at the head of
the pull request. While both shas still match the PR, the comment body is
reused verbatim. When either changes the comment is stale and is deleted,
and the file gets a fresh summary.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from rich.console import Console

from prdigest_core.config import SUMMARY_ERROR_TEXT
from prdigest_core.errors import PromptTooLarge
from prdigest_core.gh.pull_request import get_base_tree, get_diff
from prdigest_core.prompts import FILE_SYSTEM_PROMPT, build_file_prompt
from prdigest_core.utils.links import blob_url, strip_sha_links

console = Console()
logger = logging.getLogger(__name__)

NO_ORIGIN = "None"
SUMMARY_MARKER = "のGPT要約:"

_HUNK_START_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)", re.MULTILINE)
_REVIEW_SUMMARY_RE = re.compile(
    rf"^([0-9a-f]+|{NO_ORIGIN}) - ([0-9a-f]+|{NO_ORIGIN}) {SUMMARY_MARKER}(?:\n|$)(.*)\Z",
    re.DOTALL,
)


def first_changed_line(patch: str) -> int | None:
    """Return the post-change start line of the first hunk, or None if the patch has no hunk header."""
    match = _HUNK_START_RE.search(patch)
    return int(match.group(1)) if match else None


@dataclass
class ModifiedFile:
    filename: str
    sha: str
    origin_sha: str
    diff: str
    hunk_start: int | None = None

    @property
    def key(self) -> str:
        return file_key(self.origin_sha, self.sha)

    @property
    def insertion_line(self) -> int:
        if self.hunk_start is None or self.hunk_start < 1:
            return 1
        return self.hunk_start

    @property
    def side(self) -> str:
        # A deletion-only hunk starts at line 0 of the new file, so anchor on the old side.
        if self.hunk_start == 0 and self.origin_sha != NO_ORIGIN:
            return "LEFT"
        return "RIGHT"


@dataclass
class PostedFileSummary:
    """A summary review comment already posted on the PR."""

    key: str
    text: str
    comment: object


def file_key(origin_sha: str, sha: str) -> str:
    return f"{origin_sha}-{sha}"


def parse_review_summary(body: str) -> tuple[str, str] | None:
    """Return ``(key, summary text)`` for a summary comment body, or None for any other comment."""
    match = _REVIEW_SUMMARY_RE.match(strip_sha_links(body or ""))
    if match is None:
        return None
    origin_sha, sha, text = match.groups()
    return file_key(origin_sha, sha), text


def format_review_summary(
    modified_file: ModifiedFile, summary: str, owner: str, repo_name: str, base_sha: str, head_sha: str
) -> str:
    origin_url = blob_url(owner, repo_name, base_sha, modified_file.filename)
    head_url = blob_url(owner, repo_name, head_sha, modified_file.filename)
    return (
        f"[{modified_file.origin_sha[:6]}]({origin_url}#{modified_file.origin_sha}) - "
        f"[{modified_file.sha[:6]}]({head_url}#{modified_file.sha}) {SUMMARY_MARKER}\n{summary}"
    )


def get_modified_files(repo, pr) -> list[ModifiedFile]:
    """Build one ModifiedFile per file in the PR, in the order GitHub lists them."""
    base_tree = get_base_tree(repo, pr.base.sha)
    modified = []
    for f in get_diff(pr):
        patch = f.patch or ""
        modified.append(
            ModifiedFile(
                filename=f.filename,
                sha=f.sha or NO_ORIGIN,
                origin_sha=base_tree.get(f.filename, NO_ORIGIN),
                diff=patch,
                hunk_start=first_changed_line(patch),
            )
        )
    return modified


def get_review_summaries(pr) -> list[PostedFileSummary]:
    summaries = []
    for comment in pr.get_review_comments():
        parsed = parse_review_summary(comment.body)
        if parsed is not None:
            summaries.append(PostedFileSummary(key=parsed[0], text=parsed[1], comment=comment))
    return summaries


def delete_stale_summaries(
    summaries: list[PostedFileSummary], modified_files: list[ModifiedFile]
) -> list[PostedFileSummary]:
    """Delete summary comments whose key matches no current file; return the survivors."""
    current_keys = {f.key for f in modified_files}
    kept = []
    for summary in summaries:
        if summary.key in current_keys:
            kept.append(summary)
            continue
        logger.info("Deleting stale file summary %s", summary.key)
        summary.comment.delete()
    return kept


def summarize_file(summarizer, modified_file: ModifiedFile, max_length: int) -> str:
    try:
        prompt = build_file_prompt(modified_file.filename, modified_file.diff, max_length)
    except PromptTooLarge as e:
        logger.warning("Not summarizing %s: %s", modified_file.filename, e)
        return SUMMARY_ERROR_TEXT
    return summarizer.request_summary(FILE_SYSTEM_PROMPT, prompt)


@dataclass
class FileSummaryRun:
    summaries: dict[str, str] = field(default_factory=dict)  # filename -> summary
    generated: int = 0


def process_files(pr, repo, summarizer, config: dict) -> FileSummaryRun:
    max_files = config.get("max_files", 20)
    max_length = config.get("max_query_length", 20000)
    owner, repo_name = repo.owner.login, repo.name
    base_sha, head_sha = pr.base.sha, pr.head.sha

    modified_files = get_modified_files(repo, pr)
    existing = delete_stale_summaries(get_review_summaries(pr), modified_files)
    existing_by_key = {}
    for summary in existing:
        existing_by_key.setdefault(summary.key, summary)

    head_commit = None
    run = FileSummaryRun()
    for modified_file in modified_files:
        if not modified_file.diff:
            # Binary file or pure rename
            continue

        reused = existing_by_key.get(modified_file.key)
        if reused is not None:
            run.summaries[modified_file.filename] = reused.text
            continue

        if run.generated >= max_files:
            logger.info("File summary cap (%d) reached, leaving %s for the next run", max_files, modified_file.filename)
            continue

        console.print(f"  Summarizing file: {modified_file.filename}")
        summary = summarize_file(summarizer, modified_file, max_length)
        run.summaries[modified_file.filename] = summary

        if head_commit is None:
            head_commit = repo.get_commit(head_sha)
        pr.create_review_comment(
            body=format_review_summary(modified_file, summary, owner, repo_name, base_sha, head_sha),
            commit=head_commit,
            path=modified_file.filename,
            line=modified_file.insertion_line,
            side=modified_file.side,
        )
        run.generated += 1

    return run


def summarize_files(pr, repo, summarizer, config: dict) -> dict[str, str]:
    """Summarize every changed file of ``pr`` and return ``{filename: summary}``.

    Files whose summary comment is still current are reused without a model
    call. At most ``config["max_files"]`` new summaries are generated per
    run; the remaining files are picked up by the next run.
    """
    return process_files(pr, repo, summarizer, config).summaries
