"""Per-commit summaries posted as issue comments, plus the PR-level summary.

Each commit of the PR gets one comment starting with ``"<sha> のGPT要約:"``.
A commit that already has such a comment is never summarized again; its
text is read back from the comment. The head commit is not posted on its
own: once it has been summarized, one comment carries both its summary and
the summary of the whole pull request.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from github import GithubException
from rich.console import Console

from prdigest_core.config import MERGE_COMMIT_TEXT, PR_SUMMARY_FAILED_TEXT, SUMMARY_ERROR_TEXT
from prdigest_core.errors import PromptTooLarge
from prdigest_core.gh.pull_request import get_commit, get_commit_diff
from prdigest_core.prompts import COMMIT_SYSTEM_PROMPT, build_commit_prompt
from prdigest_core.pull_summary import summarize_pr
from prdigest_core.utils.links import link_file_references

console = Console()
logger = logging.getLogger(__name__)

COMMIT_MARKER = "のGPT要約:"
PR_SUMMARY_HEADING = "PR全体の要約:"
# Older comments used this heading for the running PR summary.
LEGACY_PR_SUMMARY_HEADING = "PR summary so far:"

_COMMIT_COMMENT_RE = re.compile(rf"^([0-9a-f]+) {COMMIT_MARKER}")


@dataclass
class Repository:
    owner: str
    name: str


@dataclass
class DiffMetadata:
    """Context needed to summarize one commit and link the files it touches."""

    commit_id: str
    issue_number: int
    repository: Repository
    commit: object


@dataclass
class CommitSummaryRun:
    summaries: list[tuple[str, str]] = field(default_factory=list)
    generated: int = 0
    pr_summary_posted: bool = False


def commit_marker(sha: str) -> str:
    return f"{sha} {COMMIT_MARKER}"


def format_commit_comment(sha: str, summary: str, pr_summary: str | None = None) -> str:
    body = f"{commit_marker(sha)}\n\n{summary}"
    if pr_summary is not None:
        body += f"\n\n{PR_SUMMARY_HEADING}\n\n{pr_summary}"
    return body


def parse_commit_comment(body: str) -> str:
    """Return the commit's own summary from a commit comment body.

    Drops the marker line and anything from the PR summary heading onward.
    """
    for heading in (LEGACY_PR_SUMMARY_HEADING, PR_SUMMARY_HEADING):
        body = body.split(heading, 1)[0]
    return "\n".join(body.split("\n")[1:]).strip()


def get_commit_summaries(comments) -> dict[str, str]:
    """Map commit sha to the summary text of the first comment posted for it."""
    found: dict[str, str] = {}
    for comment in comments:
        body = comment.body or ""
        match = _COMMIT_COMMENT_RE.match(body)
        if match and match.group(1) not in found:
            found[match.group(1)] = parse_commit_comment(body)
    return found


def summarize_commit(repo, metadata: DiffMetadata, summarizer, max_length: int) -> str:
    """Summarize a single-parent commit against its parent."""
    parent_sha = metadata.commit.parents[0].sha
    try:
        files = get_commit_diff(repo, parent_sha, metadata.commit_id)
    except GithubException as e:
        logger.error("Could not compare %s with %s: %s", metadata.commit_id, parent_sha, e)
        return SUMMARY_ERROR_TEXT

    try:
        prompt = build_commit_prompt(files, max_length)
    except PromptTooLarge as e:
        logger.warning("Not summarizing commit %s: %s", metadata.commit_id, e)
        return SUMMARY_ERROR_TEXT

    summary = summarizer.request_summary(COMMIT_SYSTEM_PROMPT, prompt)
    return link_file_references(
        summary,
        [filename for filename, _ in files],
        metadata.repository.owner,
        metadata.repository.name,
        metadata.commit_id,
    )


def process_commits(pr, repo, summarizer, file_summaries: dict[str, str], config: dict) -> CommitSummaryRun:
    max_commits = config.get("max_commits", 20)
    max_length = config.get("max_query_length", 20000)
    repository = Repository(owner=repo.owner.login, name=repo.name)
    head_sha = pr.head.sha

    existing = get_commit_summaries(pr.get_issue_comments())
    run = CommitSummaryRun()
    head_summarized = False

    for commit in pr.get_commits():
        if commit.sha in existing:
            run.summaries.append((commit.sha, existing[commit.sha]))
            continue

        if run.generated >= max_commits:
            console.print(
                f"[yellow]Summarized {max_commits} commits; rerun to summarize the rest. "
                "This limit keeps the PR from being flooded with comments.[/yellow]"
            )
            break

        if commit.sha == head_sha:
            head_summarized = True

        console.print(f"  Summarizing commit: {commit.sha[:7]}")
        detail = get_commit(repo, commit.sha)
        if len(detail.parents) != 1:
            summary = MERGE_COMMIT_TEXT
        else:
            metadata = DiffMetadata(
                commit_id=commit.sha,
                issue_number=pr.number,
                repository=repository,
                commit=detail,
            )
            summary = summarize_commit(repo, metadata, summarizer, max_length)

        run.summaries.append((commit.sha, summary))
        run.generated += 1
        if commit.sha != head_sha:
            pr.create_issue_comment(format_commit_comment(commit.sha, summary))

    head_summary = next((summary for sha, summary in run.summaries if sha == head_sha), None)
    if head_summarized and head_summary is not None:
        try:
            pr_summary = summarize_pr(file_summaries, run.summaries, summarizer, max_length)
        except Exception as e:
            logger.error("PR summary failed: %s", e)
            pr_summary = PR_SUMMARY_FAILED_TEXT
        pr.create_issue_comment(format_commit_comment(head_sha, head_summary, pr_summary))
        run.pr_summary_posted = True

    return run


def summarize_commits(pr, repo, summarizer, file_summaries: dict[str, str], config: dict) -> list[tuple[str, str]]:
    """Summarize the commits of ``pr`` in order and return ``[(sha, summary), ...]``.

    Commits with an existing summary comment are reused. At most
    ``config["max_commits"]`` commits are newly summarized per run, after
    which processing stops. The PR summary is posted only when the head
    commit was summarized in this run.
    """
    return process_commits(pr, repo, summarizer, file_summaries, config).summaries
