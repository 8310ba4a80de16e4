"""Core PR summarization orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from github import GithubException
from rich.console import Console

from prdigest_core.commits import get_commit_summaries, process_commits
from prdigest_core.files import get_review_summaries, process_files
from prdigest_core.gh.pull_request import get_pull, get_repo
from prdigest_core.providers.anthropic import AnthropicSummarizer
from prdigest_core.providers.openai import OpenAISummarizer

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class SummaryRun:
    """Result returned by run_summary."""

    repo: str
    pr_number: int
    head_sha: str
    file_summaries: dict[str, str] = field(default_factory=dict)
    commit_summaries: list[tuple[str, str]] = field(default_factory=list)
    files_generated: int = 0
    commits_generated: int = 0
    pr_summary_posted: bool = False


@dataclass
class SummaryStatus:
    """Which commits and files of a PR already carry a summary comment."""

    repo: str
    pr_number: int
    head_sha: str
    commits: list[tuple[str, bool]] = field(default_factory=list)  # (sha, summarized)
    file_summaries: list[str] = field(default_factory=list)  # "<origin sha>-<sha>" keys


def _get_summarizer(config: dict):
    model = config["model"]
    if model == "openai":
        summarizer = OpenAISummarizer(api_key=config["openai_api_key"])
    elif model == "anthropic":
        summarizer = AnthropicSummarizer(api_key=config["anthropic_api_key"])
    else:
        raise ValueError(f"Unknown model provider: {model!r}. Choose 'openai' or 'anthropic'.")
    return summarizer.configure(
        model=config.get("model_name"),
        temperature=config.get("temperature"),
        max_tokens=config.get("max_tokens"),
        max_query_length=config.get("max_query_length"),
    )


def _load_pull(repo: str, pr_number: int, config: dict, repo_obj=None):
    this_repo = repo_obj if repo_obj is not None else get_repo(repo, token=config["github_token"])
    try:
        return this_repo, get_pull(this_repo, pr_number)
    except GithubException:
        raise ValueError(f"PR #{pr_number} not found in {repo}.")


def run_summary(repo: str, pr_number: int, config: dict, repo_obj=None) -> SummaryRun:
    """Summarize the files and commits of one pull request and post the results.

    Files are summarized first so the PR-level summary, which is generated
    together with the head commit's summary, can draw on them.
    """
    this_repo, this_pr = _load_pull(repo, pr_number, config, repo_obj)
    summarizer = _get_summarizer(config)
    result = SummaryRun(repo=repo, pr_number=pr_number, head_sha=this_pr.head.sha)

    if config.get("summarize_files", True):
        console.print(f"[cyan]Summarizing changed files of {repo}#{pr_number}[/cyan]")
        file_run = process_files(this_pr, this_repo, summarizer, config)
        result.file_summaries = file_run.summaries
        result.files_generated = file_run.generated
        console.print(
            f"  {file_run.generated} new file summary(ies), "
            f"{len(file_run.summaries) - file_run.generated} reused."
        )

    if config.get("summarize_commits", True):
        console.print(f"[cyan]Summarizing commits of {repo}#{pr_number}[/cyan]")
        commit_run = process_commits(this_pr, this_repo, summarizer, result.file_summaries, config)
        result.commit_summaries = commit_run.summaries
        result.commits_generated = commit_run.generated
        result.pr_summary_posted = commit_run.pr_summary_posted
        console.print(
            f"  {commit_run.generated} new commit summary(ies), "
            f"{len(commit_run.summaries) - commit_run.generated} reused."
        )

    if result.pr_summary_posted:
        console.print("[green]PR summary posted.[/green]")
    return result


def collect_status(repo: str, pr_number: int, config: dict, repo_obj=None) -> SummaryStatus:
    """Report existing summaries without calling the model or touching any comment."""
    _, this_pr = _load_pull(repo, pr_number, config, repo_obj)
    summarized = get_commit_summaries(this_pr.get_issue_comments())
    return SummaryStatus(
        repo=repo,
        pr_number=pr_number,
        head_sha=this_pr.head.sha,
        commits=[(c.sha, c.sha in summarized) for c in this_pr.get_commits()],
        file_summaries=[s.key for s in get_review_summaries(this_pr)],
    )
