"""summarize command: summarize a pull request and post the comments."""

from __future__ import annotations

import click
from rich.console import Console

from prdigest_cli.actions import pr_number_from_event, repo_from_env
from prdigest_core.runner import run_summary

console = Console()


def resolve_target(repo: str | None, pr_number: int | None) -> tuple[str, int]:
    """Fill in repo and PR number from the GitHub Actions environment when omitted."""
    repo = repo or repo_from_env()
    if pr_number is None:
        pr_number = pr_number_from_event()
    if not repo:
        raise click.UsageError("No repository given. Pass --repo or set GITHUB_REPOSITORY.")
    if pr_number is None:
        raise click.UsageError("No pull request given. Pass --pr or run on a pull_request event.")
    return repo, pr_number


@click.command("summarize")
@click.option("--repo", default=None, help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, default=None, help="Pull request number.")
@click.option(
    "--model",
    type=click.Choice(["openai", "anthropic"]),
    default=None,
    help="Completion provider. Overrides config file.",
)
@click.option(
    "--files/--no-files",
    "summarize_files",
    default=None,
    help="Post per-file summaries as review comments.",
)
@click.option(
    "--commits/--no-commits",
    "summarize_commits",
    default=None,
    help="Post per-commit summaries and the PR summary.",
)
@click.pass_context
def summarize_cmd(
    ctx,
    repo: str | None,
    pr_number: int | None,
    model: str | None,
    summarize_files: bool | None,
    summarize_commits: bool | None,
):
    """Summarize a pull request with an LLM and post the summaries on GitHub.

    Files and commits that already have a summary comment are not summarized
    again, so the command is safe to run on every push.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub token (or use gh CLI)
      OPENAI_API_KEY       Required when using --model openai
      ANTHROPIC_API_KEY    Required when using --model anthropic
    """
    from prdigest_cli.auth import resolve_github_token
    from prdigest_core.config import load_config

    config_path = ctx.obj.get("config_path", ".prdigest.yml") if ctx.obj else ".prdigest.yml"
    config = load_config(
        config_path,
        cli_overrides={
            "model": model,
            "summarize_files": summarize_files,
            "summarize_commits": summarize_commits,
        },
    )

    token = resolve_github_token()
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    config["github_token"] = token

    if config["model"] == "openai" and not config.get("openai_api_key"):
        raise click.UsageError("OPENAI_API_KEY environment variable is not set.")
    if config["model"] == "anthropic" and not config.get("anthropic_api_key"):
        raise click.UsageError("ANTHROPIC_API_KEY environment variable is not set.")

    repo, pr_number = resolve_target(repo, pr_number)
    try:
        result = run_summary(repo=repo, pr_number=pr_number, config=config)
    except ValueError as e:
        raise click.ClickException(str(e))

    console.print(
        f"\n[green]Done: {len(result.file_summaries)} file summary(ies) "
        f"({result.files_generated} new), "
        f"{len(result.commit_summaries)} commit summary(ies) "
        f"({result.commits_generated} new).[/green]"
    )
