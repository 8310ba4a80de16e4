"""status command: show which parts of a PR already have summary comments."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from prdigest_core.runner import collect_status

console = Console()


@click.command("status")
@click.option("--repo", required=True, help="GitHub repository (owner/name).")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.pass_context
def status_cmd(ctx, repo: str, pr_number: int):
    """Show the summary state of a pull request without changing anything.

    Lists each commit as summarized or pending, and the file summary
    comments currently posted with the content ids they describe.
    """
    from prdigest_cli.auth import resolve_github_token
    from prdigest_core.config import load_config

    config_path = ctx.obj.get("config_path", ".prdigest.yml") if ctx.obj else ".prdigest.yml"
    config = load_config(config_path)
    token = resolve_github_token()
    if not token:
        raise click.UsageError("No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.")
    config["github_token"] = token

    try:
        status = collect_status(repo, pr_number, config)
    except ValueError as e:
        raise click.ClickException(str(e))

    table = Table(title=f"Commit summaries for {repo}#{pr_number}", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", width=4)
    table.add_column("SHA", width=8)
    table.add_column("State", width=12)

    for idx, (sha, summarized) in enumerate(status.commits, 1):
        state = "[green]summarized[/green]" if summarized else "[yellow]pending[/yellow]"
        label = f"{sha[:7]}*" if sha == status.head_sha else sha[:7]
        table.add_row(str(idx), label, state)
    console.print(table)

    if not status.file_summaries:
        console.print("[yellow]No file summary comments found.[/yellow]")
        return
    console.print(f"\n[bold]{len(status.file_summaries)}[/bold] file summary comment(s):")
    for key in status.file_summaries:
        origin, _, sha = key.partition("-")
        console.print(f"  {origin[:7]} → {sha[:7]}")
