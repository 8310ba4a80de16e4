"""CLI entry point for prdigest.

Commands:
  summarize: summarize a pull request's files and commits and post the results
  status:    show which commits and files already carry a summary comment
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.logging import RichHandler

from prdigest_cli.commands.status import status_cmd
from prdigest_cli.commands.summarize import summarize_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("prdigest"),
    prog_name="prdigest",
)
@click.option(
    "--config",
    "config_path",
    default=".prdigest.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRDIGEST_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Post GPT summaries of a pull request's files and commits."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(summarize_cmd)
main.add_command(status_cmd)
