"""Finding a GitHub token for the summarize command.

In a workflow run the token comes from ``GITHUB_TOKEN``. On a developer
machine prdigest borrows the session of the GitHub CLI, so no personal
access token has to be created just to summarize a PR.
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

GH_TIMEOUT_SECONDS = 5


def _token_from_gh_cli() -> str | None:
    try:
        completed = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=GH_TIMEOUT_SECONDS,
        )
    except FileNotFoundError:
        logger.debug("gh is not installed; no CLI session to borrow.")
        return None
    except subprocess.TimeoutExpired:
        logger.debug("gh auth token did not answer within %ss.", GH_TIMEOUT_SECONDS)
        return None

    if completed.returncode != 0:
        logger.debug("gh auth token exited with %s; not logged in?", completed.returncode)
        return None
    return completed.stdout.strip() or None


def resolve_github_token() -> str | None:
    """``GITHUB_TOKEN`` if set, else the gh CLI session token, else None."""
    return os.environ.get("GITHUB_TOKEN") or _token_from_gh_cli()
