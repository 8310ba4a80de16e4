"""Pull request lookup from a GitHub Actions environment.

When the bot runs as a workflow step on a ``pull_request`` event, the
repository and PR number do not have to be passed on the command line:
GITHUB_REPOSITORY names the repository and GITHUB_EVENT_PATH points at the
event payload.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def repo_from_env() -> str | None:
    return os.environ.get("GITHUB_REPOSITORY") or None


def pr_number_from_event(event_path: str | None = None) -> int | None:
    """Read the pull request number from the Actions event payload, if there is one."""
    event_path = event_path or os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        return None
    path = Path(event_path)
    if not path.exists():
        logger.warning("GITHUB_EVENT_PATH %s does not exist", event_path)
        return None

    with open(path, encoding="utf-8") as f:
        payload = json.load(f)

    if "pull_request" in payload:
        return payload["pull_request"]["number"]
    # issue_comment events on a PR carry the number on the issue.
    issue = payload.get("issue") or {}
    if "pull_request" in issue:
        return issue["number"]
    return None
