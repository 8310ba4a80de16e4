"""Markdown link helpers for summary comments.

Commit summaries name files as ``[path/to/file]``; before posting, those
tokens become links to the file at the commit. Review comment headers link
the short content ids to the blob. Both kinds of link are folded back to
plain text when an old comment is read, so it can be matched and reused.

Paths are percent-encoded in blob URLs, so a link target never contains
whitespace or a closing parenthesis.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import quote, unquote

GITHUB_URL = "https://github.com"

# [abc123](https://github.com/o/r/blob/<ref>/<path>#<full sha>) -> <full sha>
# The target runs up to the first "#<id>)" on the line, which also covers
# comments posted before paths were encoded.
_SHA_LINK_RE = re.compile(r"\[(?:[0-9a-f]{1,6}|None)\]\(https://github\.com/[^\n]*?#([0-9a-f]+|None)\)")

# [short](https://github.com/o/r/blob/<40 hex sha>/<encoded path>) -> [<path>]
_FILE_LINK_RE = re.compile(r"\[[^\]\n]*?\]\(https://github\.com/[^)\s]*?/[0-9a-f]{40}/([^)\s]*?)\)")


def blob_url(owner: str, repo: str, ref: str, path: str) -> str:
    return f"{GITHUB_URL}/{owner}/{repo}/blob/{ref}/{quote(path)}"


def short_name(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def link_file_references(summary: str, filenames: Iterable[str], owner: str, repo: str, sha: str) -> str:
    """Replace every ``[filename]`` token with ``[basename](blob url)``.

    All tokens are rewritten in a single pass, so the label of a link that
    was just inserted is never matched again by a shorter path.
    """
    names = sorted(set(filenames), key=len, reverse=True)
    if not names:
        return summary
    token_re = re.compile(r"\[(" + "|".join(re.escape(name) for name in names) + r")\]")

    def _link(match: re.Match) -> str:
        filename = match.group(1)
        return f"[{short_name(filename)}]({blob_url(owner, repo, sha, filename)})"

    return token_re.sub(_link, summary)


def unlink_file_references(text: str) -> str:
    """Undo link_file_references: ``[c.py](.../blob/<sha>/a/b/c.py)`` -> ``[a/b/c.py]``."""
    return _FILE_LINK_RE.sub(lambda m: f"[{unquote(m.group(1))}]", text)


def strip_sha_links(text: str) -> str:
    """Collapse short content-id links in a review comment to the full id they anchor."""
    return _SHA_LINK_RE.sub(lambda m: m.group(1), text)
