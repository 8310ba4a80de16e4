from __future__ import annotations

from github import Github

from prdigest_core.errors import MissingFileList


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def get_diff(pr):
    return pr.get_files()


def get_base_tree(repo, base_sha: str) -> dict[str, str]:
    """Map every path in the base commit's tree to its blob sha."""
    tree = repo.get_git_tree(base_sha, recursive=True)
    return {element.path: element.sha for element in tree.tree}


def get_commit(repo, sha: str):
    """Fetch a commit, raising MissingFileList if GitHub omitted its files."""
    commit = repo.get_commit(sha)
    if commit.raw_data.get("files") is None:
        raise MissingFileList(sha)
    return commit


def get_commit_diff(repo, parent_sha: str, sha: str) -> list[tuple[str, str]]:
    """Return ``(filename, patch)`` for each file changed between parent and commit."""
    comparison = repo.compare(parent_sha, sha)
    return [(f.filename, f.patch or "") for f in comparison.files]
