"""Tests for run orchestration and the read-only status report."""

import types
from unittest.mock import MagicMock

import pytest
from github import GithubException

from prdigest_core.commits import CommitSummaryRun, format_commit_comment
from prdigest_core.files import FileSummaryRun
from prdigest_core.providers.anthropic import AnthropicSummarizer
from prdigest_core.providers.openai import OpenAISummarizer
from prdigest_core.runner import SummaryRun, _get_summarizer, collect_status, run_summary

HEAD = "c" * 40


def _base_config(**overrides):
    return {
        "github_token": "tok",
        "model": "openai",
        "model_name": None,
        "openai_api_key": "key",
        "anthropic_api_key": None,
        "temperature": 0.5,
        "max_tokens": 512,
        "max_query_length": 20000,
        "max_files": 20,
        "max_commits": 20,
        "summarize_files": True,
        "summarize_commits": True,
        **overrides,
    }


class TestGetSummarizer:
    def test_openai_is_default_provider(self):
        summarizer = _get_summarizer(_base_config())
        assert isinstance(summarizer, OpenAISummarizer)
        assert summarizer.MODEL == "gpt-4o-mini"

    def test_model_name_and_limits_applied(self):
        summarizer = _get_summarizer(_base_config(model_name="gpt-4o", temperature=0.1, max_query_length=500))
        assert summarizer.MODEL == "gpt-4o"
        assert summarizer.TEMPERATURE == 0.1
        assert summarizer.MAX_QUERY_LENGTH == 500

    def test_anthropic_provider(self, mocker):
        mocker.patch.object(AnthropicSummarizer, "__init__", return_value=None)
        summarizer = _get_summarizer(_base_config(model="anthropic", anthropic_api_key="ant"))
        assert isinstance(summarizer, AnthropicSummarizer)

    def test_unknown_provider_raises(self):
        with pytest.raises(ValueError, match="Unknown model provider"):
            _get_summarizer(_base_config(model="llama"))


def _mock_pr():
    pr = MagicMock()
    pr.head.sha = HEAD
    return pr


class TestRunSummary:
    def test_files_then_commits_with_file_summaries(self, mocker):
        pr = _mock_pr()
        repo = MagicMock()
        repo.get_pull.return_value = pr
        summarizer = MagicMock()
        mocker.patch("prdigest_core.runner._get_summarizer", return_value=summarizer)
        files = mocker.patch(
            "prdigest_core.runner.process_files",
            return_value=FileSummaryRun(summaries={"a.py": "* a", "b.py": "* b"}, generated=1),
        )
        commits = mocker.patch(
            "prdigest_core.runner.process_commits",
            return_value=CommitSummaryRun(summaries=[(HEAD, "* head")], generated=1, pr_summary_posted=True),
        )

        result = run_summary("octo/demo", 7, _base_config(), repo_obj=repo)

        assert isinstance(result, SummaryRun)
        assert result.head_sha == HEAD
        assert result.file_summaries == {"a.py": "* a", "b.py": "* b"}
        assert result.files_generated == 1
        assert result.commit_summaries == [(HEAD, "* head")]
        assert result.commits_generated == 1
        assert result.pr_summary_posted is True
        files.assert_called_once_with(pr, repo, summarizer, mocker.ANY)
        assert commits.call_args.args[3] == {"a.py": "* a", "b.py": "* b"}

    def test_disabled_steps_are_skipped(self, mocker):
        repo = MagicMock()
        repo.get_pull.return_value = _mock_pr()
        mocker.patch("prdigest_core.runner._get_summarizer", return_value=MagicMock())
        files = mocker.patch("prdigest_core.runner.process_files")
        commits = mocker.patch("prdigest_core.runner.process_commits")

        result = run_summary(
            "octo/demo", 7, _base_config(summarize_files=False, summarize_commits=False), repo_obj=repo
        )

        files.assert_not_called()
        commits.assert_not_called()
        assert result.file_summaries == {}
        assert result.commit_summaries == []
        assert result.files_generated == 0

    def test_missing_pr_raises_value_error(self, mocker):
        repo = MagicMock()
        repo.get_pull.side_effect = GithubException(404, "Not Found", None)

        with pytest.raises(ValueError, match="PR #7 not found"):
            run_summary("octo/demo", 7, _base_config(), repo_obj=repo)


class TestCollectStatus:
    def test_reports_summarized_commits_and_file_keys(self):
        pr = _mock_pr()
        c1 = "a" * 40
        pr.get_commits.return_value = [types.SimpleNamespace(sha=c1), types.SimpleNamespace(sha=HEAD)]
        pr.get_issue_comments.return_value = [MagicMock(body=format_commit_comment(c1, "* one"))]
        review_comment = MagicMock(body="aaa111 - bbb222 のGPT要約:\n* file")
        pr.get_review_comments.return_value = [review_comment, MagicMock(body="nit")]
        repo = MagicMock()
        repo.get_pull.return_value = pr

        status = collect_status("octo/demo", 7, _base_config(), repo_obj=repo)

        assert status.commits == [(c1, True), (HEAD, False)]
        assert status.file_summaries == ["aaa111-bbb222"]
        pr.create_issue_comment.assert_not_called()
        review_comment.delete.assert_not_called()
