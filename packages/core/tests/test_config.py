"""Tests for configuration loading."""

from prdigest_core.config import load_config


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["model"] == "openai"
    assert config["model_name"] is None
    assert config["temperature"] == 0.5
    assert config["max_tokens"] == 512
    assert config["max_query_length"] == 20000
    assert config["max_files"] == 20
    assert config["max_commits"] == 20
    assert config["summarize_files"] is True
    assert config["summarize_commits"] is True


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".prdigest.yml"
    cfg.write_text("model: anthropic\nmax_commits: 5\n")
    config = load_config(config_path=str(cfg))
    assert config["model"] == "anthropic"
    assert config["max_commits"] == 5
    assert config["max_files"] == 20


def test_empty_config_file_uses_defaults(tmp_path):
    cfg = tmp_path / ".prdigest.yml"
    cfg.write_text("")
    config = load_config(config_path=str(cfg))
    assert config["model"] == "openai"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".prdigest.yml"
    cfg.write_text("model: anthropic\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": "openai"})
    assert config["model"] == "openai"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".prdigest.yml"
    cfg.write_text("summarize_files: false\n")
    config = load_config(config_path=str(cfg), cli_overrides={"summarize_files": None})
    assert config["summarize_files"] is False


def test_false_cli_override_applied(tmp_path):
    config = load_config(config_path=str(tmp_path / "none.yml"), cli_overrides={"summarize_commits": False})
    assert config["summarize_commits"] is False


def test_env_vars_loaded(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    monkeypatch.setenv("OPENAI_API_KEY", "oai-key")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant-key")
    config = load_config(config_path="nonexistent.yml")
    assert config["github_token"] == "gh-token"
    assert config["openai_api_key"] == "oai-key"
    assert config["anthropic_api_key"] == "ant-key"
