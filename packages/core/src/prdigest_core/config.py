import os
from pathlib import Path
from typing import Optional

import yaml

# Error strings posted in place of a summary. They are part of the comment
# format, so changing them makes older comments look like fresh summaries.
SUMMARY_ERROR_TEXT = "エラー: 要約を生成できませんでした"
MERGE_COMMIT_TEXT = "Not generating summary for merge commits"
PR_ERROR_TEXT = "Error: couldn't generate summary"
PR_TOO_BIG_TEXT = "Error: couldn't generate summary. PR too big"
PR_SUMMARY_FAILED_TEXT = "Error summarizing PR"

DEFAULT_CONFIG: dict = {
    "model": "openai",
    "model_name": None,  # None = provider default (gpt-4o-mini / claude)
    "temperature": 0.5,
    "max_tokens": 512,
    "max_query_length": 20000,  # characters; cheap stand-in for a token limit
    "max_files": 20,  # newly generated file summaries per run
    "max_commits": 20,  # newly generated commit summaries per run
    "summarize_files": True,
    "summarize_commits": True,
}


def load_config(config_path: str = ".prdigest.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prdigest.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")

    return config
