"""Prompt templates and builders for file, commit and pull request summaries.

Every builder measures the finished user prompt against a character budget
and raises PromptTooLarge instead of returning it. Character count is a
rough proxy for the model's token limit, but it lets an oversized diff be
rejected before anything is sent to the completion API.
"""

from __future__ import annotations

from collections.abc import Iterable

from prdigest_core.errors import PromptTooLarge
from prdigest_core.utils.links import unlink_file_references

SHARED_PROMPT = """あなたは経験豊富なソフトウェアエンジニアで、git diff を読んで変更内容を要約するアシスタントです。
差分の行頭が `+` の行は追加された行、`-` の行は削除された行、空白で始まる行は文脈として示された変更のない行です。
差分の先頭にある `@@ -a,b +c,d @@` の行は、変更前のファイルの a 行目から b 行分と、変更後のファイルの c 行目から d 行分を表しています。
"""

FILE_SYSTEM_PROMPT = f"""{SHARED_PROMPT}
次に示すのは、1つのファイルに対する git diff です。
この差分で行われた変更内容を高レベルで説明するコメントを作成してください。

出力形式:

    最初に「要約:」と書き、その後に変更点を箇条書きで記述してください。
    各箇条書きは * で始めてください。

**必ず日本語で出力してください。英語は使用せず、すべての出力を日本語のみにしてください。**

例:

要約:
* 関数の引数に新しいオプション `timeout` を追加
* 不要なログ出力を削除
"""

COMMIT_SYSTEM_PROMPT = f"""{SHARED_PROMPT}
複数のファイルが変更されている場合、各ファイルの git diff の後には空行があり、その後に次のファイルの git diff が続きます。

変更が1つまたは2つのファイルに関するものであれば、コメントの末尾に
[path/to/modified/file.py], [path/to/another/file.json] のようにファイル名を付けてください。
3つ以上のファイルにまたがる変更にはファイル名を付けないでください。
ファイル名はこの形式で末尾にのみ記載し、`[` と `]` は他の目的に使わないでください。

コメントは1行に1つずつ、先頭に `*` を付けた箇条書きにしてください。
コード中のコメントをそのまま写さないでください。
読みやすさを最優先にし、本当に重要な点だけに絞ってください。迷ったら書かないでください。

**必ず日本語で出力してください。英語は使用しないでください。**

要約の例:
```
* 返される録音数を `10` から `100` に増加 [packages/server/recordings_api.ts], [packages/server/constants.ts]
* GitHub Action 名のタイポを修正 [.github/workflows/ai-commit-summary.yml]
* テストファイルの数値許容誤差を引き下げ
```
最後の例は3つ以上のファイルが関係するため、ファイル名を付けていません。
例の文言をそのまま出力に含めないでください。
"""

PR_SYSTEM_PROMPT = """あなたは優秀なプログラマーであり、プルリクエストの要約を行おうとしています。
このプルリクエストに含まれるすべてのコミットと、変更されたすべてのファイルの要約を確認しました。
一部のコミット要約やファイル要約には誤りが含まれている可能性があります。

このプルリクエストの内容を要約してください。

    箇条書きで出力し、各項目の先頭には「*」を付けてください。
    高レベルな説明を行い、コミット要約やファイル要約をそのまま繰り返さないでください。
    最も重要なポイントだけを、数項目にとどめて記載してください。
"""


def check_prompt_length(prompt: str, max_length: int) -> str:
    """Return ``prompt`` unchanged, or raise PromptTooLarge if it is over budget."""
    if len(prompt) > max_length:
        raise PromptTooLarge(len(prompt), max_length)
    return prompt


def format_git_diff(filename: str, patch: str) -> str:
    lines = [f"--- a/{filename}", f"+++ b/{filename}"]
    lines.extend(patch.split("\n"))
    lines.append("")
    return "\n".join(lines)


def build_file_prompt(filename: str, patch: str, max_length: int) -> str:
    prompt = f"要約するための {filename} の GIT DIFF:\n```\n{patch}\n```\n\n要約:\n"
    return check_prompt_length(prompt, max_length)


def build_commit_prompt(files: Iterable[tuple[str, str]], max_length: int) -> str:
    """Build the prompt for one commit from ``(filename, patch)`` pairs.

    Files are concatenated in the order given, which is the order the
    compare endpoint reported them in.
    """
    raw_diff = "\n".join(format_git_diff(filename, patch) for filename, patch in files)
    prompt = f"THE GIT DIFF TO BE SUMMARIZED:\n```\n{raw_diff}\n```\n\nTHE SUMMARY:\n"
    return check_prompt_length(prompt, max_length)


def build_pr_prompt(
    file_summaries: dict[str, str],
    commit_summaries: list[tuple[str, str]],
    max_length: int,
) -> str:
    commits = "\n".join(
        f"Commit #{idx}:\n{unlink_file_references(summary)}"
        for idx, (_, summary) in enumerate(commit_summaries, 1)
    )
    files = "\n".join(f"File {filename}:\n{summary}" for filename, summary in file_summaries.items())
    prompt = (
        f"THE COMMIT SUMMARIES:\n```\n{commits}\n```\n\n"
        f"THE FILE SUMMARIES:\n```\n{files}\n```\n\n"
        "Reminder - write only the most important points. No more than a few bullet points.\n"
        "THE PULL REQUEST SUMMARY:\n"
    )
    return check_prompt_length(prompt, max_length)
