"""GitHub操作（任意）。

- PR番号がコマンドラインで省略されたときだけ使う
- 現在のブランチに紐づく PR を `gh pr view` で引く

実装は `gh` CLI を利用（GitHub Actions / ローカルで一貫）。
"""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass
from pathlib import Path

from rfcctl.git_ops import GitError


@dataclass
class Gh:
    repo_path: Path

    def run(self, args: list[str]) -> str:
        try:
            proc = subprocess.run(
                ["gh", *args],
                cwd=self.repo_path,
                text=True,
                capture_output=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise GitError("gh CLI not found; pass the PR id explicitly") from e
        if proc.returncode != 0:
            raise GitError(proc.stderr.strip() or "gh failed")
        return proc.stdout.strip()

    def current_pr_number(self) -> str:
        """PR number of the pull request for the checked-out branch."""

        raw = json.loads(self.run(["pr", "view", "--json", "number"]))
        return str(raw["number"])
