"""git 操作ユーティリティ。

方針:
- RFC ごとに作業ブランチを分ける（rfc-<name>）
- approve は main ブランチ上で merge → 番号付け → README 更新 → commit
- 作業ツリーが汚れている場合は何もしない（呼び出し側で is_clean を確認）

このモジュールはローカルgit操作のみ提供。
GitHub操作は github_ops で扱う。
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)


class GitError(RuntimeError):
    """git exited with a non-zero status."""


@dataclass
class GitRepo:
    path: Path

    def run(self, args: list[str]) -> str:
        log.debug("git %s", " ".join(args))
        proc = subprocess.run(
            ["git", *args],
            cwd=self.path,
            text=True,
            capture_output=True,
            check=False,
        )
        if proc.returncode != 0:
            raise GitError(proc.stderr.strip() or f"git {args[0]} failed")
        return proc.stdout

    def is_clean(self) -> bool:
        return self.run(["status", "-z"]) == ""

    def current_branch(self) -> str:
        return self.run(["rev-parse", "--abbrev-ref", "HEAD"]).strip()

    def remote_url(self, remote: str = "origin") -> str | None:
        try:
            url = self.run(["config", "--get", f"remote.{remote}.url"]).strip()
        except GitError:
            return None
        return url or None

    def fetch(self, remote: str = "origin") -> None:
        self.run(["fetch", remote])

    def checkout(self, branch: str, create: bool = False) -> None:
        if create:
            self.run(["checkout", "-b", branch])
        else:
            self.run(["checkout", branch])

    def pull_rebase(self) -> None:
        # --rebase=preserve was removed in git 2.34
        self.run(["pull", "--rebase=merges"])

    def merge_no_commit(self, branch: str) -> None:
        self.run(["merge", "--no-commit", branch])

    def add(self, path: Path | str, intent_to_add: bool = False) -> None:
        args = ["add"]
        if intent_to_add:
            args.append("--intent-to-add")
        self.run([*args, str(path)])

    def mv(self, src: Path | str, dst: Path | str) -> None:
        self.run(["mv", str(src), str(dst)])

    def commit(self, message: str) -> None:
        self.run(["commit", "--message", message])


def rfc_branch(name: str) -> str:
    """RFC 単位のブランチ名。

    例: name="my-feature" -> "rfc-my-feature"
    """

    name = name.strip()
    if not name:
        raise ValueError("rfc name is required")
    return f"rfc-{name}"
