from __future__ import annotations

from pathlib import Path

import pytest

from rfcctl.config import RfcConfig
from rfcctl.store import RfcStore
from rfcctl.templates import DEFAULT_TEMPLATE
from rfcctl.workflow import Workspace


def rfc_text(feature: str, *, rfc_pr: str = "", impl_pr: str = "") -> str:
    empty = "(leave this empty)"
    return (
        f"- Feature Name: {feature}\n"
        "- Start Date: 2026-01-01\n"
        f"- RFC PR: {rfc_pr or empty}\n"
        f"- Implementation PR: {impl_pr or empty}\n"
        "\n"
        "# Summary\n"
        "\n"
        "something\n"
    )


class FakeRepo:
    """GitRepo の代わり。呼ばれたコマンドを記録し、mv だけ実際に行う。"""

    def __init__(self, *, clean: bool = True, branch: str = "rfc-foo", url: str | None = None):
        self.clean = clean
        self.branch = branch
        self.url = url
        self.calls: list[tuple] = []

    def is_clean(self) -> bool:
        self.calls.append(("status",))
        return self.clean

    def current_branch(self) -> str:
        return self.branch

    def remote_url(self, remote: str = "origin") -> str | None:
        return self.url

    def fetch(self, remote: str = "origin") -> None:
        self.calls.append(("fetch", remote))

    def checkout(self, branch: str, create: bool = False) -> None:
        self.calls.append(("checkout", branch, create))

    def pull_rebase(self) -> None:
        self.calls.append(("pull",))

    def merge_no_commit(self, branch: str) -> None:
        self.calls.append(("merge", branch))

    def add(self, path, intent_to_add: bool = False) -> None:
        self.calls.append(("add", Path(path).name, intent_to_add))

    def mv(self, src, dst) -> None:
        Path(src).rename(dst)
        self.calls.append(("mv", Path(src).name, Path(dst).name))

    def commit(self, message: str) -> None:
        self.calls.append(("commit", message))


@pytest.fixture()
def rfc_root(tmp_path: Path) -> Path:
    """README と rfcs/ を持つ最小のリポジトリ構成。"""
    (tmp_path / "README.md").write_text("# Project\n\nHello.\n", encoding="utf-8")
    rfcs = tmp_path / "rfcs"
    rfcs.mkdir()
    (rfcs / "0000-template.md").write_text(DEFAULT_TEMPLATE, encoding="utf-8")
    (rfcs / "0000-pending-thing.md").write_text(rfc_text("pending-thing"), encoding="utf-8")
    (rfcs / "0001-first.md").write_text(rfc_text("first", rfc_pr="[p#1](x/1)"), encoding="utf-8")
    (rfcs / "0002-done.md").write_text(
        rfc_text("done", rfc_pr="[p#2](x/2)", impl_pr="[p#3](x/3)"), encoding="utf-8"
    )
    return tmp_path


@pytest.fixture()
def fake_repo() -> FakeRepo:
    return FakeRepo()


@pytest.fixture()
def workspace(rfc_root: Path, fake_repo: FakeRepo, monkeypatch) -> Workspace:
    monkeypatch.delenv("PROJECT_NAME", raising=False)
    monkeypatch.delenv("PR_PATH", raising=False)
    cfg = RfcConfig(project_name="proj", pr_path="https://github.com/me/proj/pull")
    return Workspace(
        root=rfc_root,
        config=cfg,
        repo=fake_repo,  # type: ignore[arg-type]
        store=RfcStore(rfc_root),
    )
