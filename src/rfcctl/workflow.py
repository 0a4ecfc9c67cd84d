"""RFC の進行（new → approve → implement）。

流れ:
1. new: main から `rfc-<name>` ブランチを切り、テンプレートから `0000-<name>.md` を作る
2. approve: PR で議論した後、main に merge して番号を振り、README を更新して commit
3. implement: 実装 PR を記入し、README から外して commit

ファイル読み書きと git 呼び出しの順番だけを扱う。
README の書き換えは readme / sections モジュールに任せる。
"""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass
from pathlib import Path

from rfcctl.config import RfcConfig, load_config, resolve_pr_path, resolve_project_name
from rfcctl.git_ops import GitRepo, rfc_branch
from rfcctl.readme import update_readme
from rfcctl.store import RfcError, RfcStore
from rfcctl.templates import (
    DEFAULT_TEMPLATE,
    IMPLEMENTATION_PR_TAG,
    RFC_PR_TAG,
    fill_template,
    populate_pr,
    slugify,
)

log = logging.getLogger(__name__)


@dataclass
class Workspace:
    root: Path
    config: RfcConfig
    repo: GitRepo
    store: RfcStore

    def update_readme(self) -> Path:
        return update_readme(
            self.store,
            readme=self.config.rfcs.readme,
            section=self.config.rfcs.section,
        )

    @property
    def readme_path(self) -> Path:
        return self.root / self.config.rfcs.readme


def open_workspace(root: Path, config: RfcConfig | None = None) -> Workspace:
    root = root.resolve()
    cfg = config or load_config(root)
    return Workspace(
        root=root,
        config=cfg,
        repo=GitRepo(root),
        store=RfcStore(root, cfg.rfcs.dir),
    )


def _require_clean(ws: Workspace, action: str) -> None:
    if not ws.repo.is_clean():
        raise RfcError(
            f"Cannot {action} until working tree is clean.\n"
            "Commit or stash all changes"
        )


def new_rfc(ws: Workspace, name: str, *, today: str | None = None) -> Path:
    """Start a new RFC on its own branch. Returns the new file path."""

    slug = slugify(name)
    if not slug:
        raise RfcError("RFC name is empty")

    template_path = ws.store.template_path
    if not template_path.is_file():
        raise RfcError(f"template not found: {template_path} (run `rfcctl init`)")

    branch = rfc_branch(slug)
    ws.repo.checkout(ws.config.git.main_branch)
    ws.repo.checkout(branch, create=True)
    log.info("new rfc %s on branch %s", slug, branch)

    date = today or time.strftime("%Y-%m-%d")
    text = fill_template(template_path.read_text(encoding="utf-8"), name=slug, date=date)

    out = ws.store.path(f"0000-{slug}")
    out.write_text(text, encoding="utf-8")
    ws.repo.add(out, intent_to_add=True)
    return out


def init_rfcs(ws: Workspace) -> Path:
    """Create `rfcs/` with the default template and index the README.

    The directory is removed again if the README cannot be updated.
    """

    rfc_dir = ws.store.rfc_dir
    if rfc_dir.exists():
        raise RfcError(f"{rfc_dir} already exists")

    rfc_dir.mkdir(parents=True)
    ws.store.template_path.write_text(DEFAULT_TEMPLATE, encoding="utf-8")
    try:
        ws.update_readme()
    except Exception:
        log.warning("init failed; removing %s", rfc_dir)
        shutil.rmtree(rfc_dir)
        raise
    log.info("initialised %s", rfc_dir)
    return rfc_dir


def _populate(ws: Workspace, path: Path, tag: str, pr_id: str) -> None:
    text = path.read_text(encoding="utf-8")
    new_text = populate_pr(
        text,
        tag=tag,
        pr_id=pr_id,
        project_name=resolve_project_name(ws.config, ws.root),
        pr_path=resolve_pr_path(ws.config, ws.repo),
    )
    if new_text == text:
        log.warning("%s: no empty `%s` line to fill", path, tag)
    path.write_text(new_text, encoding="utf-8")


def approve(ws: Workspace, rfc_id: str, pr_id: str) -> Path:
    """Move a pending RFC to the active state.

    Used after the RFC pull request has been submitted and discussed.
    Returns the path of the renumbered RFC.
    """

    path = ws.store.require(rfc_id)
    _require_clean(ws, "merge RFC")

    branch = ws.repo.current_branch()
    remote = ws.config.git.remote
    log.info("approve %s (PR %s) from branch %s", rfc_id, pr_id, branch)

    ws.repo.fetch(remote)
    ws.repo.checkout(ws.config.git.main_branch)
    ws.repo.pull_rebase()
    ws.repo.merge_no_commit(branch)

    _populate(ws, path, RFC_PR_TAG, pr_id)
    ws.repo.add(path)

    new_id = ws.store.next_id(rfc_id)
    new_path = ws.store.path(new_id)
    ws.repo.mv(path, new_path)

    ws.update_readme()
    ws.repo.add(ws.readme_path)

    ws.repo.commit(f"Approve RFC {rfc_id}")
    log.info("approved %s as %s", rfc_id, new_id)
    return new_path


def implement(ws: Workspace, rfc_id: str, pr_id: str) -> Path:
    """Record the implementation PR and drop the RFC from the active list."""

    path = ws.store.require(rfc_id)
    _require_clean(ws, "mark RFC as implemented")
    log.info("implement %s (PR %s)", rfc_id, pr_id)

    _populate(ws, path, IMPLEMENTATION_PR_TAG, pr_id)
    ws.repo.add(path)

    ws.update_readme()
    ws.repo.add(ws.readme_path)

    ws.repo.commit(f"Implement RFC {rfc_id}")
    return path
