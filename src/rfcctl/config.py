"""config: リポジトリごとの設定。

設定ファイル: `rfcctl.toml`（リポジトリ直下、任意）

```toml
[project]
name = "my-project"
pr_path = "https://github.com/me/my-project/pull"

[rfcs]
dir = "rfcs"
readme = "README.md"
section = "Active RFCs"

[git]
main_branch = "master"
remote = "origin"
```

環境変数 PROJECT_NAME / PR_PATH はファイルより優先する。
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib  # type: ignore[no-redef]

from rfcctl.git_ops import GitRepo

CONFIG_FILE = "rfcctl.toml"

_GITHUB_REMOTE = [
    re.compile(r"\Agit@github\.com:(.+?)(?:\.git)?\Z"),
    re.compile(r"\Assh://git@github\.com/(.+?)(?:\.git)?\Z"),
    re.compile(r"\Ahttps://github\.com/(.+?)(?:\.git)?/?\Z"),
]


@dataclass
class RfcsConfig:
    dir: str = "rfcs"
    readme: str = "README.md"
    section: str = "Active RFCs"


@dataclass
class GitConfig:
    main_branch: str = "master"
    remote: str = "origin"


@dataclass
class RfcConfig:
    project_name: str = ""
    pr_path: str = ""
    rfcs: RfcsConfig = field(default_factory=RfcsConfig)
    git: GitConfig = field(default_factory=GitConfig)


def load_config(root: Path, path: Path | None = None) -> RfcConfig:
    if path is None:
        path = root / CONFIG_FILE
    raw: dict = {}
    if path.exists():
        raw = tomllib.loads(path.read_text(encoding="utf-8"))

    project = raw.get("project", {})
    rfcs = raw.get("rfcs", {})
    git = raw.get("git", {})

    return RfcConfig(
        project_name=os.environ.get("PROJECT_NAME") or str(project.get("name", "")),
        pr_path=os.environ.get("PR_PATH") or str(project.get("pr_path", "")),
        rfcs=RfcsConfig(
            dir=str(rfcs.get("dir", "rfcs")),
            readme=str(rfcs.get("readme", "README.md")),
            section=str(rfcs.get("section", "Active RFCs")),
        ),
        git=GitConfig(
            main_branch=str(git.get("main_branch", "master")),
            remote=str(git.get("remote", "origin")),
        ),
    )


def pull_request_path_from_url(url: str) -> str | None:
    """`git@github.com:me/proj.git` -> `https://github.com/me/proj/pull`"""

    url = url.strip()
    for rx in _GITHUB_REMOTE:
        m = rx.match(url)
        if m:
            return f"https://github.com/{m.group(1)}/pull"
    return None


def resolve_project_name(cfg: RfcConfig, root: Path) -> str:
    return cfg.project_name or root.resolve().name


def resolve_pr_path(cfg: RfcConfig, repo: GitRepo) -> str:
    if cfg.pr_path:
        return cfg.pr_path.rstrip("/")
    url = repo.remote_url(cfg.git.remote)
    if url is None:
        return ""
    return pull_request_path_from_url(url) or ""
