"""logging の初期化。

- 詳細ログ: `.git/rfcctl/logs/rfcctl.log`
  （作業ツリーの外に置くので `git status` を汚さない）
- git リポジトリでなければファイルには書かない

目的:
- approve/implement で何の git コマンドがどこで失敗したかを追えるようにする
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


def log_path_for(root: Path) -> Path | None:
    git_dir = root / ".git"
    if not git_dir.is_dir():
        return None
    return git_dir / "rfcctl" / "logs" / "rfcctl.log"


_active: dict[str, RotatingFileHandler] = {}


def setup_logging(*, root: Path, level: str = "INFO") -> Path | None:
    """root ごとのログファイルに切り替える。

    同じ root で二度呼んでも二重設定しない。別の root なら前のハンドラを外す。
    """

    log_path = log_path_for(root)
    if log_path is None:
        return None
    key = str(log_path.resolve())
    if key in _active:
        return None
    log_path.parent.mkdir(parents=True, exist_ok=True)

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = RotatingFileHandler(
        log_path,
        maxBytes=2_000_000,
        backupCount=3,
        encoding="utf-8",
    )
    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(fmt)

    root_logger = logging.getLogger()
    for old in _active.values():
        root_logger.removeHandler(old)
        old.close()
    _active.clear()

    root_logger.setLevel(numeric_level)
    root_logger.addHandler(handler)
    _active[key] = handler
    return log_path
