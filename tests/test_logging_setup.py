import logging
from pathlib import Path

import pytest

import rfcctl.logging_setup as m


@pytest.fixture()
def root_logger(monkeypatch):
    monkeypatch.setattr(m, "_active", {})
    logger = logging.getLogger()
    before = list(logger.handlers)
    old_level = logger.level
    yield logger
    for h in logger.handlers[:]:
        if h not in before:
            logger.removeHandler(h)
            h.close()
    logger.setLevel(old_level)


def _flush(logger: logging.Logger) -> None:
    for h in logger.handlers:
        h.flush()


def test_no_git_dir_means_no_file_logging(tmp_path: Path, root_logger) -> None:
    assert m.setup_logging(root=tmp_path) is None
    assert not (tmp_path / ".git").exists()


def test_logs_go_under_git_dir(tmp_path: Path, root_logger) -> None:
    (tmp_path / ".git").mkdir()
    path = m.setup_logging(root=tmp_path, level="debug")
    assert path == tmp_path / ".git" / "rfcctl" / "logs" / "rfcctl.log"

    logging.getLogger("rfcctl.test").debug("hello %s", "log")
    _flush(root_logger)
    assert "rfcctl.test: hello log" in path.read_text(encoding="utf-8")

    # 同じ root なら二重設定しない
    assert m.setup_logging(root=tmp_path) is None


def test_each_root_gets_its_own_log(tmp_path: Path, root_logger) -> None:
    first = tmp_path / "one"
    second = tmp_path / "two"
    for r in (first, second):
        (r / ".git").mkdir(parents=True)

    path1 = m.setup_logging(root=first)
    logging.getLogger("rfcctl.test").info("to one")
    path2 = m.setup_logging(root=second)
    logging.getLogger("rfcctl.test").info("to two")
    _flush(root_logger)

    assert path2 == second / ".git" / "rfcctl" / "logs" / "rfcctl.log"
    text1 = path1.read_text(encoding="utf-8")
    text2 = path2.read_text(encoding="utf-8")
    assert "to one" in text1 and "to two" not in text1
    assert "to two" in text2 and "to one" not in text2
    # 前の root のハンドラは外れている
    assert len(m._active) == 1
