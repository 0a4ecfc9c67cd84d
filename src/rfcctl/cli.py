"""rfcctl CLI エントリポイント。"""

from __future__ import annotations

import os
from enum import Enum
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import typer
from rich.console import Console

from rfcctl.git_ops import GitError
from rfcctl.github_ops import Gh
from rfcctl.logging_setup import setup_logging
from rfcctl.sections import find_section, header_level, iter_headings
from rfcctl.store import RfcError
from rfcctl.workflow import Workspace, approve, implement, init_rfcs, new_rfc, open_workspace

APP_HELP = "RFC プロセスを git リポジトリ上で回すためのツール。"

app = typer.Typer(add_completion=False, help=APP_HELP)
console = Console()


class ListKind(str, Enum):
    active = "active"
    pending = "pending"


def _version() -> str:
    try:
        return version("rfcctl")
    except PackageNotFoundError:
        return "0+unknown"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"rfcctl {_version()}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    root: Path = typer.Option(Path("."), "--root", help="リポジトリのルート"),
    log_level: str = typer.Option(
        os.environ.get("RFCCTL_LOG_LEVEL", "INFO"), "--log-level", help="ログレベル"
    ),
    show_version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="バージョンを表示して終了",
    ),
) -> None:
    ctx.obj = root
    setup_logging(root=root, level=log_level)


def _workspace(ctx: typer.Context) -> Workspace:
    return open_workspace(ctx.obj)


def _fail(e: Exception) -> typer.Exit:
    for line in str(e).splitlines() or [type(e).__name__]:
        console.print(f"❌ {line}", style="red", markup=False)
    return typer.Exit(code=1)


def _pr_id(ws: Workspace, pr_id: str | None) -> str:
    if pr_id:
        return pr_id
    number = Gh(ws.root).current_pr_number()
    console.print(f"  PR #{number} (gh)", style="dim", markup=False)
    return number


@app.command()
def new(
    ctx: typer.Context,
    name: str = typer.Option("", "--name", help="RFC名（空なら対話）"),
) -> None:
    """テンプレートから新しい RFC を作る。"""
    if not name:
        name = typer.prompt("RFC名", default="", show_default=False)
    if not name.strip():
        return

    try:
        path = new_rfc(_workspace(ctx), name)
    except (RfcError, GitError) as e:
        raise _fail(e) from e
    console.print(str(path), markup=False)


@app.command()
def init(ctx: typer.Context) -> None:
    """rfcs ディレクトリと README の索引を作る。"""
    try:
        rfc_dir = init_rfcs(_workspace(ctx))
    except (RfcError, GitError) as e:
        raise _fail(e) from e
    console.print(f"✅ 初期化しました: {rfc_dir}", style="green", markup=False)


@app.command("list")
def list_(
    ctx: typer.Context,
    kind: ListKind = typer.Argument(..., help="active | pending"),
) -> None:
    """active / pending の RFC を一覧表示する。"""
    ws = _workspace(ctx)
    try:
        rfcs = ws.store.list_active() if kind is ListKind.active else ws.store.list_pending()
    except RfcError as e:
        raise _fail(e) from e

    if not rfcs:
        console.print(f"{kind.value} の RFC はありません。")
        return
    console.print("\n".join(rfcs), highlight=False, markup=False, soft_wrap=True)


@app.command("approve")
def approve_cmd(
    ctx: typer.Context,
    rfc_id: str = typer.Argument(..., help="例: 0000-my-feature"),
    pr_id: str | None = typer.Argument(None, help="RFC PR の番号（省略時は gh で取得）"),
) -> None:
    """pending の RFC を承認して番号を振る。"""
    ws = _workspace(ctx)
    try:
        path = approve(ws, rfc_id, _pr_id(ws, pr_id))
    except (RfcError, GitError) as e:
        raise _fail(e) from e
    console.print(f"✅ 承認しました: {path}", style="green", markup=False)


@app.command("implement")
def implement_cmd(
    ctx: typer.Context,
    rfc_id: str = typer.Argument(..., help="例: 0001-my-feature"),
    pr_id: str | None = typer.Argument(None, help="実装 PR の番号（省略時は gh で取得）"),
) -> None:
    """active の RFC に実装 PR を記録する。"""
    ws = _workspace(ctx)
    try:
        path = implement(ws, rfc_id, _pr_id(ws, pr_id))
    except (RfcError, GitError) as e:
        raise _fail(e) from e
    console.print(f"✅ 実装済みにしました: {path}", style="green", markup=False)


@app.command()
def readme(ctx: typer.Context) -> None:
    """README の active RFC 一覧を作り直す。"""
    try:
        path = _workspace(ctx).update_readme()
    except RfcError as e:
        raise _fail(e) from e
    console.print(f"✅ {path}", style="green", markup=False)


@app.command()
def section(
    file: Path = typer.Argument(..., help="Markdownファイル"),
    heading: str = typer.Argument("", help="見出しテキスト（空なら見出し一覧）"),
    level: bool = typer.Option(False, "--level", help="見出しレベルだけ表示"),
) -> None:
    """Markdown のセクション（または見出し一覧）を表示する。"""
    if not file.exists():
        console.print(f"❌ ファイルが見つかりません: {file}", style="red", markup=False)
        raise typer.Exit(code=1)

    md = file.read_text(encoding="utf-8")
    if not heading:
        for h in iter_headings(md):
            indent = "  " * (h.level - 1)
            console.print(f"{indent}- {h.text}", highlight=False, markup=False, soft_wrap=True)
        return

    span = find_section(md, heading)
    if span is None:
        console.print(f"❌ 見出しが見つかりません: {heading}", style="red", markup=False)
        raise typer.Exit(code=1)

    if level:
        console.print(str(header_level(md, heading)))
        return
    start, end = span
    typer.echo(md[start:end], nl=False)
