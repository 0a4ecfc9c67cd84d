"""README 索引のテスト。"""

from pathlib import Path

import pytest

from rfcctl.readme import (
    AUTO_GENERATED_MARKER,
    markdown_link_list,
    render_readme,
    update_readme,
)
from rfcctl.store import RfcError, RfcStore


def test_markdown_link_list() -> None:
    assert markdown_link_list([("a", "rfcs/a.md"), ("b", "rfcs/b.md")]) == [
        "- [a](rfcs/a.md)\n",
        "- [b](rfcs/b.md)\n",
    ]


def test_update_readme_appends_section(rfc_root: Path) -> None:
    update_readme(RfcStore(rfc_root))
    text = (rfc_root / "README.md").read_text(encoding="utf-8")
    assert text == (
        "# Project\n\nHello.\n"
        "\n# Active RFCs\n"
        + AUTO_GENERATED_MARKER
        + "- [0001-first](rfcs/0001-first.md)\n"
    )


def test_update_readme_replaces_existing_section(rfc_root: Path) -> None:
    readme = rfc_root / "README.md"
    readme.write_text(
        "# Project\n\n## Active RFCs\n- [stale](rfcs/stale.md)\n\n## License\nMIT\n",
        encoding="utf-8",
    )
    update_readme(RfcStore(rfc_root))
    assert readme.read_text(encoding="utf-8") == (
        "# Project\n\n## Active RFCs\n"
        + AUTO_GENERATED_MARKER
        + "- [0001-first](rfcs/0001-first.md)\n"
        "## License\nMIT\n"
    )


def test_update_readme_is_stable(rfc_root: Path) -> None:
    store = RfcStore(rfc_root)
    update_readme(store)
    first = (rfc_root / "README.md").read_text(encoding="utf-8")
    update_readme(store)
    assert (rfc_root / "README.md").read_text(encoding="utf-8") == first


def test_render_readme_custom_section(rfc_root: Path) -> None:
    out = render_readme("Intro\n=====\n", RfcStore(rfc_root), section="Open proposals")
    assert out.endswith("\n# Open proposals\n" + AUTO_GENERATED_MARKER + "- [0001-first](rfcs/0001-first.md)\n")


def test_missing_readme(rfc_root: Path) -> None:
    (rfc_root / "README.md").unlink()
    with pytest.raises(RfcError, match="README"):
        update_readme(RfcStore(rfc_root))
