"""Keep the "Active RFCs" section of README.md in sync with `rfcs/`."""

from __future__ import annotations

import logging
from pathlib import Path

from rfcctl.sections import replace_or_append_section
from rfcctl.store import RfcError, RfcStore

log = logging.getLogger(__name__)

AUTO_GENERATED_MARKER = "<!--- auto-generated section -->\n"


def markdown_link_list(rfcs: list[tuple[str, str]]) -> list[str]:
    return [f"- [{rfc}]({link})\n" for rfc, link in rfcs]


def active_rfcs_markdown(store: RfcStore) -> str:
    return "".join(markdown_link_list([(rfc, store.link(rfc)) for rfc in store.list_active()]))


def render_readme(text: str, store: RfcStore, *, section: str = "Active RFCs") -> str:
    body = AUTO_GENERATED_MARKER + active_rfcs_markdown(store)
    return replace_or_append_section(text, section, body)


def update_readme(store: RfcStore, *, readme: str = "README.md", section: str = "Active RFCs") -> Path:
    path = store.root / readme
    if not path.is_file():
        raise RfcError(f"README not found: {path}")

    text = path.read_text(encoding="utf-8")
    new_text = render_readme(text, store, section=section)
    if new_text == text:
        log.info("readme unchanged: %s", path)
    else:
        path.write_text(new_text, encoding="utf-8")
        log.info("readme updated: %s (section %r)", path, section)
    return path
