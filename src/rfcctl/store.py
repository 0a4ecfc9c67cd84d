"""RFC ディレクトリ（`rfcs/`）の読み取り。

ファイル名の規約:
- `0000-template.md`: テンプレート
- `0000-<slug>.md`: 提案中（pending）
- `NNNN-<slug>.md`: 採択済み（accepted）。Implementation PR が空なら active
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from rfcctl.templates import EMPTY_PLACEHOLDER, IMPLEMENTATION_PR_TAG

log = logging.getLogger(__name__)

TEMPLATE_ID = "0000-template"
PENDING_PREFIX = "0000-"

_ACCEPTED = re.compile(r"\A(\d+)-(.+)\Z")


class RfcError(Exception):
    """An RFC operation cannot proceed (missing file, dirty tree, bad id...)."""


@dataclass(frozen=True)
class RfcStore:
    root: Path
    subdir: str = "rfcs"

    @property
    def rfc_dir(self) -> Path:
        return self.root / self.subdir

    @property
    def template_path(self) -> Path:
        return self.path(TEMPLATE_ID)

    def path(self, rfc_id: str) -> Path:
        return self.rfc_dir / f"{rfc_id}.md"

    def link(self, rfc_id: str) -> str:
        """Repo-relative path used in README links."""
        return f"{Path(self.subdir).as_posix()}/{rfc_id}.md"

    def exists(self, rfc_id: str) -> bool:
        return self.path(rfc_id).is_file()

    def require(self, rfc_id: str) -> Path:
        p = self.path(rfc_id)
        if not p.is_file():
            raise RfcError(f"RFC not found: {p}")
        return p

    def _ids(self) -> list[str]:
        if not self.rfc_dir.is_dir():
            raise RfcError(f"RFC directory not found: {self.rfc_dir} (run `rfcctl init`)")
        return sorted(p.stem for p in self.rfc_dir.glob("*.md") if p.is_file())

    def list_pending(self) -> list[str]:
        return [
            i for i in self._ids() if i.startswith(PENDING_PREFIX) and i != TEMPLATE_ID
        ]

    def list_accepted(self) -> list[str]:
        out: list[str] = []
        for i in self._ids():
            m = _ACCEPTED.match(i)
            if m is None:
                log.debug("skip non-rfc file: %s", i)
                continue
            if int(m.group(1)) == 0:
                continue
            out.append(i)
        return out

    def accepted_numbers(self) -> list[int]:
        return [int(i.split("-", 1)[0]) for i in self.list_accepted()]

    def max_accepted_number(self) -> int:
        return max(self.accepted_numbers(), default=0)

    def next_id(self, rfc_id: str) -> str:
        """`0000-some-feature` -> `000X-some-feature`"""

        parts = rfc_id.split("-", 1)
        if len(parts) != 2 or not parts[1]:
            raise RfcError(f"malformed RFC id: {rfc_id!r}")
        return f"{self.max_accepted_number() + 1:04}-{parts[1]}"

    def is_implemented(self, rfc_id: str) -> bool:
        p = self.require(rfc_id)
        prefix = f"- {IMPLEMENTATION_PR_TAG}: "
        for line in p.read_text(encoding="utf-8").splitlines():
            if line.startswith(prefix):
                return not line.rstrip().endswith(EMPTY_PLACEHOLDER)
        raise RfcError(f"No `{prefix}...` line found in {p}")

    def list_active(self) -> list[str]:
        return [i for i in self.list_accepted() if not self.is_implemented(i)]
