"""Find, read and rewrite sections of a Markdown document.

A section is a heading line plus everything below it up to the next heading
of the same or a higher level (a lower or equal number). Two heading styles
are recognised:

- ATX: ``# Title`` .. ``###### Title``
- Setext: a text line underlined with ``===`` (level 1) or ``---`` (level 2)

Everything else (lists, code fences, links) is opaque text. Heading text is
compared literally. A heading line must end with a newline. Span offsets
always point at the start of a line.

All functions are pure: they take the whole document as a string and return
new values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

ATX = "atx"
SETEXT = "setext"

# line kinds for classify_line()
PLAIN = "plain"
UNDERLINE = "underline"

MAX_ATX_LEVEL = 6


@dataclass(frozen=True)
class Line:
    start: int
    end: int  # offset of the next line
    text: str  # without "\n" / "\r\n"
    terminated: bool


@dataclass(frozen=True)
class Heading:
    text: str
    level: int
    style: str  # atx | setext
    start: int
    content_start: int


def split_lines(document: str) -> list[Line]:
    lines: list[Line] = []
    pos = 0
    while pos < len(document):
        nl = document.find("\n", pos)
        if nl == -1:
            lines.append(Line(pos, len(document), document[pos:], False))
            break
        text = document[pos:nl].removesuffix("\r")
        lines.append(Line(pos, nl + 1, text, True))
        pos = nl + 1
    return lines


def _leading_hashes(text: str) -> int:
    return len(text) - len(text.lstrip("#"))


def atx_level(text: str) -> int | None:
    """Level of an ATX heading line (``#`` x 1-6, spaces, non-blank text)."""

    hashes = _leading_hashes(text)
    if not 1 <= hashes <= MAX_ATX_LEVEL:
        return None
    rest = text[hashes:]
    title = rest.lstrip(" ")
    if title == rest or not title or title[0].isspace():
        return None
    return hashes


def underline_level(text: str) -> int | None:
    """``===`` -> 1, ``---`` -> 2, anything else -> None."""

    if text and text == "=" * len(text):
        return 1
    if text and text == "-" * len(text):
        return 2
    return None


def classify_line(text: str) -> tuple[str, int]:
    """Classify a single line (no terminator) as ``(kind, level)``.

    Level is 0 for plain lines. An underline only makes a Setext heading
    together with the line above it; that pairing is left to the caller.
    """

    level = atx_level(text)
    if level is not None:
        return ATX, level
    level = underline_level(text)
    if level is not None:
        return UNDERLINE, level
    return PLAIN, 0


def _setext_at(lines: list[Line], i: int, *, title_check: bool = True) -> int | None:
    line = lines[i]
    if title_check and (not line.text or line.text[0].isspace()):
        return None
    if i + 1 >= len(lines) or not lines[i + 1].terminated:
        return None
    return underline_level(lines[i + 1].text)


def _heading_at(lines: list[Line], i: int) -> Heading | None:
    line = lines[i]
    if not line.terminated:
        return None
    level = atx_level(line.text)
    if level is not None:
        title = line.text[level:].strip(" ")
        return Heading(title, level, ATX, line.start, line.end)
    level = _setext_at(lines, i)
    if level is not None:
        return Heading(line.text, level, SETEXT, line.start, lines[i + 1].end)
    return None


def _atx_title_level(text: str, heading: str) -> int | None:
    hashes = _leading_hashes(text)
    if not 1 <= hashes <= MAX_ATX_LEVEL:
        return None
    rest = text[hashes:]
    if not rest.endswith(heading):
        return None
    gap = rest[: len(rest) - len(heading)]
    if not gap or gap.strip(" "):
        return None
    return hashes


def locate_heading(document: str, heading: str) -> Heading | None:
    """Return the first heading whose text is exactly ``heading``."""

    lines = split_lines(document)
    for i, line in enumerate(lines):
        if not line.terminated:
            break
        level = _atx_title_level(line.text, heading)
        if level is not None:
            return Heading(heading, level, ATX, line.start, line.end)
        if line.text == heading:
            level = _setext_at(lines, i, title_check=False)
            if level is not None:
                return Heading(heading, level, SETEXT, line.start, lines[i + 1].end)
    return None


def iter_headings(document: str) -> Iterator[Heading]:
    """Yield every heading in document order."""

    lines = split_lines(document)
    i = 0
    while i < len(lines):
        h = _heading_at(lines, i)
        if h is None:
            i += 1
            continue
        yield h
        i += 2 if h.style == SETEXT else 1


def resolve_span(
    document: str, header_start: int, content_start: int, level: int
) -> tuple[int, int]:
    """Half-open span owned by a heading of ``level`` starting at ``header_start``.

    The span ends where the first heading of level <= ``level`` at or after
    ``content_start`` begins, or at the end of the document.
    """

    if level < 1:
        raise ValueError(f"heading level must be >= 1, got {level}")

    lines = split_lines(document)
    # every line start is a candidate; an underline may also be the title
    # line of the next Setext heading
    for i, line in enumerate(lines):
        if line.start < content_start:
            continue
        found = _boundary_level(lines, i)
        if found is not None and found <= level:
            return header_start, line.start
    return header_start, len(document)


def _boundary_level(lines: list[Line], i: int) -> int | None:
    """Smallest level line ``i`` can start, as ATX or as a Setext title.

    ``## Sub`` underlined with ``===`` is both; either reading ends a section.
    """

    if not lines[i].terminated:
        return None
    levels = [lv for lv in (atx_level(lines[i].text), _setext_at(lines, i)) if lv is not None]
    return min(levels, default=None)


def find_section(document: str, heading: str) -> tuple[int, int] | None:
    h = locate_heading(document, heading)
    if h is None:
        return None
    return resolve_span(document, h.start, h.content_start, h.level)


def get_section(document: str, heading: str) -> str | None:
    """Return the section text, heading line(s) included."""

    span = find_section(document, heading)
    if span is None:
        return None
    start, end = span
    return document[start:end]


def header_level(document: str, heading: str) -> int | None:
    h = locate_heading(document, heading)
    return h.level if h is not None else None


def replace_section(document: str, heading: str, insertion: str) -> str | None:
    """Replace the body of a section.

    - The heading line (and Setext underline) is kept verbatim.
    - The body runs up to the next heading of the same or a higher level.
    - Returns None if ``heading`` is not in the document.
    """

    h = locate_heading(document, heading)
    if h is None:
        return None
    start, end = resolve_span(document, h.start, h.content_start, h.level)
    head = document[h.start : h.content_start]
    return document[:start] + head + insertion + document[end:]


def replace_or_append_section(document: str, heading: str, insertion: str) -> str:
    """Like replace_section(), but append a new ``# heading`` when missing."""

    replaced = replace_section(document, heading, insertion)
    if replaced is not None:
        return replaced
    return f"{document}\n# {heading}\n{insertion}"
