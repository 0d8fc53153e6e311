"""
Single-line classification for the manuscript dialect.

Every helper takes an already-trimmed line. Categories are checked in the
order of ``classify_line``; the first match wins.
"""

import re
from enum import Enum
from typing import NamedTuple

_BOOK_RE = re.compile(r"^#\s+BOOK\s+(\w+)[:\s]*(.*)$", re.IGNORECASE)
_CHAPTER_RE = re.compile(r"^##\s+Chapter\s+(\d+)[:\s]*(.*)$", re.IGNORECASE)
_HEADER_PREFIXES = (("####", 4), ("###", 3), ("##", 2))
_SIDEBAR_PREFIX_RE = re.compile(r"^\*\*SIDEBAR\s*\[[A-Z]\]", re.IGNORECASE)
_SIDEBAR_RE = re.compile(
    r"^\*\*SIDEBAR\s*\[([A-Z])\]:\s*([^*]*)\*\*(?:\s*\(Reliability:\s*([^)]+)\))?",
    re.IGNORECASE,
)
_TABLE_SEPARATOR_RE = re.compile(r"^\|[\s|:-]+\|$")
_BULLET_RE = re.compile(r"^[-*]\s+")
_BOLD_TERM_INNER_RE = re.compile(r"^\*\*([^*:]+):\*\*\s*(.*)$")    # **Term:** value
_BOLD_TERM_OUTER_RE = re.compile(r"^\*\*([^*]+)\*\*:\s*(.*)$")     # **Term**: value
_PLAIN_TERM_RE = re.compile(r"^([A-Z][^:]+):\s+(.*)$")
_QUOTE_MARKERS = ('_"', '*"', '"')
_QUOTE_STRIP_RE = re.compile(r'^[_*"]+|[_*"]+$')

SIDEBAR_METADATA_PREFIXES = {
    "Source:": "source",
    "Compiled from:": "compiled_from",
    "Applies to:": "applies_to",
}


class LineKind(str, Enum):
    BOOK_TITLE = "book_title"
    CHAPTER = "chapter"
    HEADER = "header"
    SIDEBAR = "sidebar"
    TABLE_ROW = "table_row"
    BULLET = "bullet"
    DEFINITION = "definition"
    TEXT = "text"


class TitleMatch(NamedTuple):
    number: str
    title: str


class HeaderMatch(NamedTuple):
    level: int
    text: str


class SidebarMatch(NamedTuple):
    code: str
    title: str
    reliability: str


class DefinitionMatch(NamedTuple):
    term: str
    value: str


def match_book_title(line: str) -> TitleMatch | None:
    m = _BOOK_RE.match(line)
    return TitleMatch(m.group(1), m.group(2) or "") if m else None


def match_chapter(line: str) -> TitleMatch | None:
    m = _CHAPTER_RE.match(line)
    return TitleMatch(m.group(1), m.group(2) or "") if m else None


def match_header(line: str) -> HeaderMatch | None:
    for prefix, level in _HEADER_PREFIXES:
        if line.startswith(prefix):
            return HeaderMatch(level, line[len(prefix):].lstrip())
    return None


def is_sidebar_start(line: str) -> bool:
    """True for anything that opens like a sidebar, well-formed or not."""
    return bool(_SIDEBAR_PREFIX_RE.match(line))


def match_sidebar(line: str) -> SidebarMatch | None:
    m = _SIDEBAR_RE.match(line)
    if not m:
        return None
    return SidebarMatch(
        code=m.group(1).upper(),
        title=m.group(2).strip(),
        reliability=(m.group(3) or "").strip(),
    )


def is_table_row(line: str) -> bool:
    return line.startswith("|") and line.endswith("|")


def is_table_separator(line: str) -> bool:
    return bool(_TABLE_SEPARATOR_RE.match(line))


def split_table_row(line: str) -> list[str]:
    """Cells between the outer pipes, trimmed."""
    return [cell.strip() for cell in line.split("|")[1:-1]]


def match_bullet(line: str) -> str | None:
    m = _BULLET_RE.match(line)
    return line[m.end():] if m else None


def match_definition(line: str) -> DefinitionMatch | None:
    for pattern in (_BOLD_TERM_INNER_RE, _BOLD_TERM_OUTER_RE, _PLAIN_TERM_RE):
        m = pattern.match(line)
        if m:
            return DefinitionMatch(m.group(1).strip(), m.group(2))
    return None


def match_sidebar_metadata(line: str) -> tuple[str, str] | None:
    """Map a sidebar body line to (field, value), or None if it is not metadata."""
    for prefix, field in SIDEBAR_METADATA_PREFIXES.items():
        if line.startswith(prefix):
            return field, line[len(prefix):].strip()
    if line.startswith(_QUOTE_MARKERS):
        return "quote", _QUOTE_STRIP_RE.sub("", line)
    return None


def ends_sidebar(line: str) -> bool:
    return not line or line.startswith("##") or line.startswith("**SIDEBAR")


def starts_with_capital(line: str) -> bool:
    return bool(line) and "A" <= line[0] <= "Z"


def classify_line(line: str) -> LineKind:
    if match_book_title(line):
        return LineKind.BOOK_TITLE
    if match_chapter(line):
        return LineKind.CHAPTER
    if match_header(line):
        return LineKind.HEADER
    if is_sidebar_start(line):
        # malformed openers are plain text, never another category
        return LineKind.SIDEBAR if match_sidebar(line) else LineKind.TEXT
    if is_table_row(line):
        return LineKind.TABLE_ROW
    if match_bullet(line) is not None:
        return LineKind.BULLET
    if match_definition(line):
        return LineKind.DEFINITION
    return LineKind.TEXT
