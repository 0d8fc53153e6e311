"""
Block parser: turns manuscript text into an ordered list of elements.

The scan is a step function over an explicit ``ScanState``: each call to
``scan_block`` consumes one block (a single line, or a whole sidebar/table
run) and returns the element it produced together with the next state.

Drop-cap handling is a two-state machine carried in ``ScanState.mode``:

    NORMAL --(Chapter emitted)--> AWAITING_FIRST_PARAGRAPH
    AWAITING_FIRST_PARAGRAPH --(any plain-text line)--> NORMAL

Only a plain-text line that starts with an uppercase ASCII letter while
awaiting becomes a DropCapParagraph.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator

from vaeloris_forge.elements import (
    BookTitle,
    Bullet,
    Chapter,
    Definition,
    DropCapParagraph,
    Element,
    Header,
    Paragraph,
    Sidebar,
    Table,
)
from vaeloris_forge.pipeline import scanner
from vaeloris_forge.pipeline.scanner import LineKind

logger = logging.getLogger(__name__)

MIN_TABLE_ROWS = 2   # header + at least one data row


class DropCapMode(str, Enum):
    NORMAL = "normal"
    AWAITING_FIRST_PARAGRAPH = "awaiting_first_paragraph"


@dataclass(frozen=True)
class ScanState:
    position: int = 0
    mode: DropCapMode = DropCapMode.NORMAL


def split_lines(text: str) -> list[str]:
    return text.split("\n")


def _scan_sidebar(lines: list[str], start: int, opener: scanner.SidebarMatch) -> tuple[Sidebar, int]:
    fields = {"source": "", "compiled_from": "", "applies_to": "", "quote": ""}
    i = start + 1
    while i < len(lines):
        line = lines[i].strip()
        if scanner.ends_sidebar(line):
            break
        meta = scanner.match_sidebar_metadata(line)
        if meta:
            key, value = meta
            fields[key] = value
        i += 1
    return Sidebar(code=opener.code, title=opener.title, reliability=opener.reliability, **fields), i


def _scan_table(lines: list[str], start: int) -> tuple[Table | None, int]:
    rows: list[tuple[str, ...]] = []
    i = start
    while i < len(lines):
        line = lines[i].strip()
        if not line.startswith("|"):
            break
        i += 1
        if scanner.is_table_separator(line):
            continue
        cells = scanner.split_table_row(line)
        if cells:
            rows.append(tuple(cells))

    if len(rows) < MIN_TABLE_ROWS:
        logger.debug("Discarding table run at line %d: %d row(s)", start + 1, len(rows))
        return None, i
    return Table(headers=rows[0], data=tuple(rows[1:])), i


def _paragraph(line: str, mode: DropCapMode) -> Element:
    if mode is DropCapMode.AWAITING_FIRST_PARAGRAPH and scanner.starts_with_capital(line):
        return DropCapParagraph(text=line)
    return Paragraph(text=line)


def scan_block(lines: list[str], state: ScanState) -> tuple[Element | None, ScanState]:
    """Consume one block starting at ``state.position``.

    Returns ``(None, next_state)`` for blank lines and discarded table runs.
    """
    pos = state.position
    line = lines[pos].strip()
    if not line:
        return None, replace(state, position=pos + 1)

    kind = scanner.classify_line(line)
    nxt = replace(state, position=pos + 1)

    if kind is LineKind.BOOK_TITLE:
        m = scanner.match_book_title(line)
        return BookTitle(number=m.number, title=m.title), nxt

    if kind is LineKind.CHAPTER:
        m = scanner.match_chapter(line)
        return (
            Chapter(number=m.number, title=m.title),
            replace(nxt, mode=DropCapMode.AWAITING_FIRST_PARAGRAPH),
        )

    if kind is LineKind.HEADER:
        m = scanner.match_header(line)
        return Header(level=m.level, text=m.text), nxt

    if kind is LineKind.SIDEBAR:
        sidebar, end = _scan_sidebar(lines, pos, scanner.match_sidebar(line))
        return sidebar, replace(state, position=end)

    if kind is LineKind.TABLE_ROW:
        table, end = _scan_table(lines, pos)
        return table, replace(state, position=end)

    if kind is LineKind.BULLET:
        return Bullet(text=scanner.match_bullet(line)), nxt

    if kind is LineKind.DEFINITION:
        m = scanner.match_definition(line)
        return Definition(term=m.term, value=m.value), nxt

    return _paragraph(line, state.mode), replace(nxt, mode=DropCapMode.NORMAL)


def iter_elements(text: str) -> Iterator[Element]:
    lines = split_lines(text)
    state = ScanState()
    while state.position < len(lines):
        element, state = scan_block(lines, state)
        if element is not None:
            yield element


def parse_manuscript(text: str) -> list[Element]:
    return list(iter_elements(text))


def parse_document(state: dict) -> dict:
    """Pipeline step: parse ``state["content"]`` into elements."""
    elements = parse_manuscript(state["content"])
    logger.info("Parsed %d elements", len(elements))
    return {"elements": elements}
