"""
Element model shared by the parser and both renderers.

Every variant is a frozen dataclass carrying a class-level ``kind`` tag.
Sequences are tuples so a parsed manuscript is immutable end to end.
"""

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class BookTitle:
    kind: ClassVar[str] = "bookTitle"
    number: str
    title: str = ""


@dataclass(frozen=True)
class Chapter:
    kind: ClassVar[str] = "chapter"
    number: str
    title: str = ""


@dataclass(frozen=True)
class Header:
    kind: ClassVar[str] = "header"
    level: int       # 2, 3 or 4
    text: str


@dataclass(frozen=True)
class DropCapParagraph:
    kind: ClassVar[str] = "dropCapParagraph"
    text: str


@dataclass(frozen=True)
class Paragraph:
    kind: ClassVar[str] = "paragraph"
    text: str


@dataclass(frozen=True)
class Bullet:
    kind: ClassVar[str] = "bullet"
    text: str


@dataclass(frozen=True)
class Definition:
    kind: ClassVar[str] = "definition"
    term: str
    value: str


@dataclass(frozen=True)
class Sidebar:
    kind: ClassVar[str] = "sidebar"
    code: str        # single uppercase letter
    title: str = ""
    reliability: str = ""
    source: str = ""
    compiled_from: str = ""
    applies_to: str = ""
    quote: str = ""


@dataclass(frozen=True)
class Table:
    kind: ClassVar[str] = "table"
    headers: tuple[str, ...]
    data: tuple[tuple[str, ...], ...]


Element = Union[
    BookTitle, Chapter, Header, DropCapParagraph, Paragraph,
    Bullet, Definition, Sidebar, Table,
]

ELEMENT_TYPES: tuple[type, ...] = (
    BookTitle, Chapter, Header, DropCapParagraph, Paragraph,
    Bullet, Definition, Sidebar, Table,
)


def describe_element(element: Element) -> tuple[str, str]:
    """Short (kind, text) pair used for element listings."""
    for attr in ("title", "text", "term", "number"):
        value = getattr(element, attr, "")
        if value:
            return element.kind, value
    headers = getattr(element, "headers", ())
    return element.kind, f"{len(headers)} columns"


def summarize(elements: list[Element], limit: int = 10) -> list[str]:
    lines = [f"{kind}: {text}" for kind, text in map(describe_element, elements[:limit])]
    if len(elements) > limit:
        lines.append(f"...and {len(elements) - limit} more elements")
    return lines
