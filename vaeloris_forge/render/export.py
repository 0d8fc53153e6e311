"""
Export renderer: elements -> python-docx ``Document``.

The returned document is fully built in memory; ``save_document`` and
``document_bytes`` are the only functions here that serialize it.
Sizes are in points, spacing in twips.
"""

import logging
from io import BytesIO
from pathlib import Path
from typing import Callable

from docx import Document
from docx.document import Document as DocxDocument
from docx.enum.table import WD_CELL_VERTICAL_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_BREAK
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor, Twips

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
from vaeloris_forge.render.inline import clean_markdown, split_runs
from vaeloris_forge.styles import DEFAULT_THEME, DIVIDER, ORNAMENT, Theme, lookup_style

logger = logging.getLogger(__name__)

PAGE_MARGIN = Inches(1)
BODY_SIZE = 12
HEADER_SIZES = {2: 15, 3: 12, 4: 11}


def _add_run(paragraph, text: str, color: str, size: float, *, bold=False, italic=False, small_caps=False):
    run = paragraph.add_run(text)
    run.font.color.rgb = RGBColor.from_string(color)
    run.font.size = Pt(size)
    if bold:
        run.bold = True
    if italic:
        run.italic = True
    if small_caps:
        run.font.small_caps = True
    return run


def _add_runs(paragraph, text: str, color: str, size: float) -> None:
    for run in split_runs(text):
        _add_run(paragraph, run.text, color, size, bold=run.bold)


def _spacing(paragraph, before: int | None = None, after: int | None = None):
    fmt = paragraph.paragraph_format
    if before is not None:
        fmt.space_before = Twips(before)
    if after is not None:
        fmt.space_after = Twips(after)
    return paragraph


def _centered(doc: DocxDocument, before: int | None = None, after: int | None = None):
    paragraph = _spacing(doc.add_paragraph(), before, after)
    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
    return paragraph


def _spacer(doc: DocxDocument) -> None:
    _spacing(doc.add_paragraph(), after=120)


def _shade_cell(cell, fill: str) -> None:
    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), fill)
    cell._tc.get_or_add_tcPr().append(shd)


def _set_cell_borders(cell, **edges: tuple[int, str]) -> None:
    """edges: name -> (size in eighths of a point, hex color)."""
    borders = OxmlElement("w:tcBorders")
    for edge in ("top", "left", "bottom", "right"):
        if edge not in edges:
            continue
        size, color = edges[edge]
        el = OxmlElement(f"w:{edge}")
        el.set(qn("w:val"), "single")
        el.set(qn("w:sz"), str(size))
        el.set(qn("w:color"), color)
        borders.append(el)
    cell._tc.get_or_add_tcPr().append(borders)


def _mark_header_row(row) -> None:
    el = OxmlElement("w:tblHeader")
    el.set(qn("w:val"), "true")
    row._tr.get_or_add_trPr().append(el)


def _book_title(doc: DocxDocument, el: BookTitle, theme: Theme) -> None:
    _add_run(_centered(doc, before=2500, after=200), ORNAMENT, theme.copper, 16)
    _add_run(_centered(doc, after=200), f"BOOK {el.number}", theme.deep_sea, 36, bold=True)
    if el.title:
        _add_run(_centered(doc, after=100), clean_markdown(el.title), theme.storm_gray, 22, italic=True)
    _add_run(_centered(doc, before=200, after=400), DIVIDER, theme.copper, BODY_SIZE)


def _chapter(doc: DocxDocument, el: Chapter, theme: Theme) -> None:
    doc.add_paragraph().add_run().add_break(WD_BREAK.PAGE)
    _add_run(_centered(doc, after=80), ORNAMENT, theme.copper, 16)
    _add_run(_centered(doc, after=60), f"CHAPTER {el.number}", theme.storm_gray, 12, small_caps=True)
    _add_run(_centered(doc, after=40), clean_markdown(el.title), theme.deep_sea, 20, bold=True)
    _add_run(_centered(doc, before=80, after=300), DIVIDER, theme.copper, BODY_SIZE)


def _header(doc: DocxDocument, el: Header, theme: Theme) -> None:
    color = theme.storm_gray if el.level == 4 else theme.deep_sea
    paragraph = _spacing(
        doc.add_paragraph(),
        before=360 if el.level == 2 else 280,
        after=180 if el.level == 2 else 140,
    )
    _add_run(paragraph, clean_markdown(el.text), color, HEADER_SIZES.get(el.level, BODY_SIZE), bold=True)


def _drop_cap(doc: DocxDocument, el: DropCapParagraph, theme: Theme) -> None:
    paragraph = _spacing(doc.add_paragraph(), after=240)
    _add_run(paragraph, el.text[:1], theme.deep_sea, 36, bold=True)
    if el.text[1:]:
        _add_runs(paragraph, el.text[1:], theme.dark_gray, BODY_SIZE)


def _paragraph(doc: DocxDocument, el: Paragraph, theme: Theme) -> None:
    _add_runs(_spacing(doc.add_paragraph(), after=240), el.text, theme.dark_gray, BODY_SIZE)


def _bullet(doc: DocxDocument, el: Bullet, theme: Theme) -> None:
    paragraph = _spacing(doc.add_paragraph(), after=120)
    _add_run(paragraph, "• ", theme.copper, BODY_SIZE)
    _add_runs(paragraph, el.text, theme.dark_gray, BODY_SIZE)


def _definition(doc: DocxDocument, el: Definition, theme: Theme) -> None:
    paragraph = _spacing(doc.add_paragraph(), after=200)
    _add_run(paragraph, f"{clean_markdown(el.term)}: ", theme.deep_sea, BODY_SIZE, bold=True)
    _add_runs(paragraph, el.value, theme.dark_gray, BODY_SIZE)


def _sidebar(doc: DocxDocument, el: Sidebar, theme: Theme) -> None:
    style = lookup_style(el.code, theme)

    _spacer(doc)
    table = doc.add_table(rows=1, cols=1)
    cell = table.cell(0, 0)
    _set_cell_borders(
        cell,
        top=(24, style.color),
        left=(6, theme.light_border),
        bottom=(6, theme.light_border),
        right=(6, theme.light_border),
    )
    _shade_cell(cell, theme.warm_sand)

    header = cell.paragraphs[0]
    _add_run(header, "◊ ", style.color, BODY_SIZE)
    _add_run(header, style.label, style.color, 11, bold=True, small_caps=True)

    if el.title and el.title.upper() != style.label.upper():
        _add_run(_spacing(cell.add_paragraph(), before=40), el.title, theme.dark_gray, 10, bold=True)

    for label, value in (
        ("Source", el.source),
        ("Compiled from", el.compiled_from),
        ("Applies to", el.applies_to),
        ("Reliability", el.reliability),
    ):
        if value:
            paragraph = _spacing(cell.add_paragraph(), before=40)
            _add_run(paragraph, f"{label}: ", theme.dark_gray, 10, bold=True)
            _add_run(paragraph, value, theme.dark_gray, 10)

    if el.quote:
        paragraph = _spacing(cell.add_paragraph(), before=60)
        _add_run(paragraph, '"', theme.dark_gray, 11, italic=True)
        for run in split_runs(el.quote):
            _add_run(paragraph, run.text, theme.dark_gray, 11, bold=run.bold, italic=True)
        _add_run(paragraph, '"', theme.dark_gray, 11, italic=True)
    _spacer(doc)


def _fill_cell(cell, text: str, fill: str, color: str, *, bold=False) -> None:
    _shade_cell(cell, fill)
    cell.vertical_alignment = WD_CELL_VERTICAL_ALIGNMENT.CENTER
    _add_run(cell.paragraphs[0], clean_markdown(text), color, 10, bold=bold)


def _table(doc: DocxDocument, el: Table, theme: Theme) -> None:
    columns = len(el.headers)

    _spacer(doc)
    table = doc.add_table(rows=0, cols=columns)
    table.style = "Table Grid"

    header_row = table.add_row()
    _mark_header_row(header_row)
    for cell, text in zip(header_row.cells, el.headers):
        _fill_cell(cell, text, theme.deep_sea, theme.white, bold=True)

    for idx, data in enumerate(el.data):
        fill = theme.cream if idx % 2 == 0 else theme.warm_sand
        if len(data) > columns:
            logger.debug("Table row %d has %d cells, keeping %d", idx, len(data), columns)
        padded = list(data[:columns]) + [""] * (columns - len(data))
        for cell, text in zip(table.add_row().cells, padded):
            _fill_cell(cell, text, fill, theme.dark_gray)
    _spacer(doc)


_RENDERERS: dict[type, Callable[[DocxDocument, Element, Theme], None]] = {
    BookTitle: _book_title,
    Chapter: _chapter,
    Header: _header,
    DropCapParagraph: _drop_cap,
    Paragraph: _paragraph,
    Bullet: _bullet,
    Definition: _definition,
    Sidebar: _sidebar,
    Table: _table,
}


def render_document(elements: list[Element], theme: Theme = DEFAULT_THEME) -> DocxDocument:
    doc = Document()
    for section in doc.sections:
        section.top_margin = PAGE_MARGIN
        section.right_margin = PAGE_MARGIN
        section.bottom_margin = PAGE_MARGIN
        section.left_margin = PAGE_MARGIN

    for el in elements:
        render = _RENDERERS.get(type(el))
        if render is None:
            logger.warning("No export renderer for %s, skipping", type(el).__name__)
            continue
        render(doc, el, theme)
    return doc


def save_document(doc: DocxDocument, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    doc.save(str(path))
    return path


def document_bytes(doc: DocxDocument) -> bytes:
    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()
