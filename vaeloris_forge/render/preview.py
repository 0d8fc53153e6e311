"""
Preview renderer: elements -> display nodes -> HTML.

``render_preview`` returns exactly one top-level ``PreviewNode`` per element.
Colors come from the ``Theme`` passed in; the stylesheet is generated from
the same palette so a different theme restyles the whole preview.
"""

import html
import logging
from dataclasses import dataclass, field
from typing import Callable, Union

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


@dataclass
class PreviewNode:
    tag: str
    classes: tuple[str, ...] = ()
    style: dict[str, str] = field(default_factory=dict)
    children: list[Union["PreviewNode", str]] = field(default_factory=list)

    def text(self) -> str:
        """Concatenated text content of the subtree."""
        return "".join(c if isinstance(c, str) else c.text() for c in self.children)


def _node(tag: str, cls: str = "", *children, **style) -> PreviewNode:
    return PreviewNode(
        tag=tag,
        classes=tuple(cls.split()),
        style={k.replace("_", "-"): v for k, v in style.items()},
        children=list(children),
    )


def _inline(text: str) -> list[Union[PreviewNode, str]]:
    return [_node("strong", "", run.text) if run.bold else run.text for run in split_runs(text)]


def _book_title(el: BookTitle, theme: Theme) -> PreviewNode:
    node = _node(
        "div", "book-title-section",
        _node("div", "ornament", ORNAMENT),
        _node("h1", "book-number", f"BOOK {el.number}"),
    )
    if el.title:
        node.children.append(_node("p", "book-title-text", clean_markdown(el.title)))
    node.children.append(_node("div", "divider", DIVIDER))
    return node


def _chapter(el: Chapter, theme: Theme) -> PreviewNode:
    return _node(
        "div", "chapter-header",
        _node("hr", "chapter-rule"),
        _node("div", "ornament small", ORNAMENT),
        _node("p", "chapter-number", f"CHAPTER {el.number}"),
        _node("h2", "chapter-title", clean_markdown(el.title)),
        _node("div", "divider", DIVIDER),
    )


def _header(el: Header, theme: Theme) -> PreviewNode:
    return _node(f"h{el.level + 1}", f"section-header level-{el.level}", clean_markdown(el.text))


def _drop_cap(el: DropCapParagraph, theme: Theme) -> PreviewNode:
    return _node(
        "p", "drop-cap-paragraph",
        _node("span", "drop-cap", el.text[:1]),
        *_inline(el.text[1:]),
    )


def _paragraph(el: Paragraph, theme: Theme) -> PreviewNode:
    return _node("p", "body-paragraph", *_inline(el.text))


def _bullet(el: Bullet, theme: Theme) -> PreviewNode:
    return _node("p", "bullet", _node("span", "bullet-marker", "• "), *_inline(el.text))


def _definition(el: Definition, theme: Theme) -> PreviewNode:
    return _node(
        "p", "definition",
        _node("strong", "", f"{clean_markdown(el.term)}:"),
        " ",
        *_inline(el.value),
    )


def _sidebar(el: Sidebar, theme: Theme) -> PreviewNode:
    style = lookup_style(el.code, theme)
    node = _node(
        "div", "sidebar",
        _node("div", "sidebar-header", "◊ ", _node("span", "sidebar-label", style.label), color=f"#{style.color}"),
        border_top_color=f"#{style.color}",
    )
    if el.title and el.title.upper() != style.label.upper():
        node.children.append(_node("div", "sidebar-title", el.title))
    for label, value in (
        ("Source", el.source),
        ("Compiled from", el.compiled_from),
        ("Applies to", el.applies_to),
        ("Reliability", el.reliability),
    ):
        if value:
            node.children.append(_node("div", "sidebar-meta", _node("strong", "", f"{label}:"), f" {value}"))
    if el.quote:
        node.children.append(_node("div", "sidebar-quote", '"', *_inline(el.quote), '"'))
    return node


def _table(el: Table, theme: Theme) -> PreviewNode:
    head = _node("tr", "", *(_node("th", "", clean_markdown(h)) for h in el.headers))
    body = _node("tbody")
    for idx, row in enumerate(el.data):
        parity = "even" if idx % 2 == 0 else "odd"
        fill = theme.cream if idx % 2 == 0 else theme.warm_sand
        body.children.append(
            _node("tr", parity, *(_node("td", "", clean_markdown(cell), background=f"#{fill}") for cell in row))
        )
    return _node("table", "styled-table", _node("thead", "", head), body)


_RENDERERS: dict[type, Callable[[Element, Theme], PreviewNode]] = {
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


def render_preview(elements: list[Element], theme: Theme = DEFAULT_THEME) -> list[PreviewNode]:
    nodes = []
    for el in elements:
        render = _RENDERERS.get(type(el))
        if render is None:
            logger.warning("No preview renderer for %s, skipping", type(el).__name__)
            continue
        nodes.append(render(el, theme))
    return nodes


_VOID_TAGS = {"hr", "br"}


def _to_html(node: Union[PreviewNode, str]) -> str:
    if isinstance(node, str):
        return html.escape(node, quote=False)
    attrs = ""
    if node.classes:
        attrs += f' class="{html.escape(" ".join(node.classes))}"'
    if node.style:
        css = "; ".join(f"{k}: {v}" for k, v in node.style.items())
        attrs += f' style="{html.escape(css)}"'
    if node.tag in _VOID_TAGS:
        return f"<{node.tag}{attrs}>"
    inner = "".join(_to_html(child) for child in node.children)
    return f"<{node.tag}{attrs}>{inner}</{node.tag}>"


def to_html(nodes: list[PreviewNode]) -> str:
    return "\n".join(_to_html(node) for node in nodes)


def render_stylesheet(theme: Theme = DEFAULT_THEME) -> str:
    c = {name: f"#{value}" for name, value in vars(theme).items()}
    return f"""\
.preview-document {{ max-width: 700px; margin: 0 auto; padding: 40px; background: {c['white']}; color: {c['dark_gray']}; font-family: 'Raleway', sans-serif; }}
.ornament {{ font-family: 'Cormorant Garamond', serif; font-size: 20px; color: {c['copper']}; text-align: center; margin-bottom: 12px; }}
.ornament.small {{ font-size: 16px; }}
.divider {{ font-size: 14px; color: {c['copper']}; text-align: center; letter-spacing: 2px; }}
.book-title-section {{ text-align: center; padding: 40px 0; }}
.book-number {{ font-size: 36px; font-weight: 700; color: {c['deep_sea']}; margin: 0 0 8px; }}
.book-title-text {{ font-size: 22px; font-style: italic; color: {c['storm_gray']}; margin: 0 0 16px; }}
.chapter-header {{ text-align: center; padding: 0 0 30px; margin-top: 30px; }}
.chapter-rule {{ border: 0; border-top: 1px solid {c['light_border']}; margin: 0 0 30px; }}
.chapter-number {{ font-size: 12px; font-variant: small-caps; color: {c['storm_gray']}; letter-spacing: 2px; margin: 0 0 4px; }}
.chapter-title {{ font-size: 24px; font-weight: 700; color: {c['deep_sea']}; margin: 0 0 12px; }}
.section-header {{ font-weight: 600; margin: 24px 0 12px; }}
.section-header.level-2 {{ font-size: 18px; color: {c['deep_sea']}; }}
.section-header.level-3 {{ font-size: 15px; color: {c['deep_sea']}; }}
.section-header.level-4 {{ font-size: 13px; color: {c['storm_gray']}; }}
.body-paragraph, .drop-cap-paragraph {{ font-size: 14px; line-height: 1.7; margin: 0 0 14px; text-align: justify; }}
.drop-cap {{ font-size: 48px; font-weight: 700; color: {c['deep_sea']}; float: left; line-height: 0.8; margin: 4px 8px 0 0; }}
.bullet {{ font-size: 14px; margin: 0 0 6px; }}
.bullet-marker {{ color: {c['copper']}; }}
.definition {{ font-size: 14px; margin: 0 0 10px; }}
.definition > strong {{ color: {c['deep_sea']}; }}
.sidebar {{ background: {c['warm_sand']}; border: 1px solid {c['light_border']}; border-top: 4px solid; border-radius: 0 0 6px 6px; padding: 16px; margin: 20px 0; }}
.sidebar-header {{ font-size: 13px; margin-bottom: 8px; }}
.sidebar-label {{ font-weight: 600; font-variant: small-caps; letter-spacing: 1px; }}
.sidebar-title {{ font-weight: 600; font-size: 13px; margin-bottom: 6px; }}
.sidebar-meta {{ font-size: 12px; margin-bottom: 4px; }}
.sidebar-quote {{ font-style: italic; font-size: 14px; margin-top: 10px; }}
.styled-table {{ width: 100%; border-collapse: collapse; margin: 20px 0; font-size: 13px; }}
.styled-table th {{ background: {c['deep_sea']}; color: {c['white']}; padding: 10px; font-weight: 600; }}
.styled-table td {{ padding: 10px; text-align: center; border: 1px solid {c['light_border']}; }}
"""


def render_page(elements: list[Element], theme: Theme = DEFAULT_THEME, title: str = "Vaeloris Preview") -> str:
    """Standalone HTML document for the preview."""
    body = to_html(render_preview(elements, theme))
    return (
        "<!DOCTYPE html>\n"
        f"<html><head><meta charset=\"utf-8\"><title>{html.escape(title)}</title>\n"
        f"<style>\n{render_stylesheet(theme)}</style></head>\n"
        f"<body><div class=\"preview-document\">\n{body}\n</div></body></html>\n"
    )
