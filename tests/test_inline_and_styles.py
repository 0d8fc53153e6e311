import pytest

from vaeloris_forge.elements import Paragraph
from vaeloris_forge.render.export import render_document
from vaeloris_forge.render.inline import EM_DASH, EN_DASH, TextRun, clean_markdown, split_runs
from vaeloris_forge.render.preview import render_preview
from vaeloris_forge.styles import DEFAULT_THEME, SIDEBAR_STYLES, Theme, lookup_style


def test_split_runs_marks_bold_spans():
    assert split_runs("The **Reedfolk** live here") == [
        TextRun("The "),
        TextRun("Reedfolk", bold=True),
        TextRun(" live here"),
    ]


def test_split_runs_never_empty():
    assert split_runs("") == [TextRun("")]
    assert split_runs("**all bold**") == [TextRun("all bold", bold=True)]


def test_clean_markdown_strips_emphasis_and_escapes():
    assert clean_markdown("*soft* and _quiet_ with snake\\_case") == "soft and quiet with snake_case"


def test_clean_markdown_dashes():
    assert clean_markdown("wait---what") == f"wait{EM_DASH}what"
    assert clean_markdown("pages 3--5") == f"pages 3{EN_DASH}5"


def test_italics_are_not_runs():
    runs = split_runs("an *italic* word")
    assert runs == [TextRun("an italic word")]


def test_bold_italic_span_is_one_bold_run():
    assert split_runs("and ***both*** here") == [
        TextRun("and "),
        TextRun("both", bold=True),
        TextRun(" here"),
    ]
    assert clean_markdown("***both***") == "both"


def test_no_asterisks_survive_either_renderer():
    text = "A **bold** word and ***both*** here"
    (node,) = render_preview([Paragraph(text)])
    assert node.text() == "A bold word and both here"

    doc = render_document([Paragraph(text)])
    rendered = doc.paragraphs[0].text
    assert "*" not in rendered
    assert rendered == "A bold word and both here"
    assert [r.text for r in doc.paragraphs[0].runs if r.bold] == ["bold", "both"]


@pytest.mark.parametrize("code, label, color", [
    ("A", "SCHOLAR'S NOTE", DEFAULT_THEME.deep_sea),
    ("b", "FIELD NOTE", DEFAULT_THEME.copper),
    ("D", "WARDEN'S WARNING", DEFAULT_THEME.rust_red),
    ("R", "REGIONAL VARIATION", DEFAULT_THEME.storm_gray),
    ("V", "HEALER'S NOTE", DEFAULT_THEME.olive),
])
def test_lookup_known_codes(code, label, color):
    style = lookup_style(code)
    assert style.label == label
    assert style.color == color


@pytest.mark.parametrize("code", ["C", "Z", "x", "", "??"])
def test_lookup_unknown_codes_fall_back(code):
    style = lookup_style(code)
    assert style.label == "NOTE"
    assert style.color == DEFAULT_THEME.deep_sea


def test_style_table_codes():
    assert set(SIDEBAR_STYLES) == set("ABDEFLQRSVW")


def test_lookup_follows_theme():
    theme = Theme(copper="112233")
    assert lookup_style("F", theme).color == "112233"
