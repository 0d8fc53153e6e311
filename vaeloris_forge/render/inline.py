"""
Inline markup shared by both renderers.

Only ``**bold**`` (or ``***bold italic***``) becomes a separate run. Single
emphasis (``*x*``, ``_x_``) and backslash escapes are stripped, and hyphen runs
become dashes.
"""

import re
from typing import NamedTuple

EM_DASH = "—"
EN_DASH = "–"

# a third asterisk on either side (bold italic) belongs to the same span
_BOLD_RE = re.compile(r"\*{2,3}([^*]+)\*{2,3}")
_STAR_EMPHASIS_RE = re.compile(r"\*([^*]+)\*")
_UNDERSCORE_EMPHASIS_RE = re.compile(r"_([^_]+)_")
_ESCAPE_RE = re.compile(r"\\([\\`*_{}\[\]()#+\-.!|])")


class TextRun(NamedTuple):
    text: str
    bold: bool = False


def clean_markdown(text: str) -> str:
    text = _BOLD_RE.sub(r"\1", text)
    text = _STAR_EMPHASIS_RE.sub(r"\1", text)
    text = _UNDERSCORE_EMPHASIS_RE.sub(r"\1", text)
    text = _ESCAPE_RE.sub(r"\1", text)
    return text.replace("---", EM_DASH).replace("--", EN_DASH)


def split_runs(text: str) -> list[TextRun]:
    """Split ``text`` into plain and bold runs, cleaning each one.

    Always returns at least one run, even for an empty string.
    """
    runs: list[TextRun] = []
    last = 0
    for m in _BOLD_RE.finditer(text):
        if m.start() > last:
            runs.append(TextRun(clean_markdown(text[last:m.start()])))
        runs.append(TextRun(clean_markdown(m.group(1)), bold=True))
        last = m.end()
    if last < len(text):
        runs.append(TextRun(clean_markdown(text[last:])))
    return runs or [TextRun(clean_markdown(text))]
