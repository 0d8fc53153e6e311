"""
Manuscript loading: plain text read directly, .docx through Docling.
"""

import logging
from pathlib import Path

from vaeloris_forge.errors import ExtractionError, UnsupportedFileError

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = (".md", ".txt")
DOCX_SUFFIX = ".docx"


def _extract_docx_text(path: Path) -> str:
    """Raw text of a .docx, one blank line between paragraphs."""
    from docling.document_converter import DocumentConverter

    try:
        doc = DocumentConverter().convert(str(path)).document
    except Exception as exc:
        raise ExtractionError(f"Could not extract text from {path.name}") from exc

    parts: list[str] = []
    for item, _level in doc.iterate_items():
        text = getattr(item, "text", "")
        if text and text.strip():
            parts.append(text.strip())
    logger.info("Extracted %d text items from %s", len(parts), path.name)
    return "\n\n".join(parts)


def read_manuscript(path: str | Path) -> str:
    """Return the manuscript text, dispatching on file suffix."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Manuscript not found: {path}")

    suffix = path.suffix.lower()
    if suffix == DOCX_SUFFIX:
        logger.info("Converting with Docling: %s", path)
        return _extract_docx_text(path)
    if suffix in TEXT_SUFFIXES:
        return path.read_text(encoding="utf-8")
    raise UnsupportedFileError(f"Unsupported manuscript type {suffix or '(none)'!r}: {path.name}")


def load_document(state: dict) -> dict:
    """Pipeline step: read ``state["source_path"]`` into ``content``."""
    content = read_manuscript(state["source_path"])
    logger.info("Loaded %d lines from %s", content.count("\n") + 1, state["source_path"])
    return {"content": content, "source_name": Path(state["source_path"]).name}
