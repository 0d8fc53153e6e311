"""
pipeline/assembler.py: render the parsed elements into both outputs.

Pure: nothing is written to disk here.
"""

import logging

from vaeloris_forge.render.export import render_document
from vaeloris_forge.render.preview import render_page
from vaeloris_forge.styles import DEFAULT_THEME

logger = logging.getLogger(__name__)


def assemble(state: dict) -> dict:
    """Build the export document and the HTML preview from ``state["elements"]``."""
    elements = state.get("elements", [])
    theme = state.get("theme", DEFAULT_THEME)

    document = render_document(elements, theme)
    preview = render_page(elements, theme, title=state.get("source_name", "Vaeloris Preview"))

    logger.info("Assembly complete: %d elements, %d document blocks",
                len(elements), len(document.element.body))
    return {"document": document, "preview_html": preview}
