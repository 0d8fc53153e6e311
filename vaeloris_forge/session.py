"""
Interactive forge session: load a manuscript, inspect it, generate a document.

Status transitions::

    IDLE -> PARSING -> READY -> GENERATING -> COMPLETE
                 \\                    \\
                  -> ERROR              -> ERROR

``reset()`` returns to IDLE from any status. A failed load or generate
clears the loaded content and elements before the error propagates, so no
half-loaded manuscript survives a failure.
"""

import logging
from enum import Enum
from pathlib import Path

from vaeloris_forge.config import DEFAULT_OUTPUT_SUFFIX, output_name
from vaeloris_forge.elements import Element, summarize
from vaeloris_forge.errors import SessionStateError
from vaeloris_forge.pipeline.loader import load_document
from vaeloris_forge.pipeline.parser import parse_document
from vaeloris_forge.render.export import render_document, save_document
from vaeloris_forge.render.preview import render_page
from vaeloris_forge.styles import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)


class ForgeStatus(str, Enum):
    IDLE = "idle"
    PARSING = "parsing"
    READY = "ready"
    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class ForgeSession:
    def __init__(
        self,
        theme: Theme = DEFAULT_THEME,
        output_dir: str | Path = "output",
        output_suffix: str = DEFAULT_OUTPUT_SUFFIX,
    ):
        self.theme = theme
        self.output_dir = Path(output_dir)
        self.output_suffix = output_suffix
        self.reset()

    def reset(self) -> None:
        self.status = ForgeStatus.IDLE
        self.source_name: str | None = None
        self.content = ""
        self.elements: list[Element] = []
        self.error: str | None = None

    def _fail(self, exc: Exception) -> None:
        self.content = ""
        self.elements = []
        self.error = str(exc)
        self.status = ForgeStatus.ERROR

    def load(self, path: str | Path) -> list[Element]:
        self.status = ForgeStatus.PARSING
        self.source_name = Path(path).name
        try:
            state = load_document({"source_path": str(path)})
            state.update(parse_document(state))
        except Exception as exc:
            logger.error("Error processing %s: %s", path, exc)
            self._fail(exc)
            raise
        return self._ready(state["content"], state["elements"])

    def load_text(self, text: str, name: str = "manuscript.md") -> list[Element]:
        self.status = ForgeStatus.PARSING
        self.source_name = name
        try:
            elements = parse_document({"content": text})["elements"]
        except Exception as exc:
            logger.error("Error parsing %s: %s", name, exc)
            self._fail(exc)
            raise
        return self._ready(text, elements)

    def _ready(self, content: str, elements: list[Element]) -> list[Element]:
        self.content = content
        self.elements = elements
        self.error = None
        self.status = ForgeStatus.READY
        return elements

    def _require_ready(self, operation: str) -> None:
        if self.status not in (ForgeStatus.READY, ForgeStatus.COMPLETE):
            raise SessionStateError(f"Cannot {operation} while {self.status.value}")

    def summary(self, limit: int = 10) -> list[str]:
        return summarize(self.elements, limit)

    def preview_html(self) -> str:
        self._require_ready("preview")
        return render_page(self.elements, self.theme, title=self.source_name or "Vaeloris Preview")

    def generate(self, output_path: str | Path | None = None) -> Path:
        self._require_ready("generate")
        if output_path is None:
            output_path = self.output_dir / output_name(self.source_name, self.output_suffix)

        self.status = ForgeStatus.GENERATING
        try:
            written = save_document(render_document(self.elements, self.theme), output_path)
        except Exception as exc:
            logger.error("Error generating document: %s", exc)
            self._fail(exc)
            raise
        self.status = ForgeStatus.COMPLETE
        logger.info("Forged %s (%d elements)", written, len(self.elements))
        return written
