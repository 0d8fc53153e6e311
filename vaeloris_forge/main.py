"""CLI entry point for the Vaeloris document forge."""

import argparse
import logging
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from vaeloris_forge.config import load_settings, output_name
from vaeloris_forge.elements import summarize
from vaeloris_forge.pipeline.loader import load_document
from vaeloris_forge.pipeline.parser import parse_document
from vaeloris_forge.pipeline.assembler import assemble
from vaeloris_forge.render.export import save_document
from vaeloris_forge.sample import SAMPLE_CONTENT
from vaeloris_forge.state import ForgeState

logger = logging.getLogger(__name__)


def run_pipeline(source_path: str | None = None, content: str | None = None) -> ForgeState:
    """Run load -> parse -> assemble, return final state.

    Pass ``content`` to skip loading (the source path is then only a name).
    """
    state: ForgeState = {"source_path": source_path or "sample.md"}

    if content is None:
        state.update(load_document(state))
    else:
        state.update({"content": content, "source_name": Path(state["source_path"]).name})

    state.update(parse_document(state))
    state.update(assemble(state))
    return state


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Forge a styled .docx from a Vaeloris manuscript.")
    parser.add_argument("path", nargs="?", help="Manuscript (.md, .txt or .docx)")
    parser.add_argument("--sample", action="store_true", help="Use the built-in sample manuscript")
    parser.add_argument("--output", "-o", help="Output .docx path")
    parser.add_argument("--preview", help="Also write an HTML preview to this path")
    parser.add_argument("--summary", action="store_true", help="Print the detected elements")
    parser.add_argument("--log-level", default=settings.log_level,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if not args.path and not args.sample:
        parser.error("a manuscript path or --sample is required")

    if args.sample:
        source = Path("sample.md")
    else:
        source = Path(args.path)
        if not source.exists():
            logger.error("File not found: %s", source)
            return 1

    output_path = Path(args.output) if args.output else settings.output_dir / output_name(source.name, settings.output_suffix)

    start = time.time()
    logger.info("Forging %s", source)

    try:
        state = run_pipeline(str(source), content=SAMPLE_CONTENT if args.sample else None)
        save_document(state["document"], output_path)
        if args.preview:
            preview_path = Path(args.preview)
            preview_path.parent.mkdir(parents=True, exist_ok=True)
            preview_path.write_text(state["preview_html"], encoding="utf-8")
    except Exception:
        logger.exception("Pipeline failed")
        return 1

    elements = state["elements"]
    if args.summary:
        print(f"{len(elements)} elements detected")
        for line in summarize(elements):
            print(f"  {line}")

    logger.info("Done: %d elements -> %s (%.1fs)",
                len(elements), output_path, time.time() - start)
    return 0


if __name__ == "__main__":
    sys.exit(main())
