"""
Runtime settings read from the environment (after ``load_dotenv``).
"""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_OUTPUT_SUFFIX = "_VAELORIS"


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    output_dir: Path = Path("output")
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX


def load_settings() -> Settings:
    return Settings(
        log_level=os.getenv("FORGE_LOG_LEVEL", "INFO").upper(),
        output_dir=Path(os.getenv("FORGE_OUTPUT_DIR", "output")),
        output_suffix=os.getenv("FORGE_OUTPUT_SUFFIX", DEFAULT_OUTPUT_SUFFIX),
    )


def output_name(source_name: str, suffix: str = DEFAULT_OUTPUT_SUFFIX) -> str:
    """``chapter_one.md`` -> ``chapter_one_VAELORIS.docx``."""
    return f"{Path(source_name).stem}{suffix}.docx"
