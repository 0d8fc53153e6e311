"""
Shared state for the forge pipeline.
"""

from typing import Any, TypedDict

from vaeloris_forge.elements import Element
from vaeloris_forge.styles import Theme


class ForgeState(TypedDict, total=False):
    source_path: str
    source_name: str
    content: str          # raw manuscript text
    elements: list[Element]
    theme: Theme
    document: Any         # python-docx Document
    preview_html: str
