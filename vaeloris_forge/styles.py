"""
Palette and sidebar style table.

Colors are 6-digit hex strings without a leading ``#``; the preview renderer
adds the prefix, python-docx takes them as-is.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    deep_sea: str = "2C5F7C"
    storm_gray: str = "5A6978"
    copper: str = "B87333"
    rust_red: str = "A63D40"
    olive: str = "6B8E23"
    dark_gray: str = "2D3748"
    light_border: str = "C9D1D9"
    warm_sand: str = "F7F3EB"
    cream: str = "FFFEF9"
    white: str = "FFFFFF"


DEFAULT_THEME = Theme()

ORNAMENT = "·  ◊  ·"
DIVIDER = "─────────  ◊  ─────────"


@dataclass(frozen=True)
class SidebarStyle:
    label: str
    color: str


# code -> (label, palette field)
SIDEBAR_STYLES: dict[str, tuple[str, str]] = {
    "A": ("SCHOLAR'S NOTE", "deep_sea"),
    "B": ("FIELD NOTE", "copper"),
    "D": ("WARDEN'S WARNING", "rust_red"),
    "E": ("SCHOLAR'S NOTE", "deep_sea"),
    "F": ("FIELD NOTE", "copper"),
    "L": ("SCHOLAR'S NOTE", "deep_sea"),
    "Q": ("SCHOLAR'S NOTE", "deep_sea"),
    "R": ("REGIONAL VARIATION", "storm_gray"),
    "S": ("WARDEN'S WARNING", "rust_red"),
    "V": ("HEALER'S NOTE", "olive"),
    "W": ("WARDEN'S WARNING", "rust_red"),
}

DEFAULT_SIDEBAR_STYLE = ("NOTE", "deep_sea")


def lookup_style(code: str, theme: Theme = DEFAULT_THEME) -> SidebarStyle:
    """Resolve a sidebar code to its label and accent color. Never raises."""
    label, color_key = SIDEBAR_STYLES.get((code or "").upper(), DEFAULT_SIDEBAR_STYLE)
    return SidebarStyle(label=label, color=getattr(theme, color_key))
