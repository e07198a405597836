"""Glyph sets used to draw borders.

The default style is chosen by the ``PI_LAYOUT_BORDER_STYLE`` environment
variable (``unicode``, ``unicode-bold``, ``unicode-rounded`` or ``ascii``).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pi.layout.border_map import BorderGlyph

logger = logging.getLogger(__name__)

BORDER_STYLE_ENV = "PI_LAYOUT_BORDER_STYLE"


@dataclass(frozen=True)
class BorderStyle:
    corner_tl: str
    corner_tr: str
    corner_bl: str
    corner_br: str
    intersect_full: str
    intersect_l: str
    intersect_r: str
    intersect_t: str
    intersect_b: str
    horizontal: str
    vertical: str

    def glyph(self, kind: BorderGlyph) -> str:
        """Return the character this style draws for *kind*."""
        if kind.value == "blank":
            return " "
        return getattr(self, kind.value)


UNICODE = BorderStyle(
    corner_tl="┌",
    corner_tr="┐",
    corner_bl="└",
    corner_br="┘",
    intersect_full="┼",
    intersect_l="├",
    intersect_r="┤",
    intersect_t="┬",
    intersect_b="┴",
    horizontal="─",
    vertical="│",
)

UNICODE_BOLD = BorderStyle(
    corner_tl="┏",
    corner_tr="┓",
    corner_bl="┗",
    corner_br="┛",
    intersect_full="╋",
    intersect_l="┣",
    intersect_r="┫",
    intersect_t="┳",
    intersect_b="┻",
    horizontal="━",
    vertical="┃",
)

UNICODE_ROUNDED = BorderStyle(
    corner_tl="╭",
    corner_tr="╮",
    corner_bl="╰",
    corner_br="╯",
    intersect_full="┼",
    intersect_l="├",
    intersect_r="┤",
    intersect_t="┬",
    intersect_b="┴",
    horizontal="─",
    vertical="│",
)

ASCII = BorderStyle(
    corner_tl="+",
    corner_tr="+",
    corner_bl="+",
    corner_br="+",
    intersect_full="+",
    intersect_l="+",
    intersect_r="+",
    intersect_t="+",
    intersect_b="+",
    horizontal="-",
    vertical="|",
)

BORDER_STYLES: dict[str, BorderStyle] = {
    "unicode": UNICODE,
    "unicode-bold": UNICODE_BOLD,
    "unicode-rounded": UNICODE_ROUNDED,
    "ascii": ASCII,
}


def border_style_from_char(ch: str) -> BorderStyle:
    """A style that draws every part of the border with *ch*."""
    return BorderStyle(*([ch] * 11))


def default_border_style() -> BorderStyle:
    """Return the style selected by ``PI_LAYOUT_BORDER_STYLE``."""
    name = os.environ.get(BORDER_STYLE_ENV, "").strip().lower()
    if not name:
        return UNICODE
    style = BORDER_STYLES.get(name)
    if style is None:
        logger.warning(
            "Unknown %s value %r, using 'unicode' (expected one of %s)",
            BORDER_STYLE_ENV,
            name,
            ", ".join(sorted(BORDER_STYLES)),
        )
        return UNICODE
    return style
