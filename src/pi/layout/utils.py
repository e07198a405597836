"""Terminal text measurement: grapheme segmentation and column widths.

Every string that enters an image is split into grapheme clusters and
measured here, so a wide character always occupies exactly two cells.
"""

from __future__ import annotations

import unicodedata

import grapheme
import wcwidth as _wcwidth

TAB_WIDTH = 3

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Zero-width clusters (control characters, lone marks) -> 0
    2. Emoji sequences (VS16, ZWJ, skin tones, regional indicators) -> 2
    3. Otherwise delegate to wcwidth for the first codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF:
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


# ---------------------------------------------------------------------------
# Segmentation and measurement
# ---------------------------------------------------------------------------


def graphemes(text: str) -> list[tuple[str, int]]:
    """Split *text* into ``(grapheme, width)`` pairs.

    Tabs expand to spaces and zero-width clusters are dropped, so the
    widths always sum to :func:`text_width` of the same string.
    """
    out: list[tuple[str, int]] = []
    for g in grapheme.graphemes(text.replace("\t", " " * TAB_WIDTH)):
        w = grapheme_width(g)
        if w > 0:
            out.append((g, w))
    return out


def text_width(text: str) -> int:
    """Return the number of terminal columns *text* occupies."""
    if not text:
        return 0

    expanded = text.replace("\t", " " * TAB_WIDTH)
    if all(0x20 <= ord(ch) <= 0x7E for ch in expanded):
        return len(expanded)

    cached = _width_cache.get(expanded)
    if cached is not None:
        return cached

    return _cache_width(expanded, sum(w for _, w in graphemes(expanded)))


def take_columns(text: str, max_cols: int) -> str:
    """Return the longest prefix of *text* that fits in *max_cols* columns.

    A wide grapheme that would straddle the limit is dropped entirely.
    """
    if max_cols <= 0:
        return ""
    taken: list[str] = []
    used = 0
    for g, w in graphemes(text):
        if used + w > max_cols:
            break
        taken.append(g)
        used += w
    return "".join(taken)
