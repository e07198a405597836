"""Joinable border cells.

A widget that draws borders in join mode records, for every border cell it
paints, which of the cell's four edges carry a line.  The records live in a
sparse :class:`BorderMap` keyed by ``(row, col)`` in the widget's own
coordinates.  When boxes place widgets next to each other the maps are
translated, merged and joined at the seams, and the glyph of every changed
cell is picked again from :func:`glyph_for_edges`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Generic, Iterator, Mapping, TypeVar

from pi.layout.border_style import BorderStyle
from pi.layout.canvas import Attr, Image

T = TypeVar("T")

Key = tuple[int, int]


@dataclass(frozen=True)
class Edges(Generic[T]):
    """One value per side: top, bottom, left, right."""

    top: T
    bottom: T
    left: T
    right: T

    def __or__(self, other: Edges[T]) -> Edges[T]:
        return Edges(
            self.top or other.top,  # type: ignore[arg-type]
            self.bottom or other.bottom,  # type: ignore[arg-type]
            self.left or other.left,  # type: ignore[arg-type]
            self.right or other.right,  # type: ignore[arg-type]
        )


NO_EDGES: Edges[bool] = Edges(False, False, False, False)


# ---------------------------------------------------------------------------
# Glyph selection
# ---------------------------------------------------------------------------


class BorderGlyph(Enum):
    """Glyph classes; values name the matching :class:`BorderStyle` field."""

    BLANK = "blank"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    CORNER_TL = "corner_tl"
    CORNER_TR = "corner_tr"
    CORNER_BL = "corner_bl"
    CORNER_BR = "corner_br"
    INTERSECT_T = "intersect_t"
    INTERSECT_B = "intersect_b"
    INTERSECT_L = "intersect_l"
    INTERSECT_R = "intersect_r"
    INTERSECT_FULL = "intersect_full"


#            (top,   bottom, left,  right)
_JOIN_TABLE: dict[tuple[bool, bool, bool, bool], BorderGlyph] = {
    (False, True, False, True): BorderGlyph.CORNER_TL,
    (False, True, True, False): BorderGlyph.CORNER_TR,
    (True, False, False, True): BorderGlyph.CORNER_BL,
    (True, False, True, False): BorderGlyph.CORNER_BR,
    (False, True, True, True): BorderGlyph.INTERSECT_T,
    (True, False, True, True): BorderGlyph.INTERSECT_B,
    (True, True, False, True): BorderGlyph.INTERSECT_L,
    (True, True, True, False): BorderGlyph.INTERSECT_R,
    (True, True, True, True): BorderGlyph.INTERSECT_FULL,
}


def glyph_for_edges(edges: Edges[bool]) -> BorderGlyph:
    """Pick the glyph class for a cell whose drawn edges are *edges*.

    A cell with a single edge is drawn as the straight segment along that
    edge's axis.
    """
    vertical = edges.top or edges.bottom
    horizontal = edges.left or edges.right
    if not vertical and not horizontal:
        return BorderGlyph.BLANK
    if not vertical:
        return BorderGlyph.HORIZONTAL
    if not horizontal:
        return BorderGlyph.VERTICAL
    return _JOIN_TABLE[(edges.top, edges.bottom, edges.left, edges.right)]


# ---------------------------------------------------------------------------
# Border cells
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DynBorder:
    """A border cell: how it is styled and which of its edges are drawn."""

    style: BorderStyle
    edges: Edges[bool]
    attr: Attr

    @property
    def glyph(self) -> BorderGlyph:
        return glyph_for_edges(self.edges)


def render_dyn_border(db: DynBorder) -> Image:
    """Render one border cell as a 1x1 image."""
    return Image.char(db.attr, db.style.glyph(db.glyph))


class BorderMap:
    """Sparse ``(row, col) -> DynBorder`` store."""

    __slots__ = ("_cells",)

    def __init__(self, cells: Mapping[Key, DynBorder] | None = None) -> None:
        self._cells: dict[Key, DynBorder] = dict(cells or {})

    @classmethod
    def singleton(cls, row: int, col: int, db: DynBorder) -> BorderMap:
        return cls({(row, col): db})

    def insert(self, row: int, col: int, db: DynBorder) -> BorderMap:
        cells = dict(self._cells)
        cells[(row, col)] = db
        return BorderMap(cells)

    def get(self, row: int, col: int) -> DynBorder | None:
        return self._cells.get((row, col))

    def crop(self, bounds: Edges[int]) -> BorderMap:
        """Keep only the cells inside *bounds* (inclusive on every side)."""
        return BorderMap(
            {
                (r, c): db
                for (r, c), db in self._cells.items()
                if bounds.top <= r <= bounds.bottom and bounds.left <= c <= bounds.right
            }
        )

    def translate(self, rows: int, cols: int) -> BorderMap:
        if not self._cells or (rows == 0 and cols == 0):
            return self
        return BorderMap({(r + rows, c + cols): db for (r, c), db in self._cells.items()})

    def merge(self, other: BorderMap) -> BorderMap:
        """Union of both maps.

        Where both define a cell the edge flags are OR-combined and the
        style and attribute of *other* win.
        """
        if not other._cells:
            return self
        cells = dict(self._cells)
        for key, db in other._cells.items():
            mine = cells.get(key)
            cells[key] = db if mine is None else replace(db, edges=mine.edges | db.edges)
        return BorderMap(cells)

    def column(self, col: int) -> dict[int, DynBorder]:
        return {r: db for (r, c), db in self._cells.items() if c == col}

    def row(self, row: int) -> dict[int, DynBorder]:
        return {c: db for (r, c), db in self._cells.items() if r == row}

    def items(self) -> Iterator[tuple[Key, DynBorder]]:
        return iter(self._cells.items())

    def __iter__(self) -> Iterator[Key]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, key: object) -> bool:
        return key in self._cells

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BorderMap):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"BorderMap({self._cells!r})"


# ---------------------------------------------------------------------------
# Seam joining
# ---------------------------------------------------------------------------


def join_seam(first: BorderMap, second: BorderMap, seam: int, horizontal: bool) -> BorderMap:
    """Connect border cells that face each other across a seam.

    With *horizontal* true the seam lies between column ``seam`` (the last
    column of *first*) and column ``seam + 1`` (the first column of
    *second*); otherwise it lies between rows ``seam`` and ``seam + 1``.
    Both maps must already be in the same coordinate space.

    A cell gains the edge pointing at its neighbour when the neighbour
    draws the edge pointing back and both share style and attribute.
    Returns only the cells that changed.
    """
    toward_second, toward_first = ("right", "left") if horizontal else ("bottom", "top")
    cells = first.column(seam) if horizontal else first.row(seam)

    updates: dict[Key, DynBorder] = {}
    for pos, a in cells.items():
        a_key = (pos, seam) if horizontal else (seam, pos)
        b_key = (pos, seam + 1) if horizontal else (seam + 1, pos)
        b = second.get(*b_key)
        if b is None or a.style != b.style or a.attr != b.attr:
            continue
        a_draws = getattr(a.edges, toward_second)
        b_draws = getattr(b.edges, toward_first)
        if b_draws and not a_draws:
            updates[a_key] = replace(a, edges=replace(a.edges, **{toward_second: True}))
        if a_draws and not b_draws:
            updates[b_key] = replace(b, edges=replace(b.edges, **{toward_first: True}))
    return BorderMap(updates)
