"""Table layout: a grid of fixed-size cells with optional borders.

Each row is as tall as its tallest cell and each column as wide as its
widest cell, so row and column sizes are controlled entirely through the
cells themselves (padding, limits, fills).  Alignment only matters for a
cell smaller than its row or column.

Defaults: every column left-aligned, every row top-aligned, and borders
drawn around the table, between rows and between columns.  Tables always
render with border joining on; wrap a cell in
:func:`~pi.layout.widgets.core.freeze_borders` to keep its own borders
from connecting to the table's.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Sequence, TypeVar

from pi.layout.canvas import Image
from pi.layout.errors import InvalidCellSizePolicy, UnequalRowSizes
from pi.layout.types import FIXED, Context, RenderState, Result, Widget
from pi.layout.widgets.border import (
    BOTTOM_LEFT_CORNER,
    BOTTOM_RIGHT_CORNER,
    BOTTOM_T,
    CROSS,
    LEFT_T,
    RIGHT_T,
    TOP_LEFT_CORNER,
    TOP_RIGHT_CORNER,
    TOP_T,
    hborder,
    vborder,
)
from pi.layout.widgets.core import (
    MAX,
    from_result,
    hbox,
    hcenter,
    hlimit,
    join_borders,
    pad_bottom,
    pad_left,
    pad_right,
    pad_top,
    vbox,
    vcenter,
    vlimit,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ColumnAlignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class RowAlignment(Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Table:
    """A validated grid of cells plus alignment and border settings.

    Build one with :func:`table`; every setter returns a modified copy.
    """

    rows: tuple[tuple[Widget, ...], ...]
    column_alignments: dict[int, ColumnAlignment] = field(default_factory=dict)
    row_alignments: dict[int, RowAlignment] = field(default_factory=dict)
    default_column_alignment: ColumnAlignment = ColumnAlignment.LEFT
    default_row_alignment: RowAlignment = RowAlignment.TOP
    draw_surrounding_border: bool = True
    draw_row_borders: bool = True
    draw_column_borders: bool = True

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    @property
    def num_columns(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def column_alignment(self, col: int) -> ColumnAlignment:
        return self.column_alignments.get(col, self.default_column_alignment)

    def row_alignment(self, row: int) -> RowAlignment:
        return self.row_alignments.get(row, self.default_row_alignment)


def table(rows: Sequence[Sequence[Widget]]) -> Table:
    """Build a table from *rows*, topmost row first, leftmost cell first.

    Raises :class:`~pi.layout.errors.InvalidCellSizePolicy` if any cell is
    greedy on either axis, and :class:`~pi.layout.errors.UnequalRowSizes`
    if the rows differ in length.
    """
    grid = tuple(tuple(row) for row in rows)
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            if not cell.is_fixed:
                raise InvalidCellSizePolicy(r, c, cell.h_size, cell.v_size)

    lengths = [len(row) for row in grid]
    if len(set(lengths)) > 1:
        raise UnequalRowSizes(lengths)

    return Table(grid)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def surrounding_border(enabled: bool, t: Table) -> Table:
    return replace(t, draw_surrounding_border=enabled)


def row_borders(enabled: bool, t: Table) -> Table:
    return replace(t, draw_row_borders=enabled)


def column_borders(enabled: bool, t: Table) -> Table:
    return replace(t, draw_column_borders=enabled)


def set_column_alignment(alignment: ColumnAlignment, col: int, t: Table) -> Table:
    """Align column *col* (zero-based); out-of-range indices are ignored."""
    if not 0 <= col < t.num_columns:
        return t
    return replace(t, column_alignments={**t.column_alignments, col: alignment})


def set_row_alignment(alignment: RowAlignment, row: int, t: Table) -> Table:
    """Align row *row* (zero-based); out-of-range indices are ignored."""
    if not 0 <= row < t.num_rows:
        return t
    return replace(t, row_alignments={**t.row_alignments, row: alignment})


def set_default_column_alignment(alignment: ColumnAlignment, t: Table) -> Table:
    return replace(t, default_column_alignment=alignment)


def set_default_row_alignment(alignment: RowAlignment, t: Table) -> Table:
    return replace(t, default_row_alignment=alignment)


def align_left(col: int, t: Table) -> Table:
    return set_column_alignment(ColumnAlignment.LEFT, col, t)


def align_center(col: int, t: Table) -> Table:
    return set_column_alignment(ColumnAlignment.CENTER, col, t)


def align_right(col: int, t: Table) -> Table:
    return set_column_alignment(ColumnAlignment.RIGHT, col, t)


def align_top(row: int, t: Table) -> Table:
    return set_row_alignment(RowAlignment.TOP, row, t)


def align_middle(row: int, t: Table) -> Table:
    return set_row_alignment(RowAlignment.MIDDLE, row, t)


def align_bottom(row: int, t: Table) -> Table:
    return set_row_alignment(RowAlignment.BOTTOM, row, t)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _intersperse(separator: T, items: list[T]) -> list[T]:
    out: list[T] = []
    for i, item in enumerate(items):
        if i:
            out.append(separator)
        out.append(item)
    return out


def _apply_column_alignment(width: int, alignment: ColumnAlignment, w: Widget) -> Widget:
    if alignment is ColumnAlignment.LEFT:
        aligned = pad_right(MAX, w)
    elif alignment is ColumnAlignment.CENTER:
        aligned = hcenter(w)
    else:
        aligned = pad_left(MAX, w)
    return hlimit(width, aligned)


def _apply_row_alignment(height: int, alignment: RowAlignment, w: Widget) -> Widget:
    if alignment is RowAlignment.TOP:
        aligned = pad_bottom(MAX, w)
    elif alignment is RowAlignment.MIDDLE:
        aligned = vcenter(w)
    else:
        aligned = pad_top(MAX, w)
    return vlimit(height, aligned)


def render_table(t: Table) -> Widget:
    """Turn *t* into a fixed-size widget."""

    def render(ctx: Context, state: RenderState) -> Result:
        cell_results = [[cell.render(ctx, state) for cell in row] for row in t.rows]
        by_column = [list(col) for col in zip(*cell_results)]

        row_heights = [max((r.image.height for r in row), default=0) for row in cell_results]
        col_widths = [max((r.image.width for r in col), default=0) for col in by_column]
        row_aligns = [t.row_alignment(i) for i in range(len(row_heights))]
        logger.debug("Table rows %s, columns %s", row_heights, col_widths)

        attr = ctx.attr

        def fill_empty_cell(width: int, height: int, result: Result) -> Result:
            if result.image.width == 0 and result.image.height == 0:
                return replace(result, image=Image.char_fill(attr, " ", width, height))
            return result

        columns: list[Widget] = []
        for c, (width, cells) in enumerate(zip(col_widths, by_column)):
            h_align = t.column_alignment(c)
            padded = [
                _apply_column_alignment(
                    width,
                    h_align,
                    _apply_row_alignment(
                        height, v_align, from_result(fill_empty_cell(width, height, cell))
                    ),
                )
                for v_align, height, cell in zip(row_aligns, row_heights, cells)
            ]
            if t.draw_row_borders:
                padded = _intersperse(hlimit(width, hborder()), padded)
            columns.append(vbox(padded))

        v_borders = [vlimit(height, vborder()) for height in row_heights]
        h_borders = [hlimit(width, hborder()) for width in col_widths]

        if t.draw_column_borders:
            pieces = _intersperse(CROSS, v_borders) if t.draw_row_borders else v_borders
            columns = _intersperse(vbox(pieces), columns)
        body = hbox(columns)

        if t.draw_surrounding_border:
            top_pieces = _intersperse(TOP_T, h_borders) if t.draw_column_borders else h_borders
            bottom_pieces = (
                _intersperse(BOTTOM_T, h_borders) if t.draw_column_borders else h_borders
            )
            left_pieces = _intersperse(LEFT_T, v_borders) if t.draw_row_borders else v_borders
            right_pieces = _intersperse(RIGHT_T, v_borders) if t.draw_row_borders else v_borders
            left = vbox([TOP_LEFT_CORNER, *left_pieces, BOTTOM_LEFT_CORNER])
            right = vbox([TOP_RIGHT_CORNER, *right_pieces, BOTTOM_RIGHT_CORNER])
            body = hbox([left, vbox([hbox(top_pieces), body, hbox(bottom_pieces)]), right])

        return body.render(ctx, state)

    return join_borders(Widget(FIXED, FIXED, render))
