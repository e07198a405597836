"""Tests for pi.layout.widgets.table."""

from __future__ import annotations

import pytest

from pi.layout.canvas import DEFAULT_ATTR, Image
from pi.layout.errors import InvalidCellSizePolicy, LayoutError, TableError, UnequalRowSizes
from pi.layout.types import GREEDY, Context, RenderState, Result, Widget
from pi.layout.widgets import (
    ColumnAlignment,
    RowAlignment,
    align_bottom,
    align_center,
    align_middle,
    align_right,
    column_borders,
    empty_widget,
    fill,
    hlimit,
    raw,
    render_table,
    row_borders,
    set_default_column_alignment,
    set_default_row_alignment,
    surrounding_border,
    table,
    text,
)
from pi.layout.widgets.table import Table


def _block(ch: str, width: int, height: int) -> Widget:
    return raw(Image.char_fill(DEFAULT_ATTR, ch, width, height))


def _render(t: Table, width: int = 40, height: int = 20) -> Result:
    return render_table(t).render(Context.for_display(width, height), RenderState())


def _lines(t: Table) -> list[str]:
    return _render(t).image.text_lines()


def _borderless(t: Table) -> Table:
    return surrounding_border(False, row_borders(False, column_borders(False, t)))


def _sample() -> Table:
    # Column widths [4, 5], row heights [2, 3].
    return table(
        [
            [_block("a", 3, 1), _block("b", 5, 2)],
            [_block("c", 4, 3), _block("d", 2, 1)],
        ]
    )


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestTableConstruction:
    def test_unequal_rows_rejected(self) -> None:
        rows = [[text("a"), text("b")], [text("c"), text("d")], [text("e"), text("f"), text("g")]]
        with pytest.raises(UnequalRowSizes) as exc_info:
            table(rows)
        assert exc_info.value.row_lengths == [2, 2, 3]

    def test_greedy_cell_rejected(self) -> None:
        with pytest.raises(InvalidCellSizePolicy) as exc_info:
            table([[text("a"), text("b")], [text("c"), fill("x")]])
        err = exc_info.value
        assert (err.row, err.col) == (1, 1)
        assert err.h_size is GREEDY and err.v_size is GREEDY

    def test_partially_greedy_cell_rejected(self) -> None:
        with pytest.raises(InvalidCellSizePolicy):
            table([[hlimit(3, fill("x"))]])

    def test_size_policy_checked_before_row_lengths(self) -> None:
        with pytest.raises(InvalidCellSizePolicy):
            table([[fill()], [text("a"), text("b")]])

    def test_errors_share_a_base(self) -> None:
        assert issubclass(UnequalRowSizes, TableError)
        assert issubclass(InvalidCellSizePolicy, TableError)
        assert issubclass(TableError, LayoutError)

    def test_valid_grid(self) -> None:
        t = _sample()
        assert (t.num_rows, t.num_columns) == (2, 2)
        assert t.draw_surrounding_border and t.draw_row_borders and t.draw_column_borders

    def test_rendered_table_is_fixed(self) -> None:
        w = render_table(_sample())
        assert w.is_fixed


# ---------------------------------------------------------------------------
# Sizing
# ---------------------------------------------------------------------------


class TestTableSizing:
    def test_borderless_size_is_sum_of_maxima(self) -> None:
        img = _render(_borderless(_sample())).image
        assert (img.width, img.height) == (9, 5)

    def test_bordered_size_adds_border_lines(self) -> None:
        img = _render(_sample()).image
        assert (img.width, img.height) == (12, 8)

    def test_borderless_layout(self) -> None:
        assert _lines(_borderless(_sample())) == [
            "aaa bbbbb",
            "    bbbbb",
            "ccccdd   ",
            "cccc     ",
            "cccc     ",
        ]

    def test_empty_cells_take_up_their_slot(self) -> None:
        t = table([[text("ab"), empty_widget()], [empty_widget(), text("cd")]])
        assert _lines(_borderless(t)) == ["ab  ", "  cd"]


# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------


class TestTableBorders:
    def test_all_borders_join(self) -> None:
        assert _lines(_sample()) == [
            "┌────┬─────┐",
            "│aaa │bbbbb│",
            "│    │bbbbb│",
            "├────┼─────┤",
            "│cccc│dd   │",
            "│cccc│     │",
            "│cccc│     │",
            "└────┴─────┘",
        ]

    def test_surrounding_border_only(self) -> None:
        t = row_borders(False, column_borders(False, table([[text("a"), text("b")]])))
        assert _lines(t) == ["┌──┐", "│ab│", "└──┘"]

    def test_inner_borders_only(self) -> None:
        t = surrounding_border(False, table([[text("a"), text("b")], [text("c"), text("d")]]))
        assert _lines(t) == ["a│b", "─┼─", "c│d"]

    def test_row_borders_without_column_borders(self) -> None:
        t = column_borders(False, table([[text("a"), text("b")], [text("c"), text("d")]]))
        assert _lines(t) == ["┌──┐", "│ab│", "├──┤", "│cd│", "└──┘"]

    def test_single_cell(self) -> None:
        assert _lines(table([[text("x")]])) == ["┌─┐", "│x│", "└─┘"]


# ---------------------------------------------------------------------------
# Alignment
# ---------------------------------------------------------------------------


def _column(*cells: str) -> Table:
    return _borderless(table([[text(c)] for c in cells]))


def _row(*cells: str) -> Table:
    return _borderless(table([[text(c) for c in cells]]))


class TestColumnAlignment:
    def test_left_is_default(self) -> None:
        assert _lines(_column("a", "abcd")) == ["a   ", "abcd"]

    def test_right(self) -> None:
        assert _lines(align_right(0, _column("a", "abcd"))) == ["   a", "abcd"]

    def test_center_puts_extra_space_on_the_right(self) -> None:
        assert _lines(align_center(0, _column("a", "ab", "abcd"))) == [" a  ", " ab ", "abcd"]

    def test_default_alignment_applies_to_unset_columns(self) -> None:
        t = set_default_column_alignment(ColumnAlignment.RIGHT, _column("a", "abc"))
        assert _lines(t) == ["  a", "abc"]
        assert t.column_alignment(0) is ColumnAlignment.RIGHT

    def test_out_of_range_is_a_no_op(self) -> None:
        t = _column("a", "abcd")
        assert align_right(5, t) is t
        assert align_center(-1, t) is t


class TestRowAlignment:
    def test_top_is_default(self) -> None:
        assert _lines(_row("x\ny\nz", "q")) == ["xq", "y ", "z "]

    def test_bottom(self) -> None:
        assert _lines(align_bottom(0, _row("x\ny\nz", "q"))) == ["x ", "y ", "zq"]

    def test_middle(self) -> None:
        assert _lines(align_middle(0, _row("x\ny\nz", "q"))) == ["x ", "yq", "z "]

    def test_middle_puts_extra_space_below(self) -> None:
        assert _lines(align_middle(0, _row("w\nx\ny\nz", "q"))) == ["w ", "xq", "y ", "z "]

    def test_default_alignment_applies_to_unset_rows(self) -> None:
        t = set_default_row_alignment(RowAlignment.BOTTOM, _row("x\ny", "q"))
        assert _lines(t) == ["x ", "yq"]

    def test_out_of_range_is_a_no_op(self) -> None:
        t = _row("x\ny", "q")
        assert align_bottom(1, t) is t
