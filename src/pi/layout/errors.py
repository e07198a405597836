"""Exceptions raised by pi-layout."""

from __future__ import annotations


class LayoutError(Exception):
    """Base class for every error pi-layout raises."""


class TableError(LayoutError):
    """A table was built from a malformed grid of cells."""


class UnequalRowSizes(TableError):
    """Rows of a table do not all have the same number of cells."""

    def __init__(self, row_lengths: list[int]) -> None:
        self.row_lengths = row_lengths
        super().__init__(
            f"table rows must all have the same number of cells, got row lengths {row_lengths}"
        )


class InvalidCellSizePolicy(TableError):
    """A table cell does not use the fixed size policy on both axes."""

    def __init__(self, row: int, col: int, h_size: object, v_size: object) -> None:
        self.row = row
        self.col = col
        self.h_size = h_size
        self.v_size = v_size
        super().__init__(
            f"table cell at row {row}, column {col} must be fixed-size on both axes "
            f"(horizontal={h_size}, vertical={v_size})"
        )
