"""Widget combinators, borders and the table layout."""

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
    border,
    hborder,
    joinable_border,
    vborder,
)
from pi.layout.widgets.core import (
    MAX,
    Padding,
    cached,
    center,
    clickable,
    empty_widget,
    fill,
    freeze_borders,
    from_result,
    hbox,
    hcenter,
    hlimit,
    join_borders,
    named,
    pad_bottom,
    pad_left,
    pad_right,
    pad_top,
    raw,
    report_extent,
    show_cursor,
    text,
    translate_by,
    vbox,
    vcenter,
    vlimit,
    with_attr,
    with_border_style,
)
from pi.layout.widgets.table import (
    ColumnAlignment,
    RowAlignment,
    Table,
    align_bottom,
    align_center,
    align_left,
    align_middle,
    align_right,
    align_top,
    column_borders,
    render_table,
    row_borders,
    set_column_alignment,
    set_default_column_alignment,
    set_default_row_alignment,
    set_row_alignment,
    surrounding_border,
    table,
)

__all__ = [
    # Borders
    "BOTTOM_LEFT_CORNER",
    "BOTTOM_RIGHT_CORNER",
    "BOTTOM_T",
    "CROSS",
    "LEFT_T",
    "RIGHT_T",
    "TOP_LEFT_CORNER",
    "TOP_RIGHT_CORNER",
    "TOP_T",
    "border",
    "hborder",
    "joinable_border",
    "vborder",
    # Core combinators
    "MAX",
    "Padding",
    "cached",
    "center",
    "clickable",
    "empty_widget",
    "fill",
    "freeze_borders",
    "from_result",
    "hbox",
    "hcenter",
    "hlimit",
    "join_borders",
    "named",
    "pad_bottom",
    "pad_left",
    "pad_right",
    "pad_top",
    "raw",
    "report_extent",
    "show_cursor",
    "text",
    "translate_by",
    "vbox",
    "vcenter",
    "vlimit",
    "with_attr",
    "with_border_style",
    # Table
    "ColumnAlignment",
    "RowAlignment",
    "Table",
    "align_bottom",
    "align_center",
    "align_left",
    "align_middle",
    "align_right",
    "align_top",
    "column_borders",
    "render_table",
    "row_borders",
    "set_column_alignment",
    "set_default_column_alignment",
    "set_default_row_alignment",
    "set_row_alignment",
    "surrounding_border",
    "table",
]
