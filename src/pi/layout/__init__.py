"""pi-layout: constraint-propagating layout and rendering for terminal widgets."""

# Attribute maps
from pi.layout.attr import BORDER_ATTR, AttrMap, AttrName, attr_name

# Border cells and glyph selection
from pi.layout.border_map import (
    BorderGlyph,
    BorderMap,
    DynBorder,
    Edges,
    glyph_for_edges,
    join_seam,
    render_dyn_border,
)

# Border styles
from pi.layout.border_style import (
    ASCII,
    UNICODE,
    UNICODE_BOLD,
    UNICODE_ROUNDED,
    BorderStyle,
    border_style_from_char,
    default_border_style,
)

# Images and pictures
from pi.layout.canvas import DEFAULT_ATTR, Attr, Background, Cell, Image, Picture

# Errors
from pi.layout.errors import (
    InvalidCellSizePolicy,
    LayoutError,
    TableError,
    UnequalRowSizes,
)

# Cropping and the render driver
from pi.layout.render import (
    crop_result_to_context,
    crop_to_context,
    never_show_cursor,
    render_final,
    render_to_lines,
    render_widgets,
    show_cursor_named,
    show_first_cursor,
)

# Core types
from pi.layout.types import (
    FIXED,
    GREEDY,
    CacheEntry,
    Context,
    CursorLocation,
    Extent,
    Location,
    RenderState,
    Result,
    ScrollBarOrientation,
    ScrollbarConfig,
    ScrollRequest,
    Size,
    SizePolicy,
    Viewport,
    Widget,
)

__all__ = [
    # Attributes
    "BORDER_ATTR",
    "AttrMap",
    "AttrName",
    "attr_name",
    # Border map
    "BorderGlyph",
    "BorderMap",
    "DynBorder",
    "Edges",
    "glyph_for_edges",
    "join_seam",
    "render_dyn_border",
    # Border styles
    "ASCII",
    "UNICODE",
    "UNICODE_BOLD",
    "UNICODE_ROUNDED",
    "BorderStyle",
    "border_style_from_char",
    "default_border_style",
    # Canvas
    "DEFAULT_ATTR",
    "Attr",
    "Background",
    "Cell",
    "Image",
    "Picture",
    # Errors
    "InvalidCellSizePolicy",
    "LayoutError",
    "TableError",
    "UnequalRowSizes",
    # Render driver
    "crop_result_to_context",
    "crop_to_context",
    "never_show_cursor",
    "render_final",
    "render_to_lines",
    "render_widgets",
    "show_cursor_named",
    "show_first_cursor",
    # Types
    "FIXED",
    "GREEDY",
    "CacheEntry",
    "Context",
    "CursorLocation",
    "Extent",
    "Location",
    "RenderState",
    "Result",
    "ScrollBarOrientation",
    "ScrollbarConfig",
    "ScrollRequest",
    "Size",
    "SizePolicy",
    "Viewport",
    "Widget",
]
