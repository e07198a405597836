"""Border widgets.

All border widgets draw with the ``border`` attribute and the context's
border style.  When border joining is on (see
:func:`~pi.layout.widgets.core.join_borders`) they also record their cells
in the result's border map so boxes can connect neighbouring borders.
"""

from __future__ import annotations

from pi.layout.attr import BORDER_ATTR
from pi.layout.border_map import BorderMap, DynBorder, Edges, render_dyn_border
from pi.layout.canvas import Attr, Image
from pi.layout.types import FIXED, GREEDY, Context, RenderState, Result, Widget
from pi.layout.widgets.core import from_result, hbox, hlimit, vbox, vlimit

HORIZONTAL_EDGES: Edges[bool] = Edges(top=False, bottom=False, left=True, right=True)
VERTICAL_EDGES: Edges[bool] = Edges(top=True, bottom=True, left=False, right=False)


def _border_attr(ctx: Context) -> Attr:
    return ctx.attr_map.lookup(BORDER_ATTR)


def hborder() -> Widget:
    """A horizontal line across all of the available width."""

    def render(ctx: Context, state: RenderState) -> Result:
        width = max(0, ctx.avail_width)
        attr = _border_attr(ctx)
        image = Image.char_fill(attr, ctx.border_style.horizontal, width, 1)
        borders = BorderMap()
        if ctx.dyn_borders:
            db = DynBorder(ctx.border_style, HORIZONTAL_EDGES, attr)
            borders = BorderMap({(0, col): db for col in range(width)})
        return Result(image=image, borders=borders)

    return Widget(GREEDY, FIXED, render)


def vborder() -> Widget:
    """A vertical line down all of the available height."""

    def render(ctx: Context, state: RenderState) -> Result:
        height = max(0, ctx.avail_height)
        attr = _border_attr(ctx)
        image = Image.char_fill(attr, ctx.border_style.vertical, 1, height)
        borders = BorderMap()
        if ctx.dyn_borders:
            db = DynBorder(ctx.border_style, VERTICAL_EDGES, attr)
            borders = BorderMap({(row, 0): db for row in range(height)})
        return Result(image=image, borders=borders)

    return Widget(FIXED, GREEDY, render)


def joinable_border(edges: Edges[bool]) -> Widget:
    """A single border cell drawing *edges* (a corner, a T or a cross)."""

    def render(ctx: Context, state: RenderState) -> Result:
        db = DynBorder(ctx.border_style, edges, _border_attr(ctx))
        borders = BorderMap.singleton(0, 0, db) if ctx.dyn_borders else BorderMap()
        return Result(image=render_dyn_border(db), borders=borders)

    return Widget(FIXED, FIXED, render)


TOP_LEFT_CORNER = joinable_border(Edges(top=False, bottom=True, left=False, right=True))
TOP_RIGHT_CORNER = joinable_border(Edges(top=False, bottom=True, left=True, right=False))
BOTTOM_LEFT_CORNER = joinable_border(Edges(top=True, bottom=False, left=False, right=True))
BOTTOM_RIGHT_CORNER = joinable_border(Edges(top=True, bottom=False, left=True, right=False))
CROSS = joinable_border(Edges(top=True, bottom=True, left=True, right=True))
LEFT_T = joinable_border(Edges(top=True, bottom=True, left=False, right=True))
RIGHT_T = joinable_border(Edges(top=True, bottom=True, left=True, right=False))
TOP_T = joinable_border(Edges(top=False, bottom=True, left=True, right=True))
BOTTOM_T = joinable_border(Edges(top=True, bottom=False, left=True, right=True))


def border(widget: Widget) -> Widget:
    """Draw a box around *widget*, which gets two fewer rows and columns."""

    def render(ctx: Context, state: RenderState) -> Result:
        inner = hlimit(ctx.avail_width - 2, vlimit(ctx.avail_height - 2, widget))
        middle_result = inner.render(ctx, state)
        width, height = middle_result.image.width, middle_result.image.height

        top = hbox([TOP_LEFT_CORNER, hlimit(width, hborder()), TOP_RIGHT_CORNER])
        bottom = hbox([BOTTOM_LEFT_CORNER, hlimit(width, hborder()), BOTTOM_RIGHT_CORNER])
        side = vlimit(height, vborder())
        middle = hbox([side, from_result(middle_result), side])
        total = vbox([top, middle, bottom])
        return hlimit(width + 2, vlimit(height + 2, total)).render(ctx, state)

    return Widget(widget.h_size, widget.v_size, render)
