"""Cropping pass and the top-level render driver.

:func:`render_final` renders a stack of full-screen layers into one
:class:`~pi.layout.canvas.Picture`:

1.  Build the base :class:`Context` from the display size.
2.  Render every layer bottommost first, cropped to the display, recording
    each extent it reports in ``state.reported_extents`` (so the topmost
    layer wins on a name clash).
3.  Resize every layer image to the display and stack them topmost first
    over a blank background.
4.  Hand every cursor candidate (topmost layer first) to the caller's
    chooser.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Sequence

from pi.layout.attr import AttrMap
from pi.layout.border_map import BorderMap, Edges
from pi.layout.border_style import default_border_style
from pi.layout.canvas import DEFAULT_ATTR, Background, Image, Picture
from pi.layout.types import (
    Context,
    CursorLocation,
    Extent,
    Name,
    RenderState,
    Result,
    Size,
    Widget,
)

logger = logging.getLogger(__name__)

CursorChooser = Callable[[list[CursorLocation]], "CursorLocation | None"]


# ---------------------------------------------------------------------------
# Cropping
# ---------------------------------------------------------------------------


def crop_image(ctx: Context, image: Image) -> Image:
    return image.crop(max(0, ctx.avail_width), max(0, ctx.avail_height))


def crop_cursors(ctx: Context, cursors: list[CursorLocation]) -> list[CursorLocation]:
    """Drop every cursor outside ``[0, avail_height) x [0, avail_width)``."""
    return [
        c
        for c in cursors
        if 0 <= c.location.row < ctx.avail_height and 0 <= c.location.col < ctx.avail_width
    ]


def crop_extents(ctx: Context, extents: list[Extent]) -> list[Extent]:
    """Clamp extents to the available rectangle.

    The lower-right corner is clamped and the size recomputed from it.  An
    extent whose origin is not inside the rectangle is dropped.
    """
    cropped: list[Extent] = []
    for e in extents:
        row, col = e.upper_left
        end_col = min(ctx.avail_width, col + e.size.width)
        end_row = min(ctx.avail_height, row + e.size.height)
        width = end_col - col
        height = end_row - row
        if width < 0 or height < 0 or col >= ctx.avail_width or row >= ctx.avail_height:
            continue
        cropped.append(replace(e, size=Size(width, height)))
    return cropped


def crop_borders(ctx: Context, borders: BorderMap) -> BorderMap:
    return borders.crop(
        Edges(top=0, bottom=ctx.avail_height - 1, left=0, right=ctx.avail_width - 1)
    )


def crop_result_to_context(ctx: Context, result: Result) -> Result:
    """Clip a result's image, cursors, extents and borders to *ctx*."""
    return replace(
        result,
        image=crop_image(ctx, result.image),
        cursors=crop_cursors(ctx, result.cursors),
        extents=crop_extents(ctx, result.extents),
        borders=crop_borders(ctx, result.borders),
    )


def crop_to_context(widget: Widget) -> Widget:
    """Wrap *widget* so its result is cropped to the context it renders in."""

    def render(ctx: Context, state: RenderState) -> Result:
        return crop_result_to_context(ctx, widget.render(ctx, state))

    return Widget(widget.h_size, widget.v_size, render)


# ---------------------------------------------------------------------------
# Cursor choosers
# ---------------------------------------------------------------------------


def never_show_cursor(cursors: list[CursorLocation]) -> CursorLocation | None:
    return None


def show_first_cursor(cursors: list[CursorLocation]) -> CursorLocation | None:
    return cursors[0] if cursors else None


def show_cursor_named(name: Name) -> CursorChooser:
    """A chooser that picks the first cursor reported under *name*."""

    def choose(cursors: list[CursorLocation]) -> CursorLocation | None:
        for c in cursors:
            if c.name == name:
                return c
        return None

    return choose


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------


def render_final(
    attr_map: AttrMap,
    layers: Sequence[Widget],
    display_size: tuple[int, int],
    choose_cursor: CursorChooser,
    state: RenderState,
) -> tuple[RenderState, Picture, CursorLocation | None, list[list[Extent]]]:
    """Render *layers* (topmost first) into a single picture.

    Returns ``(state, picture, cursor, extents)`` where *extents* holds one
    list per layer in the order the layers were given.
    """
    width, height = display_size
    ctx = Context.for_display(width, height, attr_map, default_border_style())

    bottom_first: list[Result] = []
    for layer in reversed(layers):
        result = crop_to_context(layer).render(ctx, state)
        for extent in result.extents:
            state.reported_extents[extent.name] = extent
        bottom_first.append(result)

    topmost_first = bottom_first[::-1]
    picture = Picture(
        [r.image.resize(width, height) for r in topmost_first],
        Background(" ", DEFAULT_ATTR),
    )

    candidates = [c for r in topmost_first for c in r.cursors]
    cursor = choose_cursor(candidates)
    logger.debug(
        "Rendered %d layer(s) at %dx%d; %d cursor candidate(s), chose %r",
        len(layers),
        width,
        height,
        len(candidates),
        cursor,
    )
    return state, picture, cursor, [r.extents for r in topmost_first]


def render_widgets(layers: Sequence[Widget], display_size: tuple[int, int]) -> Picture:
    """Render *layers* without any interactive bookkeeping.

    Starts from an empty :class:`RenderState` and an empty attribute map,
    and discards cursors and extents.
    """
    _, picture, _, _ = render_final(
        AttrMap(), layers, display_size, never_show_cursor, RenderState()
    )
    return picture


def render_to_lines(
    widget: Widget, display_size: tuple[int, int], styled: bool = False
) -> list[str]:
    """Render a single widget and return its rows as text.

    With *styled* the rows carry SGR sequences (see
    :meth:`Picture.to_lines`); otherwise they are plain text.
    """
    picture = render_widgets([widget], display_size)
    return picture.to_lines() if styled else picture.text_lines()
