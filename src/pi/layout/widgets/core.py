"""Core widget combinators: text, fills, boxes, limits, padding and names.

Every function here returns a :class:`~pi.layout.types.Widget`; none of them
render anything until the widget is rendered with a context and a state.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Literal, Sequence, Union

from pi.layout.attr import AttrName
from pi.layout.border_map import BorderMap, join_seam, render_dyn_border
from pi.layout.border_style import BorderStyle
from pi.layout.canvas import Image
from pi.layout.render import crop_result_to_context, crop_to_context
from pi.layout.types import (
    FIXED,
    GREEDY,
    ORIGIN,
    CacheEntry,
    Context,
    CursorLocation,
    Extent,
    Location,
    Name,
    RenderState,
    Result,
    Size,
    SizePolicy,
    Widget,
)
from pi.layout.utils import take_columns, text_width

MAX: Literal["max"] = "max"

# int   ->  exact number of columns/rows
# "max" ->  all of the remaining space
Padding = Union[int, Literal["max"]]


def _largest(policies: Sequence[SizePolicy]) -> SizePolicy:
    return GREEDY if GREEDY in policies else FIXED


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------


def empty_widget() -> Widget:
    return Widget(FIXED, FIXED, lambda ctx, state: Result())


def raw(image: Image) -> Widget:
    """A fixed-size widget that always renders *image*."""
    return Widget(FIXED, FIXED, lambda ctx, state: Result(image=image))


def from_result(result: Result) -> Widget:
    """A fixed-size widget that returns an already rendered result."""
    return Widget(FIXED, FIXED, lambda ctx, state: result)


def text(s: str) -> Widget:
    """Render *s* with the context attribute, one row per line.

    Lines are padded to the widest one, and both lines and rows are cut to
    the available space.  Empty lines still take up a row.
    """

    def render(ctx: Context, state: RenderState) -> Result:
        width, height = ctx.avail_size
        lines = [take_columns(line or " ", width) for line in s.splitlines()[:height]]
        if not lines:
            return Result()
        attr = ctx.attr
        widest = max(text_width(line) for line in lines)
        rows = [
            Image.horiz_cat(
                [
                    Image.text(attr, line),
                    Image.char_fill(attr, " ", widest - text_width(line), 1),
                ]
            )
            for line in lines
        ]
        return Result(image=Image.vert_cat(rows))

    return Widget(FIXED, FIXED, render)


def fill(ch: str = " ") -> Widget:
    """Fill all of the available space with *ch*."""

    def render(ctx: Context, state: RenderState) -> Result:
        width, height = ctx.avail_size
        return Result(image=Image.char_fill(ctx.attr, ch, width, height))

    return Widget(GREEDY, GREEDY, render)


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------


def hlimit(width: int, widget: Widget) -> Widget:
    """Offer *widget* at most *width* columns."""

    def render(ctx: Context, state: RenderState) -> Result:
        limited = ctx.with_avail(width=min(width, ctx.avail_width))
        return crop_to_context(widget).render(limited, state)

    return Widget(FIXED, widget.v_size, render)


def vlimit(height: int, widget: Widget) -> Widget:
    """Offer *widget* at most *height* rows."""

    def render(ctx: Context, state: RenderState) -> Result:
        limited = ctx.with_avail(height=min(height, ctx.avail_height))
        return crop_to_context(widget).render(limited, state)

    return Widget(widget.h_size, FIXED, render)


# ---------------------------------------------------------------------------
# Boxes
# ---------------------------------------------------------------------------


def _primary(horizontal: bool, image: Image) -> int:
    return image.width if horizontal else image.height


def _secondary(horizontal: bool, image: Image) -> int:
    return image.height if horizontal else image.width


def _limit_primary(horizontal: bool, amount: int, widget: Widget) -> Widget:
    return hlimit(amount, widget) if horizontal else vlimit(amount, widget)


def _primary_policy(horizontal: bool, widget: Widget) -> SizePolicy:
    return widget.h_size if horizontal else widget.v_size


def _concat_results(ctx: Context, horizontal: bool, results: list[Result]) -> Result:
    """Line results up along the primary axis and join their borders."""
    attr = ctx.attr
    depth = max((_secondary(horizontal, r.image) for r in results), default=0)

    images: list[Image] = []
    for r in results:
        img = r.image
        gap = depth - _secondary(horizontal, img)
        if img and gap > 0:
            if horizontal:
                img = Image.vert_cat([img, Image.char_fill(attr, " ", img.width, gap)])
            else:
                img = Image.horiz_cat([img, Image.char_fill(attr, " ", gap, img.height)])
        images.append(img)

    placed: list[Result] = []
    borders = BorderMap()
    joined = BorderMap()
    offset = 0
    for r, img in zip(results, images):
        moved = r.translated(Location(0, offset) if horizontal else Location(offset, 0))
        placed.append(moved)
        if offset > 0 and moved.borders:
            joined = joined.merge(join_seam(borders, moved.borders, offset - 1, horizontal))
        borders = borders.merge(moved.borders)
        offset += _primary(horizontal, img)

    image = Image.horiz_cat(images) if horizontal else Image.vert_cat(images)
    for (row, col), db in joined.items():
        image = image.paste(row, col, render_dyn_border(db))

    combined = Result(
        image=image,
        cursors=[c for r in placed for c in r.cursors],
        extents=[e for r in placed for e in r.extents],
        borders=borders.merge(joined),
    )
    return crop_result_to_context(ctx, combined)


def _box(horizontal: bool, widgets: Sequence[Widget]) -> Widget:
    children = list(widgets)

    def render(ctx: Context, state: RenderState) -> Result:
        avail = ctx.avail_width if horizontal else ctx.avail_height
        fixed = [(i, w) for i, w in enumerate(children) if _primary_policy(horizontal, w) is FIXED]
        greedy = [(i, w) for i, w in enumerate(children) if _primary_policy(horizontal, w) is GREEDY]

        rendered: dict[int, Result] = {}
        remaining = avail
        for i, w in fixed:
            result = _limit_primary(horizontal, remaining, w).render(ctx, state)
            rendered[i] = result
            remaining -= _primary(horizontal, result.image)

        # Greedy children split what the fixed ones left, extra cells first.
        if greedy and remaining > 0:
            share, extra = divmod(remaining, len(greedy))
            for k, (i, w) in enumerate(greedy):
                amount = share + 1 if k < extra else share
                rendered[i] = _limit_primary(horizontal, amount, w).render(ctx, state)

        return _concat_results(ctx, horizontal, [rendered[i] for i in sorted(rendered)])

    return Widget(
        _largest([w.h_size for w in children]),
        _largest([w.v_size for w in children]),
        render,
    )


def hbox(widgets: Sequence[Widget]) -> Widget:
    """Place *widgets* side by side, left to right.

    Fixed-width children render first, in order, each offered whatever
    width is left.  The remaining width is split evenly among the greedy
    children (the leftmost ones get any extra column); greedy children are
    not rendered at all when nothing is left.  Shorter children are padded
    with the context attribute to the height of the tallest.
    """
    return _box(True, widgets)


def vbox(widgets: Sequence[Widget]) -> Widget:
    """Stack *widgets* top to bottom; the vertical counterpart of :func:`hbox`."""
    return _box(False, widgets)


# ---------------------------------------------------------------------------
# Padding and centering
# ---------------------------------------------------------------------------


def pad_left(amount: Padding, widget: Widget) -> Widget:
    def render(ctx: Context, state: RenderState) -> Result:
        result = widget.render(ctx, state)
        filler = vlimit(result.image.height, fill())
        if amount != MAX:
            filler = hlimit(amount, filler)
        return hbox([filler, from_result(result)]).render(ctx, state)

    return Widget(GREEDY if amount == MAX else widget.h_size, widget.v_size, render)


def pad_right(amount: Padding, widget: Widget) -> Widget:
    def render(ctx: Context, state: RenderState) -> Result:
        result = widget.render(ctx, state)
        filler = vlimit(result.image.height, fill())
        if amount != MAX:
            filler = hlimit(amount, filler)
        return hbox([from_result(result), filler]).render(ctx, state)

    return Widget(GREEDY if amount == MAX else widget.h_size, widget.v_size, render)


def pad_top(amount: Padding, widget: Widget) -> Widget:
    def render(ctx: Context, state: RenderState) -> Result:
        result = widget.render(ctx, state)
        filler = hlimit(result.image.width, fill())
        if amount != MAX:
            filler = vlimit(amount, filler)
        return vbox([filler, from_result(result)]).render(ctx, state)

    return Widget(widget.h_size, GREEDY if amount == MAX else widget.v_size, render)


def pad_bottom(amount: Padding, widget: Widget) -> Widget:
    def render(ctx: Context, state: RenderState) -> Result:
        result = widget.render(ctx, state)
        filler = hlimit(result.image.width, fill())
        if amount != MAX:
            filler = vlimit(amount, filler)
        return vbox([from_result(result), filler]).render(ctx, state)

    return Widget(widget.h_size, GREEDY if amount == MAX else widget.v_size, render)


def hcenter(widget: Widget) -> Widget:
    """Center horizontally; an odd leftover column goes to the right."""

    def render(ctx: Context, state: RenderState) -> Result:
        result = widget.render(ctx, state)
        width, height = result.image.width, result.image.height
        left = max(0, (ctx.avail_width - width) // 2)
        right = max(0, ctx.avail_width - width - left)
        if left == 0 and right == 0:
            return result
        attr = ctx.attr
        image = Image.horiz_cat(
            [
                Image.char_fill(attr, " ", left, height),
                result.image,
                Image.char_fill(attr, " ", right, height),
            ]
        )
        moved = replace(result.translated(Location(0, left)), image=image)
        return crop_result_to_context(ctx, moved)

    return Widget(GREEDY, widget.v_size, render)


def vcenter(widget: Widget) -> Widget:
    """Center vertically; an odd leftover row goes to the bottom."""

    def render(ctx: Context, state: RenderState) -> Result:
        result = widget.render(ctx, state)
        width, height = result.image.width, result.image.height
        top = max(0, (ctx.avail_height - height) // 2)
        bottom = max(0, ctx.avail_height - height - top)
        if top == 0 and bottom == 0:
            return result
        attr = ctx.attr
        image = Image.vert_cat(
            [
                Image.char_fill(attr, " ", width, top),
                result.image,
                Image.char_fill(attr, " ", width, bottom),
            ]
        )
        moved = replace(result.translated(Location(top, 0)), image=image)
        return crop_result_to_context(ctx, moved)

    return Widget(widget.h_size, GREEDY, render)


def center(widget: Widget) -> Widget:
    return hcenter(vcenter(widget))


def translate_by(offset: Location, widget: Widget) -> Widget:
    """Move *widget* by *offset*; the uncovered area stays transparent."""

    def render(ctx: Context, state: RenderState) -> Result:
        result = widget.render(ctx, state)
        moved = result.translated(offset)
        return replace(moved, image=result.image.translate(offset.col, offset.row))

    return Widget(widget.h_size, widget.v_size, render)


# ---------------------------------------------------------------------------
# Context modifiers
# ---------------------------------------------------------------------------


def with_attr(name: AttrName, widget: Widget) -> Widget:
    """Render *widget* with the attribute called *name*."""
    return Widget(
        widget.h_size,
        widget.v_size,
        lambda ctx, state: widget.render(ctx.with_attr_path(name), state),
    )


def with_border_style(style: BorderStyle, widget: Widget) -> Widget:
    return Widget(
        widget.h_size,
        widget.v_size,
        lambda ctx, state: widget.render(ctx.with_border_style(style), state),
    )


def join_borders(widget: Widget) -> Widget:
    """Let border widgets inside *widget* connect with their neighbours."""
    return Widget(
        widget.h_size,
        widget.v_size,
        lambda ctx, state: widget.render(ctx.with_dyn_borders(True), state),
    )


def freeze_borders(widget: Widget) -> Widget:
    """Keep the borders inside *widget* from connecting to anything outside."""

    def render(ctx: Context, state: RenderState) -> Result:
        return replace(widget.render(ctx, state), borders=BorderMap())

    return Widget(widget.h_size, widget.v_size, render)


# ---------------------------------------------------------------------------
# Names, cursors and extents
# ---------------------------------------------------------------------------


def show_cursor(name: Name, location: Location, widget: Widget) -> Widget:
    """Offer a cursor position (relative to *widget*) under *name*."""

    def render(ctx: Context, state: RenderState) -> Result:
        result = widget.render(ctx, state)
        return replace(result, cursors=[CursorLocation(location, name), *result.cursors])

    return Widget(widget.h_size, widget.v_size, render)


def report_extent(name: Name, widget: Widget) -> Widget:
    """Report the area *widget* occupies under *name*."""

    def render(ctx: Context, state: RenderState) -> Result:
        result = widget.render(ctx, state)
        extent = Extent(name, ORIGIN, Size(result.image.width, result.image.height))
        return replace(result, extents=[extent, *result.extents])

    return Widget(widget.h_size, widget.v_size, render)


def clickable(name: Name, widget: Widget) -> Widget:
    """Register *name* as clickable and report its extent."""
    reported = report_extent(name, widget)

    def render(ctx: Context, state: RenderState) -> Result:
        state.add_clickable(name)
        return reported.render(ctx, state)

    return Widget(widget.h_size, widget.v_size, render)


def named(name: Name, widget: Widget) -> Widget:
    """Tag the result of *widget* with *name*."""

    def render(ctx: Context, state: RenderState) -> Result:
        state.observe_name(name)
        return replace(widget.render(ctx, state), name=name)

    return Widget(widget.h_size, widget.v_size, render)


def cached(name: Name, widget: Widget) -> Widget:
    """Reuse the result rendered under *name* until it is invalidated.

    Clickable names registered while the widget first rendered are
    registered again on every cache hit.
    """

    def render(ctx: Context, state: RenderState) -> Result:
        state.observe_name(name)
        entry = state.render_cache.get(name)
        if entry is not None:
            state.clickable_names.extend(entry.clickable_names)
            return entry.result

        before = len(state.clickable_names)
        result = widget.render(ctx, state)
        state.render_cache[name] = CacheEntry(result, state.clickable_names[before:])
        return result

    return Widget(widget.h_size, widget.v_size, render)
