"""Tests for the cropping pass in pi.layout.render."""

from __future__ import annotations

from pi.layout.border_map import BorderMap, DynBorder, Edges
from pi.layout.border_style import UNICODE
from pi.layout.canvas import DEFAULT_ATTR, Image
from pi.layout.render import (
    crop_cursors,
    crop_extents,
    crop_image,
    crop_result_to_context,
    crop_to_context,
)
from pi.layout.types import (
    FIXED,
    Context,
    CursorLocation,
    Extent,
    Location,
    RenderState,
    Result,
    Size,
    Widget,
)


def _ctx(width: int, height: int) -> Context:
    return Context.for_display(10, 10).with_avail(width=width, height=height)


def _block(width: int, height: int) -> Image:
    return Image.char_fill(DEFAULT_ATTR, "#", width, height)


_DB = DynBorder(UNICODE, Edges(True, True, False, False), DEFAULT_ATTR)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------


class TestCropImage:
    def test_larger_image_is_clipped(self) -> None:
        img = crop_image(_ctx(3, 2), _block(5, 4))
        assert (img.width, img.height) == (3, 2)

    def test_smaller_image_is_untouched(self) -> None:
        block = _block(2, 1)
        assert crop_image(_ctx(5, 5), block) == block

    def test_negative_avail_yields_empty(self) -> None:
        img = crop_image(_ctx(-3, 4), _block(5, 4))
        assert not img
        assert (img.width, img.height) == (0, 0)


# ---------------------------------------------------------------------------
# Cursors
# ---------------------------------------------------------------------------


class TestCropCursors:
    def test_inside_cursor_kept(self) -> None:
        cursors = [CursorLocation(Location(1, 2), "a")]
        assert crop_cursors(_ctx(5, 5), cursors) == cursors

    def test_upper_bound_is_exclusive(self) -> None:
        cursors = [
            CursorLocation(Location(0, 5), "right-edge"),
            CursorLocation(Location(5, 0), "bottom-edge"),
            CursorLocation(Location(4, 4), "last-cell"),
        ]
        kept = crop_cursors(_ctx(5, 5), cursors)
        assert [c.name for c in kept] == ["last-cell"]

    def test_negative_positions_dropped(self) -> None:
        cursors = [CursorLocation(Location(-1, 0)), CursorLocation(Location(0, -1))]
        assert crop_cursors(_ctx(5, 5), cursors) == []


# ---------------------------------------------------------------------------
# Extents
# ---------------------------------------------------------------------------


class TestCropExtents:
    def test_inside_extent_unchanged(self) -> None:
        extent = Extent("a", Location(1, 1), Size(3, 2))
        assert crop_extents(_ctx(10, 10), [extent]) == [extent]

    def test_partially_outside_extent_clamped(self) -> None:
        extent = Extent("a", Location(2, 3), Size(10, 10))
        (cropped,) = crop_extents(_ctx(5, 4), [extent])
        assert cropped.upper_left == Location(2, 3)
        assert cropped.size == Size(2, 2)

    def test_clamped_extent_stays_in_bounds(self) -> None:
        ctx = _ctx(6, 3)
        extents = [
            Extent("a", Location(0, 0), Size(9, 9)),
            Extent("b", Location(2, 5), Size(4, 4)),
            Extent("c", Location(1, 1), Size(0, 0)),
        ]
        for e in crop_extents(ctx, extents):
            assert e.upper_left.col + e.size.width <= ctx.avail_width
            assert e.upper_left.row + e.size.height <= ctx.avail_height
            assert e.size.width >= 0 and e.size.height >= 0

    def test_origin_beyond_rectangle_dropped(self) -> None:
        extents = [
            Extent("right", Location(0, 12), Size(3, 1)),
            Extent("below", Location(7, 0), Size(1, 1)),
        ]
        assert crop_extents(_ctx(10, 5), extents) == []

    def test_origin_on_bound_dropped(self) -> None:
        extents = [Extent("edge", Location(0, 10), Size(3, 1))]
        assert crop_extents(_ctx(10, 5), extents) == []


# ---------------------------------------------------------------------------
# Whole results
# ---------------------------------------------------------------------------


def _messy_result() -> Result:
    return Result(
        image=_block(8, 6),
        cursors=[CursorLocation(Location(1, 1), "in"), CursorLocation(Location(0, 7), "out")],
        extents=[Extent("wide", Location(0, 0), Size(8, 6))],
        borders=BorderMap({(0, 0): _DB, (5, 7): _DB}),
    )


class TestCropResult:
    def test_every_part_is_cropped(self) -> None:
        cropped = crop_result_to_context(_ctx(4, 3), _messy_result())
        assert (cropped.image.width, cropped.image.height) == (4, 3)
        assert [c.name for c in cropped.cursors] == ["in"]
        assert cropped.extents == [Extent("wide", Location(0, 0), Size(4, 3))]
        assert list(cropped.borders) == [(0, 0)]

    def test_cropping_is_idempotent(self) -> None:
        ctx = _ctx(4, 3)
        once = crop_result_to_context(ctx, _messy_result())
        assert crop_result_to_context(ctx, once) == once

    def test_negative_avail_crops_everything(self) -> None:
        cropped = crop_result_to_context(_ctx(-1, -1), _messy_result())
        assert not cropped.image
        assert cropped.cursors == []
        assert cropped.extents == []
        assert len(cropped.borders) == 0

    def test_name_survives(self) -> None:
        result = Result(image=_block(3, 3), name="keep")
        assert crop_result_to_context(_ctx(1, 1), result).name == "keep"


class TestCropToContext:
    def test_wrapper_keeps_policies_and_crops(self) -> None:
        inner = Widget(FIXED, FIXED, lambda ctx, state: Result(image=_block(9, 9)))
        wrapped = crop_to_context(inner)
        assert (wrapped.h_size, wrapped.v_size) == (FIXED, FIXED)
        result = wrapped.render(_ctx(2, 3), RenderState())
        assert (result.image.width, result.image.height) == (2, 3)
