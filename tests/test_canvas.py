"""Tests for pi.layout.canvas -- images, attributes and pictures."""

from __future__ import annotations

import pytest

from pi.layout.canvas import DEFAULT_ATTR, Attr, Background, Cell, Image, Picture


def _text(s: str) -> Image:
    return Image.text(DEFAULT_ATTR, s)


# ---------------------------------------------------------------------------
# Attr
# ---------------------------------------------------------------------------


class TestAttr:
    def test_merge_overrides_only_set_fields(self) -> None:
        base = Attr(fg=1, bg=2)
        merged = base.merged(Attr(fg=5, styles=frozenset({"bold"})))
        assert merged == Attr(fg=5, bg=2, styles=frozenset({"bold"}))

    def test_sgr(self) -> None:
        assert Attr(fg=1, styles=frozenset({"bold"})).sgr() == "\x1b[1;38;5;1m"
        assert DEFAULT_ATTR.sgr() == ""

    def test_unknown_style_rejected(self) -> None:
        with pytest.raises(ValueError):
            Attr(styles=frozenset({"blink-fast"}))


# ---------------------------------------------------------------------------
# Image
# ---------------------------------------------------------------------------


class TestImage:
    def test_zero_size_is_empty(self) -> None:
        assert Image.char_fill(DEFAULT_ATTR, "x", 0, 3) == Image.empty()
        assert not Image.empty()

    def test_wide_character_uses_continuation_cell(self) -> None:
        img = _text("世")
        assert img.width == 2
        assert img.cell(0, 1) == Cell("", DEFAULT_ATTR)

    def test_crop_through_wide_character_blanks_it(self) -> None:
        assert _text("世").crop(1, 1).text_lines() == [" "]

    def test_horiz_cat_pads_transparently(self) -> None:
        img = Image.horiz_cat([Image.char_fill(DEFAULT_ATTR, "a", 1, 2), _text("b")])
        assert (img.width, img.height) == (2, 2)
        assert img.cell(1, 1) is None

    def test_vert_cat(self) -> None:
        img = Image.vert_cat([_text("ab"), _text("c")])
        assert img.text_lines() == ["ab", "c "]

    def test_resize_crops_and_pads(self) -> None:
        img = _text("abc").resize(2, 2)
        assert img.text_lines() == ["ab", "  "]
        assert img.cell(1, 0) is None

    def test_resize_empty_gives_transparent_block(self) -> None:
        img = Image.empty().resize(2, 1)
        assert (img.width, img.height) == (2, 1)
        assert img.cell(0, 0) is None

    def test_paste_skips_transparent_cells(self) -> None:
        base = Image.char_fill(DEFAULT_ATTR, "#", 3, 1)
        overlay = _text("x").pad(left=1)
        assert base.paste(0, 0, overlay).text_lines() == ["#x#"]

    def test_translate(self) -> None:
        img = _text("ab").translate(1, 1)
        assert img.text_lines() == ["   ", " ab"]
        assert _text("abc").translate(-2, 0).text_lines() == ["c"]


# ---------------------------------------------------------------------------
# Picture
# ---------------------------------------------------------------------------


class TestPicture:
    def test_layers_composite_back_to_front(self) -> None:
        top = _text("x").pad(left=1)
        bottom = _text("abc")
        assert Picture.for_layers([top, bottom]).text_lines() == ["axc"]

    def test_background_fills_transparent_cells(self) -> None:
        picture = Picture([_text("a").resize(3, 1)], Background(".", DEFAULT_ATTR))
        assert picture.text_lines() == ["a.."]

    def test_half_covered_wide_character_is_blanked(self) -> None:
        bottom = _text("世x")
        top = Image([[None, Cell("y", DEFAULT_ATTR), None]])
        assert Picture.for_layers([top, bottom]).text_lines() == [" yx"]

    def test_styled_lines_reset_at_end(self) -> None:
        red = Attr(fg=1)
        picture = Picture.for_layers([Image([[Cell("a", red), Cell("b", DEFAULT_ATTR)]])])
        assert picture.to_lines() == ["\x1b[0m\x1b[38;5;1ma\x1b[0mb\x1b[0m"]

    def test_plain_lines_have_no_escapes(self) -> None:
        assert Picture.for_layers([_text("ab")]).to_lines() == ["ab"]
