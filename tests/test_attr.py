"""Tests for pi.layout.attr and border style selection."""

from __future__ import annotations

import pytest

from pi.layout.attr import BORDER_ATTR, AttrMap, attr_name
from pi.layout.border_style import (
    ASCII,
    UNICODE,
    UNICODE_BOLD,
    border_style_from_char,
    default_border_style,
)
from pi.layout.canvas import Attr


class TestAttrMap:
    def test_unknown_name_gives_default(self) -> None:
        attr_map = AttrMap(Attr(fg=7))
        assert attr_map.lookup(attr_name("nothing")) == Attr(fg=7)

    def test_empty_name_gives_default(self) -> None:
        assert AttrMap(Attr(bg=3)).lookup(()) == Attr(bg=3)

    def test_prefix_inheritance(self) -> None:
        attr_map = AttrMap(
            Attr(fg=7, bg=0),
            {
                attr_name("list"): Attr(bg=4),
                attr_name("list", "selected"): Attr(fg=1, styles=frozenset({"bold"})),
            },
        )
        assert attr_map.lookup(attr_name("list", "selected")) == Attr(
            fg=1, bg=4, styles=frozenset({"bold"})
        )
        assert attr_map.lookup(attr_name("list", "other")) == Attr(fg=7, bg=4)

    def test_with_entry_returns_copy(self) -> None:
        base = AttrMap()
        extended = base.with_entry(BORDER_ATTR, Attr(fg=2))
        assert extended.lookup(BORDER_ATTR) == Attr(fg=2)
        assert base.lookup(BORDER_ATTR) == Attr()


class TestBorderStyleSelection:
    def test_unset_gives_unicode(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PI_LAYOUT_BORDER_STYLE", raising=False)
        assert default_border_style() is UNICODE

    def test_named_styles(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PI_LAYOUT_BORDER_STYLE", "ASCII")
        assert default_border_style() is ASCII
        monkeypatch.setenv("PI_LAYOUT_BORDER_STYLE", "unicode-bold")
        assert default_border_style() is UNICODE_BOLD

    def test_unknown_value_warns(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("PI_LAYOUT_BORDER_STYLE", "wavy")
        with caplog.at_level("WARNING", logger="pi.layout.border_style"):
            assert default_border_style() is UNICODE
        assert "wavy" in caplog.text

    def test_style_from_char(self) -> None:
        style = border_style_from_char("*")
        assert style.horizontal == style.corner_tl == style.intersect_full == "*"
