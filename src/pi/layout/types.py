"""Core rendering types.

Rendering threads two values through every widget:

* :class:`Context` -- immutable parameters for the subtree being drawn
  (available space, attribute name, border style, ...).  A widget that wants
  to constrain its children builds a new context with
  :func:`dataclasses.replace` or the ``with_*`` helpers.
* :class:`RenderState` -- the mutable bookkeeping of one render pass.  It is
  mutated depth-first, left to right, so later siblings see what earlier
  ones recorded.

``Widget.render(ctx, state)`` returns a :class:`Result`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Hashable, NamedTuple

from pi.layout.attr import AttrMap, AttrName
from pi.layout.border_map import BorderMap
from pi.layout.border_style import UNICODE, BorderStyle
from pi.layout.canvas import Attr, Image

logger = logging.getLogger(__name__)

Name = Hashable


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


class SizePolicy(Enum):
    """How a widget uses the space offered along one axis."""

    FIXED = "fixed"
    GREEDY = "greedy"

    def __str__(self) -> str:
        return self.value


FIXED = SizePolicy.FIXED
GREEDY = SizePolicy.GREEDY


class Location(NamedTuple):
    row: int
    col: int

    def offset(self, other: Location) -> Location:
        return Location(self.row + other.row, self.col + other.col)


class Size(NamedTuple):
    width: int
    height: int


ORIGIN = Location(0, 0)


@dataclass(frozen=True)
class CursorLocation:
    location: Location
    name: Name | None = None


@dataclass(frozen=True)
class Extent:
    """A named rectangle of rendered output, for hit-testing and visibility."""

    name: Name
    upper_left: Location
    size: Size

    def contains(self, row: int, col: int) -> bool:
        r, c = self.upper_left
        return r <= row < r + self.size.height and c <= col < c + self.size.width


# ---------------------------------------------------------------------------
# Scrolling records
# ---------------------------------------------------------------------------


class ScrollBarOrientation(Enum):
    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class ScrollbarConfig:
    """Scroll bar placement for scroll-aware widgets in the subtree."""

    vertical: ScrollBarOrientation | None = None
    horizontal: ScrollBarOrientation | None = None
    show_vertical_handles: bool = False
    show_horizontal_handles: bool = False


@dataclass
class Viewport:
    left: int = 0
    top: int = 0
    size: Size = Size(0, 0)


@dataclass(frozen=True)
class ScrollRequest:
    """A pending relative scroll of the viewport called *name*."""

    name: Name
    rows: int = 0
    cols: int = 0


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Context:
    """Read-only rendering parameters for a subtree.

    ``avail_width`` and ``avail_height`` may be negative when a parent has
    over-allocated; consumers clamp to zero before use.
    """

    avail_width: int
    avail_height: int
    window_width: int
    window_height: int
    attr_map: AttrMap = field(default_factory=AttrMap, compare=False)
    attr_path: AttrName = ()
    border_style: BorderStyle = UNICODE
    dyn_borders: bool = False
    scrollbars: ScrollbarConfig | None = None

    @classmethod
    def for_display(
        cls,
        width: int,
        height: int,
        attr_map: AttrMap | None = None,
        border_style: BorderStyle = UNICODE,
    ) -> Context:
        """The root context of a layer covering a *width* x *height* display."""
        return cls(
            avail_width=width,
            avail_height=height,
            window_width=width,
            window_height=height,
            attr_map=attr_map if attr_map is not None else AttrMap(),
            border_style=border_style,
        )

    @property
    def attr(self) -> Attr:
        """The attribute the current attribute name resolves to."""
        return self.attr_map.lookup(self.attr_path)

    @property
    def avail_size(self) -> Size:
        return Size(max(0, self.avail_width), max(0, self.avail_height))

    def with_avail(self, width: int | None = None, height: int | None = None) -> Context:
        return replace(
            self,
            avail_width=self.avail_width if width is None else width,
            avail_height=self.avail_height if height is None else height,
        )

    def with_attr_path(self, name: AttrName) -> Context:
        return replace(self, attr_path=name)

    def with_border_style(self, style: BorderStyle) -> Context:
        return replace(self, border_style=style)

    def with_dyn_borders(self, enabled: bool) -> Context:
        return replace(self, dyn_borders=enabled)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Result:
    """What rendering one widget produced."""

    image: Image = field(default_factory=Image.empty)
    cursors: list[CursorLocation] = field(default_factory=list)
    extents: list[Extent] = field(default_factory=list)
    borders: BorderMap = field(default_factory=BorderMap)
    name: Name | None = None

    def translated(self, offset: Location) -> Result:
        """Shift cursors, extents and border cells by *offset*.

        The image is left alone; callers that also move the image do so
        themselves.
        """
        if offset == ORIGIN:
            return self
        return replace(
            self,
            cursors=[replace(c, location=c.location.offset(offset)) for c in self.cursors],
            extents=[replace(e, upper_left=e.upper_left.offset(offset)) for e in self.extents],
            borders=self.borders.translate(offset.row, offset.col),
        )


# ---------------------------------------------------------------------------
# Render state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CacheEntry:
    result: Result
    clickable_names: list[Name] = field(default_factory=list)


@dataclass
class RenderState:
    """Mutable bookkeeping for one render pass.

    Viewports and the render cache are meant to be carried from frame to
    frame; call :meth:`reset_for_frame` before reusing a state.
    """

    viewports: dict[Name, Viewport] = field(default_factory=dict)
    scroll_requests: list[ScrollRequest] = field(default_factory=list)
    observed_names: set[Name] = field(default_factory=set)
    render_cache: dict[Name, CacheEntry] = field(default_factory=dict)
    clickable_names: list[Name] = field(default_factory=list)
    requested_visible_names: set[Name] = field(default_factory=set)
    reported_extents: dict[Name, Extent] = field(default_factory=dict)

    def observe_name(self, name: Name) -> bool:
        """Record that a widget called *name* was rendered.

        Returns ``False`` (and logs a warning) if the name was already seen
        during this pass.
        """
        if name in self.observed_names:
            logger.warning(
                "Widget name %r was rendered more than once in the same pass; "
                "names should be unique within a frame",
                name,
            )
            return False
        self.observed_names.add(name)
        return True

    def add_clickable(self, name: Name) -> None:
        self.clickable_names.append(name)

    def request_visible(self, name: Name) -> None:
        self.requested_visible_names.add(name)

    def request_scroll(self, request: ScrollRequest) -> None:
        self.scroll_requests.append(request)

    def invalidate_cache_entry(self, name: Name) -> None:
        self.render_cache.pop(name, None)

    def invalidate_cache(self) -> None:
        self.render_cache.clear()

    def reset_for_frame(self) -> None:
        """Forget per-frame observations, keeping viewports and the cache."""
        self.observed_names.clear()
        self.clickable_names.clear()
        self.requested_visible_names.clear()


# ---------------------------------------------------------------------------
# Widget
# ---------------------------------------------------------------------------

RenderFn = Callable[[Context, RenderState], Result]


@dataclass(frozen=True)
class Widget:
    """A size policy per axis plus the action that renders the widget."""

    h_size: SizePolicy
    v_size: SizePolicy
    render_fn: RenderFn = field(repr=False)

    def render(self, ctx: Context, state: RenderState) -> Result:
        return self.render_fn(ctx, state)

    @property
    def is_fixed(self) -> bool:
        return self.h_size is FIXED and self.v_size is FIXED
