"""Character-grid images and multi-layer pictures.

An :class:`Image` is an immutable rectangle of terminal cells.  A cell is
either opaque (a :class:`Cell` carrying a grapheme and an :class:`Attr`) or
transparent (``None``).  Transparent cells come from padding, resizing and
translation; when layers are composited into a :class:`Picture` they let the
layers underneath show through.

Wide graphemes occupy two cells: the grapheme itself followed by a
continuation cell whose text is ``""``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, NamedTuple, Sequence

from pi.layout.utils import grapheme_width, graphemes

_SGR_RESET = "\x1b[0m"

_STYLE_CODES = {
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "underline": 4,
    "reverse": 7,
    "strikethrough": 9,
}


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Attr:
    """Display attribute of a cell.

    ``fg`` and ``bg`` are 256-colour palette indices; ``None`` means the
    terminal default (or, when merging, "inherit").
    """

    fg: int | None = None
    bg: int | None = None
    styles: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        unknown = set(self.styles) - _STYLE_CODES.keys()
        if unknown:
            raise ValueError(f"unknown text styles: {sorted(unknown)}")

    def merged(self, other: Attr) -> Attr:
        """Overlay the fields *other* sets on top of this attribute."""
        return Attr(
            fg=other.fg if other.fg is not None else self.fg,
            bg=other.bg if other.bg is not None else self.bg,
            styles=self.styles | other.styles,
        )

    def with_styles(self, *styles: str) -> Attr:
        return Attr(self.fg, self.bg, self.styles | frozenset(styles))

    def sgr(self) -> str:
        """Return the SGR escape sequence selecting this attribute."""
        codes = [str(_STYLE_CODES[s]) for s in sorted(self.styles, key=_STYLE_CODES.get)]
        if self.fg is not None:
            codes.append(f"38;5;{self.fg}")
        if self.bg is not None:
            codes.append(f"48;5;{self.bg}")
        if not codes:
            return ""
        return f"\x1b[{';'.join(codes)}m"


DEFAULT_ATTR = Attr()


class Cell(NamedTuple):
    text: str
    attr: Attr


Row = tuple["Cell | None", ...]


def _is_continuation(cell: Cell | None) -> bool:
    return cell is not None and cell.text == ""


def _clip_row(row: Row, start: int, stop: int) -> Row:
    """Slice ``row[start:stop]``, blanking wide graphemes cut in half."""
    out = list(row[start:stop])
    if not out:
        return ()
    first = out[0]
    if _is_continuation(first):
        out[0] = Cell(" ", first.attr)  # type: ignore[union-attr]
    last = out[-1]
    if stop < len(row) and _is_continuation(row[stop]) and last is not None and last.text:
        out[-1] = Cell(" ", last.attr)
    return tuple(out)


# ---------------------------------------------------------------------------
# Image
# ---------------------------------------------------------------------------


class Image:
    """Immutable rectangle of cells.

    Any image with zero width or zero height is the empty image.
    """

    __slots__ = ("_rows", "_width")

    def __init__(self, rows: Iterable[Sequence[Cell | None]] = ()) -> None:
        normalized = tuple(tuple(r) for r in rows)
        width = len(normalized[0]) if normalized else 0
        if width == 0:
            normalized = ()
        elif any(len(r) != width for r in normalized):
            raise ValueError("all image rows must have the same width")
        self._rows: tuple[Row, ...] = normalized
        self._width = width

    # -- Construction ---------------------------------------------------------

    @classmethod
    def empty(cls) -> Image:
        return cls()

    @classmethod
    def text(cls, attr: Attr, s: str) -> Image:
        """A single-row image of *s* (newlines are not interpreted)."""
        row: list[Cell | None] = []
        for g, w in graphemes(s):
            row.append(Cell(g, attr))
            row.extend(Cell("", attr) for _ in range(w - 1))
        return cls([row]) if row else cls()

    @classmethod
    def char(cls, attr: Attr, ch: str) -> Image:
        return cls.text(attr, ch)

    @classmethod
    def char_fill(cls, attr: Attr, ch: str, width: int, height: int) -> Image:
        """A *width* x *height* block filled with the single-column *ch*."""
        if width <= 0 or height <= 0:
            return cls()
        row = (Cell(ch, attr),) * width
        return cls([row] * height)

    @classmethod
    def horiz_cat(cls, images: Iterable[Image]) -> Image:
        """Join images left to right; shorter ones get transparent padding."""
        parts = [img for img in images if img]
        if not parts:
            return cls()
        height = max(img.height for img in parts)
        padded = [img.resize(img.width, height) for img in parts]
        return cls(
            [sum((img._rows[r] for img in padded), ()) for r in range(height)]
        )

    @classmethod
    def vert_cat(cls, images: Iterable[Image]) -> Image:
        """Stack images top to bottom; narrower ones get transparent padding."""
        parts = [img for img in images if img]
        if not parts:
            return cls()
        width = max(img.width for img in parts)
        rows: list[Row] = []
        for img in parts:
            rows.extend(img.resize(width, img.height)._rows)
        return cls(rows)

    # -- Accessors ------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return len(self._rows)

    @property
    def rows(self) -> tuple[Row, ...]:
        return self._rows

    def cell(self, row: int, col: int) -> Cell | None:
        return self._rows[row][col]

    def __bool__(self) -> bool:
        return self._width > 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height}, {self.text_lines()!r})"

    def text_lines(self) -> list[str]:
        """Plain text of each row; transparent cells read as spaces."""
        return [
            "".join(" " if c is None else c.text for c in row) for row in self._rows
        ]

    # -- Geometry -------------------------------------------------------------

    def crop(self, width: int, height: int) -> Image:
        """Keep at most *width* columns and *height* rows from the top-left."""
        width = max(0, min(width, self._width))
        height = max(0, min(height, self.height))
        if width == self._width and height == self.height:
            return self
        return Image(_clip_row(row, 0, width) for row in self._rows[:height])

    def crop_left(self, amount: int) -> Image:
        """Drop *amount* columns from the left edge."""
        if amount <= 0:
            return self
        return Image(_clip_row(row, amount, self._width) for row in self._rows)

    def crop_top(self, amount: int) -> Image:
        """Drop *amount* rows from the top edge."""
        if amount <= 0:
            return self
        return Image(self._rows[amount:])

    def pad(self, left: int = 0, top: int = 0, right: int = 0, bottom: int = 0) -> Image:
        """Surround the image with transparent cells."""
        if not self:
            return self
        left, top, right, bottom = (max(0, n) for n in (left, top, right, bottom))
        width = self._width + left + right
        blank_row: Row = (None,) * width
        body = [(None,) * left + row + (None,) * right for row in self._rows]
        return Image([blank_row] * top + body + [blank_row] * bottom)

    def resize(self, width: int, height: int) -> Image:
        """Crop or transparently pad to exactly *width* x *height*."""
        if width <= 0 or height <= 0:
            return Image()
        cropped = self.crop(width, height)
        if not cropped:
            return Image([(None,) * width] * height)
        return cropped.pad(right=width - cropped.width, bottom=height - cropped.height)

    def translate(self, dx: int, dy: int) -> Image:
        """Offset the image; positive offsets pad, negative offsets crop."""
        img = self.crop_left(-dx) if dx < 0 else self.pad(left=dx)
        return img.crop_top(-dy) if dy < 0 else img.pad(top=dy)

    def paste(self, row: int, col: int, image: Image) -> Image:
        """Paint the opaque cells of *image* over this one at ``(row, col)``."""
        if not image or not self:
            return self
        grid = [list(r) for r in self._rows]
        for r, src in enumerate(image.rows):
            target_row = row + r
            if not 0 <= target_row < self.height:
                continue
            for c, cell in enumerate(src):
                target_col = col + c
                if cell is not None and 0 <= target_col < self._width:
                    grid[target_row][target_col] = cell
        return Image(grid)


# ---------------------------------------------------------------------------
# Picture
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Background:
    """What a picture shows where no layer has an opaque cell."""

    char: str = " "
    attr: Attr = DEFAULT_ATTR


@dataclass
class Picture:
    """A stack of images, topmost first, composited over a background."""

    layers: list[Image] = field(default_factory=list)
    background: Background = field(default_factory=Background)

    @classmethod
    def for_layers(cls, layers: Sequence[Image]) -> Picture:
        return cls(list(layers))

    @property
    def width(self) -> int:
        return max((img.width for img in self.layers), default=0)

    @property
    def height(self) -> int:
        return max((img.height for img in self.layers), default=0)

    def cells(self) -> list[list[Cell]]:
        """Composite the layers back to front into a grid of opaque cells."""
        width, height = self.width, self.height
        grid: list[list[Cell | None]] = [[None] * width for _ in range(height)]
        for img in reversed(self.layers):
            for r, row in enumerate(img.rows):
                target = grid[r]
                for c, cell in enumerate(row):
                    if cell is not None:
                        target[c] = cell

        bg = Cell(self.background.char, self.background.attr)
        out: list[list[Cell]] = []
        for row in grid:
            cells = [bg if cell is None else cell for cell in row]
            # A wide grapheme from one layer may be half covered by another.
            for c, cell in enumerate(cells):
                if cell.text == "":
                    lead = cells[c - 1] if c > 0 else None
                    if lead is None or grapheme_width(lead.text) != 2:
                        cells[c] = Cell(" ", cell.attr)
                elif grapheme_width(cell.text) == 2:
                    if c + 1 >= len(cells) or cells[c + 1].text != "":
                        cells[c] = Cell(" ", cell.attr)
            out.append(cells)
        return out

    def text_lines(self) -> list[str]:
        """The composited picture as plain text, one string per row."""
        return ["".join(cell.text for cell in row) for row in self.cells()]

    def to_lines(self) -> list[str]:
        """The composited picture as SGR-styled terminal lines.

        Each line that switches attributes ends with a reset so styles do
        not leak into whatever the terminal writes next.
        """
        lines: list[str] = []
        for row in self.cells():
            parts: list[str] = []
            current = DEFAULT_ATTR
            styled = False
            for cell in row:
                if cell.attr != current:
                    parts.append(_SGR_RESET + cell.attr.sgr())
                    current = cell.attr
                    styled = True
                parts.append(cell.text)
            if styled:
                parts.append(_SGR_RESET)
            lines.append("".join(parts))
        return lines
