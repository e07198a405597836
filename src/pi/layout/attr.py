"""Attribute maps: resolve hierarchical attribute names to display attributes."""

from __future__ import annotations

from typing import Mapping

from pi.layout.canvas import DEFAULT_ATTR, Attr

AttrName = tuple[str, ...]


def attr_name(*parts: str) -> AttrName:
    """Build an attribute name, e.g. ``attr_name("list", "selected")``."""
    return tuple(parts)


BORDER_ATTR: AttrName = attr_name("border")


class AttrMap:
    """Map from attribute names to attributes, with prefix inheritance.

    Looking up ``("list", "selected")`` starts from the default attribute,
    merges the entry for ``("list",)`` if there is one, then merges the
    entry for ``("list", "selected")``.  More specific names therefore
    override only the fields they set.
    """

    def __init__(
        self,
        default: Attr = DEFAULT_ATTR,
        mapping: Mapping[AttrName, Attr] | None = None,
    ) -> None:
        self._default = default
        self._mapping: dict[AttrName, Attr] = dict(mapping or {})

    @property
    def default(self) -> Attr:
        return self._default

    def lookup(self, name: AttrName) -> Attr:
        attr = self._default
        for i in range(1, len(name) + 1):
            entry = self._mapping.get(name[:i])
            if entry is not None:
                attr = attr.merged(entry)
        return attr

    def with_entry(self, name: AttrName, attr: Attr) -> AttrMap:
        """Return a copy of this map with *name* bound to *attr*."""
        mapping = dict(self._mapping)
        mapping[name] = attr
        return AttrMap(self._default, mapping)

    def __repr__(self) -> str:
        return f"AttrMap(default={self._default!r}, entries={len(self._mapping)})"
