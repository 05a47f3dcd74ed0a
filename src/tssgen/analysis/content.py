"""Declaration blocks to Content maps."""

from __future__ import annotations

from collections.abc import Iterable

from tssgen.model.ast import Content
from tssgen.model.stylesheet import Declaration


def property_name(name: str) -> str:
    """Normalize a CSS property name into an identifier-safe key."""
    return name.replace("-", "_")


def build_content(declarations: Iterable[Declaration]) -> Content:
    """Collect declarations into a Content map.

    A property declared more than once keeps every value, in source order,
    as a tuple (vendor fallbacks such as ``display: -webkit-box; display: flex``).
    """
    content: Content = {}
    for declaration in declarations:
        key = property_name(declaration.property)
        if key not in content:
            content[key] = declaration.value
            continue
        previous = content[key]
        if isinstance(previous, tuple):
            content[key] = (*previous, declaration.value)
        else:
            content[key] = (previous, declaration.value)
    return content
