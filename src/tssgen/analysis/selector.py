"""Selector analysis: split selectors into literal and class fragments.

A selector such as ``.menu > li.active a`` is split into
``[".menu", " > li", ".active", " a"]``.  Class fragments keep their leading
``.`` so they can be told apart from literal text, and joining the fragments
reproduces the selector exactly.  No CSS grammar is involved: the scanner
only knows about class names and double-quoted strings.
"""

from __future__ import annotations

from dataclasses import replace

from tssgen.model.ast import Selector

__all__ = [
    "is_class_name_char",
    "split_by_class_name",
    "prepare_selector",
    "resolve_roots",
]


def is_class_name_char(char: str) -> bool:
    """Return True for characters that may continue a class name."""
    return char in "_-" or ("a" <= char <= "z") or ("A" <= char <= "Z") or ("0" <= char <= "9")


def split_by_class_name(selector: str) -> list[str]:
    """Split *selector* into literal and ``.class`` fragments.

    A ``.`` outside double quotes starts a class fragment, which runs for as
    long as the characters belong to the class-name alphabet.  Inside quotes
    a backslash escapes the next character.  Empty fragments are dropped.
    """
    fragments: list[str] = []
    start = 0
    name_mode = False
    quote_mode = False
    i = 0
    while i < len(selector):
        char = selector[i]
        if quote_mode:
            if char == "\\":
                i += 1
            elif char == '"':
                quote_mode = False
        elif char == ".":
            fragments.append(selector[start:i])
            start = i
            name_mode = True
        elif name_mode and not is_class_name_char(char):
            fragments.append(selector[start:i])
            start = i
            name_mode = False
            quote_mode = char == '"'
        elif char == '"':
            quote_mode = True
        i += 1
    fragments.append(selector[start:])
    return [f for f in fragments if f]


def prepare_selector(selector: str) -> Selector:
    """Tokenize *selector* and index the positions of each class token."""
    elements = split_by_class_name(selector)
    positions: dict[str, list[int]] = {}
    for index, element in enumerate(elements):
        if element.startswith("."):
            positions.setdefault(element, []).append(index)
    return Selector(
        elements=tuple(elements),
        names={name: tuple(idx) for name, idx in positions.items()},
    )


def resolve_roots(
    selectors: list[Selector],
) -> tuple[list[Selector], dict[str, int], dict[str, tuple[str, ...]]]:
    """Assign a root class to every selector of one rule.

    Within a selector the first class token is the root; every other class
    token of that selector is recorded as a dependency of the root.  A
    selector without class tokens is rooted at ``""``.

    Returns the selectors with ``root_name`` set, the root -> selector count
    mapping and the root -> dependencies mapping, both in first-seen order.
    """
    resolved: list[Selector] = []
    root_names: dict[str, int] = {}
    dep_names: dict[str, list[str]] = {}
    for selector in selectors:
        names = iter(selector.names)
        root = next(names, "")
        if root in root_names:
            root_names[root] += 1
        else:
            root_names[root] = 1
            dep_names[root] = []
        dep_names[root].extend(names)
        resolved.append(replace(selector, root_name=root))
    return (
        resolved,
        root_names,
        {root: tuple(deps) for root, deps in dep_names.items()},
    )
