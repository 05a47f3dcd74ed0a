"""Raw rule tree: the structured form of a stylesheet before analysis."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_KEYWORD_RE = re.compile(r"@[-\w]+")


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair, exactly as written."""

    property: str
    value: str


@dataclass(frozen=True)
class StyleRule:
    """A selector list paired with its declaration block."""

    selectors: tuple[str, ...]
    declarations: tuple[Declaration, ...] = ()


@dataclass(frozen=True)
class KeyframeRule:
    """One step of a keyframes block (``from``, ``50%``, ``to`` ...)."""

    values: tuple[str, ...]
    declarations: tuple[Declaration, ...] = ()


@dataclass(frozen=True)
class KeyframesRule:
    """An ``@keyframes`` block, vendor prefix already dropped from ``name``."""

    name: str
    frames: tuple[KeyframeRule, ...] = ()


@dataclass(frozen=True)
class FontFaceRule:
    declarations: tuple[Declaration, ...] = ()


@dataclass(frozen=True)
class AtRule:
    """Any at-rule that is not media, keyframes or font-face.

    Only the prelude (``@supports (display: grid)``) is kept; the contents of
    a block are not parsed.
    """

    text: str
    has_block: bool = False

    @property
    def keyword(self) -> str:
        match = _KEYWORD_RE.match(self.text)
        return match.group(0) if match else ""


@dataclass(frozen=True)
class MediaRule:
    """An ``@media`` block and the rules scoped to it."""

    media: str
    rules: tuple["Node", ...] = ()


Node = StyleRule | MediaRule | KeyframesRule | FontFaceRule | AtRule


@dataclass(frozen=True)
class Stylesheet:
    """Top-level rule list in source order."""

    rules: tuple[Node, ...] = field(default_factory=tuple)
