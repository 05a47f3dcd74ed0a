"""Lark Transformer that converts a stylesheet parse tree into the raw rule tree."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput

from tssgen.model.stylesheet import (
    AtRule,
    Declaration,
    FontFaceRule,
    KeyframeRule,
    KeyframesRule,
    MediaRule,
    StyleRule,
    Stylesheet,
)
from tssgen.parser.errors import ParseError

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


def _clean(raw: str) -> str:
    """Drop comments and surrounding whitespace from captured text."""
    return _COMMENT_RE.sub("", raw).strip()


def split_selectors(raw: str) -> tuple[str, ...]:
    """Split a selector list on commas outside quotes, brackets and parentheses."""
    parts: list[str] = []
    depth = 0
    quote = ""
    start = 0
    text = _clean(raw)
    i = 0
    while i < len(text):
        char = text[i]
        if quote:
            if char == "\\":
                i += 1
            elif char == quote:
                quote = ""
        elif char in "\"'":
            quote = char
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth = max(depth - 1, 0)
        elif char == "," and depth == 0:
            parts.append(text[start:i])
            start = i + 1
        i += 1
    parts.append(text[start:])
    return tuple(p.strip() for p in parts if p.strip())


class CssTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into raw rule tree nodes."""

    # ---- declarations ----

    def declaration(self, items: list[Token]) -> Declaration:
        value = _clean(str(items[1])) if len(items) > 1 else ""
        return Declaration(property=str(items[0]), value=value)

    # ---- blocks ----

    def rule(self, items: list[object]) -> StyleRule:
        return StyleRule(
            selectors=split_selectors(str(items[0])),
            declarations=tuple(i for i in items[1:] if isinstance(i, Declaration)),
        )

    def media(self, items: list[object]) -> MediaRule:
        return MediaRule(
            media=_clean(str(items[0])),
            rules=tuple(i for i in items[1:] if not isinstance(i, Token)),
        )

    def keyframe(self, items: list[object]) -> KeyframeRule:
        values = tuple(v.strip() for v in _clean(str(items[0])).split(",") if v.strip())
        return KeyframeRule(
            values=values,
            declarations=tuple(i for i in items[1:] if isinstance(i, Declaration)),
        )

    def keyframes(self, items: list[object]) -> KeyframesRule:
        return KeyframesRule(
            name=str(items[0]),
            frames=tuple(i for i in items[1:] if isinstance(i, KeyframeRule)),
        )

    def font_face(self, items: list[object]) -> FontFaceRule:
        return FontFaceRule(
            declarations=tuple(i for i in items if isinstance(i, Declaration)),
        )

    def at_block(self, items: list[object]) -> list[object]:
        return items

    def at_rule(self, items: list[object]) -> AtRule:
        return AtRule(text=_clean(str(items[0])), has_block=len(items) > 1)

    def start(self, items: list[object]) -> Stylesheet:
        return Stylesheet(rules=tuple(i for i in items if not isinstance(i, Token)))


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        lexer="contextual",
        start="start",
    )


def parse_css(source: str) -> Stylesheet:
    """Parse stylesheet source into a Stylesheet rule tree."""
    try:
        tree = _parser().parse(source)
    except UnexpectedInput as e:
        raise ParseError(str(e), line=e.line, column=e.column) from e
    return CssTransformer().transform(tree)
