"""Build the module IR from an ordered collection graph."""

from __future__ import annotations

from collections.abc import Iterable

from tssgen.config import TranspilerConfig
from tssgen.emit.formatter import format_module
from tssgen.emit.ir import (
    ArrayLit,
    Call,
    ConstDecl,
    Expr,
    ExprStatement,
    Module,
    ObjectLit,
    Raw,
    Section,
    Str,
)
from tssgen.model.ast import Content, Rule, Selector, StyleAst
from tssgen.model.collection import Collection, export_name

RUNTIME_IMPORTS = ("tss", "tssFrames", "tssFont", "join", "query")

# Markers understood by the runtime's selector patterns.
ROOT_MARKER = "@"
PARAM_MARKER = "%"
ANCESTOR_MARKER = "<"
PATTERN_MARKER = "="


def content_entries(content: Content) -> tuple[tuple[str, Expr], ...]:
    entries: list[tuple[str, Expr]] = []
    for key, value in content.items():
        if isinstance(value, tuple):
            entries.append((key, ArrayLit(tuple(Str(v) for v in value), separator=",")))
        else:
            entries.append((key, Str(value)))
    return tuple(entries)


def selector_pattern(selector: Selector) -> Expr | None:
    """Render one selector of a named collection's rule.

    ``None`` for the bare class itself; a descendant (``"span"``) or ancestor
    (``"<body"``) shorthand for two-fragment selectors; otherwise a pattern
    where the root becomes ``@`` and every other class a ``%`` placeholder
    filled by ``query()`` with the referenced exports.
    """
    elements = selector.elements
    root = selector.root_name
    if len(elements) == 1:
        return None
    if len(elements) == 2:
        if root == elements[0] and elements[1].startswith(" "):
            return Str(elements[1].strip())
        if root == elements[1] and elements[0].endswith(" "):
            return Str(ANCESTOR_MARKER + elements[0].strip())

    params: list[str] = []
    pieces: list[str] = []
    for element in elements:
        if not element.startswith("."):
            pieces.append(element)
        elif element == root:
            pieces.append(ROOT_MARKER)
        else:
            params.append(element)
            pieces.append(PARAM_MARKER)
    pattern = "".join(pieces)
    if params:
        return Call("query", (Str(pattern), *(Raw(export_name(p)) for p in params)))
    return Str(PATTERN_MARKER + pattern)


def rule_selector(rule: Rule) -> Expr | None:
    """Combine the rendered selectors of *rule*; ``None`` when nothing renders."""
    patterns = [p for p in (selector_pattern(s) for s in rule.selectors) if p is not None]
    if not patterns:
        return None
    if len(patterns) == 1:
        return patterns[0]
    return ArrayLit(tuple(patterns))


class Emitter:
    """Turns an analysed stylesheet and its collection order into a Module."""

    def __init__(self, ast: StyleAst, config: TranspilerConfig | None = None) -> None:
        self.ast = ast
        self.config = config or TranspilerConfig()

    # ---- names ----

    def media_name(self, media: str) -> str:
        return f"{self.config.media_prefix}{self.ast.media_id(media)}"

    def common_name(self, index: int) -> str:
        return f"{self.config.common_prefix}{index}"

    def _media_entries(self, media: str) -> list[tuple[str, Expr]]:
        return [("MEDIA", Raw(self.media_name(media)))] if media else []

    # ---- sections ----

    def media_constants(self) -> Section:
        return Section(
            tuple(
                ConstDecl(self.media_name(label), Str(label))
                for label in self.ast.media
                if label
            )
        )

    def keyframes(self) -> Section:
        statements = []
        for name, frames in self.ast.keyframes.items():
            steps = [
                ObjectLit(
                    (
                        *self._media_entries(frame.media),
                        ("SELECTOR", Str(",".join(frame.selectors))),
                        *content_entries(frame.content),
                    )
                )
                for frame in frames
            ]
            statements.append(ExprStatement(Call("tssFrames", (Str(name), *steps))))
        return Section(tuple(statements))

    def font_faces(self) -> Section:
        return Section(
            tuple(
                ExprStatement(
                    Call(
                        "tss",
                        (
                            Str("@fontface"),
                            ObjectLit(
                                (*self._media_entries(f.media), *content_entries(f.content))
                            ),
                        ),
                    )
                )
                for f in self.ast.font_faces
            )
        )

    def common_constants(self) -> Section:
        return Section(
            tuple(
                ConstDecl(self.common_name(i), ObjectLit(content_entries(content)))
                for i, content in enumerate(self.ast.common_content)
            )
        )

    def collections(self, ordered: Iterable[Collection]) -> Section:
        statements = []
        for collection in ordered:
            call = Call("tss", tuple(self.rule(r, collection) for r in collection.rules))
            if collection.is_anonymous:
                statements.append(ExprStatement(call))
            else:
                statements.append(ConstDecl(collection.export_name, call, exported=True))
        return Section(tuple(statements), spaced=True)

    # ---- rules ----

    def rule(self, rule: Rule, collection: Collection) -> Expr:
        """Render one rule as an argument of its collection's ``tss()`` call."""
        base = self._media_entries(rule.media)
        if collection.is_anonymous:
            base.append(("SELECTOR", Str(PATTERN_MARKER + ",".join(s.text for s in rule.selectors))))
        else:
            selector = rule_selector(rule)
            if selector is not None:
                base.append(("SELECTOR", selector))

        if rule.is_shared:
            shared = Raw(self.common_name(rule.common_content_id))
            if base:
                return Call("join", (ObjectLit(tuple(base), inline=True), shared))
            return shared
        return ObjectLit((*base, *content_entries(rule.content)))

    def module(self, ordered: Iterable[Collection]) -> Module:
        return Module(
            imports=RUNTIME_IMPORTS,
            source=self.config.runtime_module,
            sections=(
                self.media_constants(),
                self.keyframes(),
                self.font_faces(),
                self.common_constants(),
                self.collections(ordered),
            ),
        )


def emit(
    ast: StyleAst,
    ordered: Iterable[Collection],
    config: TranspilerConfig | None = None,
) -> str:
    """Render the module text for *ordered* collections of *ast*."""
    config = config or TranspilerConfig()
    module = Emitter(ast, config).module(ordered)
    return format_module(module, config.max_pad_width)
