"""Build the analysed StyleAst from a raw rule tree."""

from __future__ import annotations

import logging

from tssgen.analysis.content import build_content
from tssgen.analysis.selector import prepare_selector, resolve_roots
from tssgen.model.ast import FontFace, Keyframe, Rule, StyleAst
from tssgen.model.stylesheet import (
    AtRule,
    FontFaceRule,
    KeyframesRule,
    MediaRule,
    Node,
    StyleRule,
    Stylesheet,
)

logger = logging.getLogger(__name__)


class _AstBuilder:
    """Accumulates rules, media labels, keyframes and font-faces in source order."""

    def __init__(self) -> None:
        self.rules: list[Rule] = []
        self.media: dict[str, None] = {}
        self.keyframes: dict[str, list[Keyframe]] = {}
        self.font_faces: list[FontFace] = []

    def _use_media(self, media: str) -> None:
        self.media.setdefault(media, None)

    def visit(self, node: Node, media: str) -> None:
        if isinstance(node, StyleRule):
            self._visit_rule(node, media)

        elif isinstance(node, MediaRule):
            # Nested media blocks replace the outer label, they do not combine.
            for child in node.rules:
                self.visit(child, node.media)

        elif isinstance(node, KeyframesRule):
            frames = self.keyframes.setdefault(node.name, [])
            for frame in node.frames:
                self._use_media(media)
                frames.append(
                    Keyframe(
                        media=media,
                        selectors=frame.values,
                        content=build_content(frame.declarations),
                    )
                )

        elif isinstance(node, FontFaceRule):
            self._use_media(media)
            self.font_faces.append(
                FontFace(media=media, content=build_content(node.declarations))
            )

        elif isinstance(node, AtRule):
            logger.debug("Skipping unsupported at-rule %s", node.keyword)

    def _visit_rule(self, node: StyleRule, media: str) -> None:
        selectors, root_names, dep_names = resolve_roots(
            [prepare_selector(s) for s in node.selectors]
        )
        self._use_media(media)
        self.rules.append(
            Rule(
                media=media,
                selectors=tuple(selectors),
                root_names=root_names,
                dep_names=dep_names,
                content=build_content(node.declarations),
            )
        )

    def finish(self) -> StyleAst:
        return StyleAst(
            rules=tuple(self.rules),
            media=tuple(self.media),
            keyframes={name: tuple(frames) for name, frames in self.keyframes.items()},
            font_faces=tuple(self.font_faces),
        )


def build_ast(stylesheet: Stylesheet) -> StyleAst:
    """Analyse every rule of *stylesheet* and allocate media labels.

    Media labels get their index the first time a rule, keyframe step or
    font-face scoped to them is seen; the unscoped label ``""`` takes an
    index like any other.
    """
    builder = _AstBuilder()
    for node in stylesheet.rules:
        builder.visit(node, media="")
    ast = builder.finish()
    logger.debug(
        "Analysed %d rule(s), %d media label(s), %d keyframe set(s), %d font-face(s)",
        len(ast.rules),
        len(ast.media),
        len(ast.keyframes),
        len(ast.font_faces),
    )
    return ast
