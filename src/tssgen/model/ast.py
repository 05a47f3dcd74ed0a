"""Analysed stylesheet: selectors, rules and the shared accumulator.

Every mapping in this module relies on ``dict`` insertion order.  Root-name
selection, dependency order and emission order are all defined by the order
in which names were first encountered, so the containers are never sorted
and never rebuilt from sets.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Normalized property name -> value, or the ordered values of a property
# declared more than once in the same block.
Content = dict[str, str | tuple[str, ...]]


@dataclass(frozen=True)
class Selector:
    """A tokenized selector.

    Attributes:
        elements: Literal and class fragments; joined they give the original text.
        names: Class token (with its leading ``.``) -> element indices.
        root_name: First class token of the selector, ``""`` when it has none,
            ``None`` until root resolution ran.
    """

    elements: tuple[str, ...]
    names: dict[str, tuple[int, ...]] = field(default_factory=dict)
    root_name: str | None = None

    @property
    def text(self) -> str:
        return "".join(self.elements)


@dataclass(frozen=True)
class Rule:
    """A style rule after selector analysis.

    Attributes:
        media: Media label the rule is scoped to (``""`` for none).
        selectors: Analysed selectors.
        root_names: Root class -> number of selectors rooted at it.
        dep_names: Root class -> dependency classes, in encounter order.
        content: Inline declarations (empty for split clones).
        common_content_id: Index into ``StyleAst.common_content`` or -1.
    """

    media: str
    selectors: tuple[Selector, ...]
    root_names: dict[str, int]
    dep_names: dict[str, tuple[str, ...]]
    content: Content = field(default_factory=dict)
    common_content_id: int = -1

    @property
    def root_name(self) -> str:
        """The owning class; only meaningful once the rule has a single root."""
        return next(iter(self.root_names), "")

    @property
    def dependencies(self) -> tuple[str, ...]:
        return self.dep_names.get(self.root_name, ())

    @property
    def is_shared(self) -> bool:
        return self.common_content_id >= 0


@dataclass(frozen=True)
class Keyframe:
    """One step of a named animation."""

    media: str
    selectors: tuple[str, ...]
    content: Content = field(default_factory=dict)


@dataclass(frozen=True)
class FontFace:
    media: str
    content: Content = field(default_factory=dict)


@dataclass(frozen=True)
class StyleAst:
    """Everything the pipeline stages pass along.

    ``media`` and ``common_content`` are append-only: a label or block keeps
    the index it was given when first added, and that index is also its
    emission position.
    """

    rules: tuple[Rule, ...] = ()
    media: tuple[str, ...] = ()
    common_content: tuple[Content, ...] = ()
    keyframes: dict[str, tuple[Keyframe, ...]] = field(default_factory=dict)
    font_faces: tuple[FontFace, ...] = ()

    def media_id(self, label: str) -> int:
        """Return the allocation index of a media label."""
        return self.media.index(label)
