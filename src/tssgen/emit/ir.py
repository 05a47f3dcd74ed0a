"""Intermediate representation of the generated module.

The emitter decides *what* to write by building these nodes; the formatter
decides *how* (escaping, padding, separators).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Raw:
    """An expression written verbatim (identifiers, references)."""

    code: str


@dataclass(frozen=True)
class Str:
    """A literal string, escaped on output."""

    value: str


@dataclass(frozen=True)
class ArrayLit:
    items: tuple["Expr", ...]
    separator: str = ", "


@dataclass(frozen=True)
class ObjectLit:
    """Object literal; ``inline`` objects are written on a single line."""

    entries: tuple[tuple[str, "Expr"], ...]
    inline: bool = False


@dataclass(frozen=True)
class Call:
    callee: str
    args: tuple["Expr", ...] = ()


Expr = Raw | Str | ArrayLit | ObjectLit | Call


@dataclass(frozen=True)
class ConstDecl:
    name: str
    value: Expr
    exported: bool = False


@dataclass(frozen=True)
class ExprStatement:
    expr: Expr


Statement = ConstDecl | ExprStatement


@dataclass(frozen=True)
class Section:
    """A run of statements; ``spaced`` sections put a blank line between them."""

    statements: tuple[Statement, ...]
    spaced: bool = False


@dataclass(frozen=True)
class Module:
    imports: tuple[str, ...]
    source: str
    sections: tuple[Section, ...] = ()
