"""Stylesheet-to-module compilation entry points."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tssgen.analysis.builder import build_ast
from tssgen.config import TranspilerConfig
from tssgen.emit.emitter import emit
from tssgen.model.ast import StyleAst
from tssgen.model.collection import Collection
from tssgen.model.diagnostic import Diagnostic
from tssgen.parser import parse_css
from tssgen.pipeline import Ordering, run_pipeline
from tssgen.validation import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranspileResult:
    """Generated module text plus the structures it was generated from."""

    code: str
    ast: StyleAst
    collections: dict[str, Collection]
    ordering: Ordering
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]


def compile_css(source: str, config: TranspilerConfig | None = None) -> TranspileResult:
    """Parse, analyse, order and emit *source*.

    Raises ``ParseError`` for malformed input and ``DependencyCycleError``
    when the cycle policy is ``ERROR`` and the classes reference each other.
    """
    config = config or TranspilerConfig()
    ast, collections, ordering = run_pipeline(build_ast(parse_css(source)), config)
    code = emit(ast, ordering.collections, config)
    diagnostics = validate(collections)
    logger.debug(
        "Emitted %d export(s), %d shared block(s), %d diagnostic(s)",
        sum(1 for c in ordering.collections if not c.is_anonymous),
        len(ast.common_content),
        len(diagnostics),
    )
    return TranspileResult(
        code=code,
        ast=ast,
        collections=collections,
        ordering=ordering,
        diagnostics=diagnostics,
    )


def transpile(source: str, config: TranspilerConfig | None = None) -> str:
    """Compile stylesheet *source* and return the module text."""
    return compile_css(source, config).code
