"""Module emission: IR construction and text formatting."""

from tssgen.emit.emitter import RUNTIME_IMPORTS, Emitter, emit, rule_selector, selector_pattern
from tssgen.emit.formatter import escape_template, format_expr, format_module

__all__ = [
    "RUNTIME_IMPORTS",
    "Emitter",
    "emit",
    "escape_template",
    "format_expr",
    "format_module",
    "rule_selector",
    "selector_pattern",
]
