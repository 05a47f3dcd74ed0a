"""Render IR nodes to module text."""

from __future__ import annotations

from tssgen.emit.ir import (
    ArrayLit,
    Call,
    ConstDecl,
    Expr,
    ExprStatement,
    Module,
    ObjectLit,
    Raw,
    Statement,
    Str,
)

DEFAULT_MAX_PAD = 24


def escape_template(text: str) -> str:
    """Wrap *text* in a template literal, escaping ``$`` and backticks."""
    return "`" + text.replace("$", "\\$").replace("`", "\\`") + "`"


def property_label(name: str, width: int = 0) -> str:
    """``name:`` left-aligned in a field of *width* characters."""
    return f"{name}:".ljust(width)


def format_object(obj: ObjectLit, max_pad: int = DEFAULT_MAX_PAD) -> str:
    if not obj.entries:
        return "{}"
    if obj.inline:
        body = ", ".join(
            f"{property_label(key)} {format_expr(value, max_pad)}" for key, value in obj.entries
        )
        return "{ " + body + " }"

    width = min(max(len(key) for key, _ in obj.entries), max_pad) + 1
    lines = [
        f"  {property_label(key, width)} {format_expr(value, max_pad)},"
        for key, value in obj.entries
    ]
    return "{\n" + "\n".join(lines) + "\n}"


def format_expr(expr: Expr, max_pad: int = DEFAULT_MAX_PAD) -> str:
    """Render a single expression node."""
    if isinstance(expr, Raw):
        return expr.code
    if isinstance(expr, Str):
        return escape_template(expr.value)
    if isinstance(expr, ArrayLit):
        return "[" + expr.separator.join(format_expr(i, max_pad) for i in expr.items) + "]"
    if isinstance(expr, ObjectLit):
        return format_object(expr, max_pad)
    if isinstance(expr, Call):
        args = ", ".join(format_expr(a, max_pad) for a in expr.args)
        return f"{expr.callee}({args})"
    raise TypeError(f"Cannot format {type(expr).__name__}")


def format_statement(statement: Statement, max_pad: int = DEFAULT_MAX_PAD) -> str:
    if isinstance(statement, ConstDecl):
        prefix = "export const" if statement.exported else "const"
        return f"{prefix} {statement.name} = {format_expr(statement.value, max_pad)};"
    if isinstance(statement, ExprStatement):
        return f"{format_expr(statement.expr, max_pad)};"
    raise TypeError(f"Cannot format {type(statement).__name__}")


def format_module(module: Module, max_pad: int = DEFAULT_MAX_PAD) -> str:
    """Render the whole module: import line, then non-empty sections."""
    blocks = [f'import {{ {", ".join(module.imports)} }} from "{module.source}";']
    for section in module.sections:
        if not section.statements:
            continue
        separator = "\n\n" if section.spaced else "\n"
        blocks.append(separator.join(format_statement(s, max_pad) for s in section.statements))
    return "\n\n".join(blocks) + "\n"
