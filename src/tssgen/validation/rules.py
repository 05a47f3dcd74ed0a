"""Validation rules for collection graphs.

Each rule is a function taking the collections of a compiled stylesheet and
returning a list of Diagnostic objects describing any issues found.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from tssgen.emit.emitter import RUNTIME_IMPORTS
from tssgen.model.collection import Collection
from tssgen.model.diagnostic import Diagnostic, Severity
from tssgen.pipeline.orderer import cyclic_collections


# ---------------------------------------------------------------------------
# Known value sets
# ---------------------------------------------------------------------------

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

RESERVED_WORDS = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with", "let", "static", "yield",
    "await", "implements", "interface", "package", "private", "protected",
    "public",
})


# ---------------------------------------------------------------------------
# Graph rules
# ---------------------------------------------------------------------------


def check_dependency_cycles(collections: Mapping[str, Collection]) -> list[Diagnostic]:
    """No collection may sit on, or only be reachable through, a dependency cycle."""
    return [
        Diagnostic(
            rule="check_dependency_cycles",
            severity=Severity.WARNING,
            message=f"Class '{name}' is on or only reachable through a dependency cycle.",
            collection=name,
            fix="Pick a cycle policy (error, break or drop) or remove one of the "
            "selectors that reference the classes in both directions.",
        )
        for name in cyclic_collections(collections)
    ]


def check_undefined_dependencies(collections: Mapping[str, Collection]) -> list[Diagnostic]:
    """Referenced classes that own no rules of their own."""
    referenced: dict[str, None] = {}
    for collection in collections.values():
        referenced.update(dict.fromkeys(collection.dependencies))
    return [
        Diagnostic(
            rule="check_undefined_dependencies",
            severity=Severity.INFO,
            message=f"Class '{name}' is referenced but defines no rules; an empty export is emitted.",
            collection=name,
        )
        for name in referenced
        if not collections[name].rules
    ]


# ---------------------------------------------------------------------------
# Export name rules (ERROR severity)
# ---------------------------------------------------------------------------


def check_export_identifiers(collections: Mapping[str, Collection]) -> list[Diagnostic]:
    """Export names must be valid, non-reserved identifiers."""
    diagnostics: list[Diagnostic] = []
    for collection in collections.values():
        if collection.is_anonymous:
            continue
        export = collection.export_name
        if not _IDENTIFIER_RE.match(export):
            diagnostics.append(
                Diagnostic(
                    rule="check_export_identifiers",
                    severity=Severity.ERROR,
                    message=f"Class '{collection.name}' maps to '{export}', which is not a valid identifier.",
                    collection=collection.name,
                    fix="Rename the class so it starts with a letter or underscore.",
                )
            )
        elif export in RESERVED_WORDS:
            diagnostics.append(
                Diagnostic(
                    rule="check_export_identifiers",
                    severity=Severity.ERROR,
                    message=f"Class '{collection.name}' maps to the reserved word '{export}'.",
                    collection=collection.name,
                    fix="Rename the class.",
                )
            )
    return diagnostics


def check_duplicate_exports(collections: Mapping[str, Collection]) -> list[Diagnostic]:
    """Two classes must not map to the same export name (``.a-b`` and ``.a_b``)."""
    seen: dict[str, str] = {}
    diagnostics: list[Diagnostic] = []
    for collection in collections.values():
        if collection.is_anonymous:
            continue
        export = collection.export_name
        if export in seen:
            diagnostics.append(
                Diagnostic(
                    rule="check_duplicate_exports",
                    severity=Severity.ERROR,
                    message=f"Classes '{seen[export]}' and '{collection.name}' both export as '{export}'.",
                    collection=collection.name,
                    fix="Rename one of the classes.",
                )
            )
        else:
            seen[export] = collection.name
    return diagnostics


def check_runtime_shadowing(collections: Mapping[str, Collection]) -> list[Diagnostic]:
    """Exports must not shadow the names imported from the runtime."""
    return [
        Diagnostic(
            rule="check_runtime_shadowing",
            severity=Severity.ERROR,
            message=f"Class '{c.name}' exports as '{c.export_name}', which shadows a runtime import.",
            collection=c.name,
            fix="Rename the class.",
        )
        for c in collections.values()
        if c.export_name in RUNTIME_IMPORTS
    ]


ALL_RULES = [
    check_dependency_cycles,
    check_undefined_dependencies,
    check_export_identifiers,
    check_duplicate_exports,
    check_runtime_shadowing,
]
