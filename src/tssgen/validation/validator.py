"""Collection validator: runs all validation rules and reports diagnostics."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Callable

from tssgen.model.collection import Collection
from tssgen.model.diagnostic import Diagnostic
from tssgen.validation.rules import ALL_RULES


class ValidationError(Exception):
    """Raised when validation produces ERROR-severity diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [str(d) for d in diagnostics if d.is_error]
        super().__init__(
            f"Validation failed with {len(messages)} error(s): " + "; ".join(messages)
        )


RuleFunc = Callable[[Mapping[str, Collection]], list[Diagnostic]]


def validate(
    collections: Mapping[str, Collection], extra_rules: list[RuleFunc] | None = None
) -> list[Diagnostic]:
    """Run all validation rules against *collections*.

    Returns the full list of diagnostics (errors, warnings, info).
    """
    rules: list[RuleFunc] = list(ALL_RULES)
    if extra_rules:
        rules.extend(extra_rules)
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        diagnostics.extend(rule(collections))
    return diagnostics


def validate_or_raise(
    collections: Mapping[str, Collection], extra_rules: list[RuleFunc] | None = None
) -> list[Diagnostic]:
    """Run validation; raises :class:`ValidationError` if any ERROR diagnostics exist.

    Returns the non-error diagnostics (warnings/info) when no errors are found.
    """
    diagnostics = validate(collections, extra_rules=extra_rules)
    errors = [d for d in diagnostics if d.is_error]
    if errors:
        raise ValidationError(errors)
    return diagnostics
