"""Stage 1: split multi-root rules and extract their shared content."""

from __future__ import annotations

import logging
from dataclasses import replace

from tssgen.model.ast import Content, Rule, StyleAst

logger = logging.getLogger(__name__)


def normalize_rules(ast: StyleAst) -> StyleAst:
    """Return a copy of *ast* in which every rule has exactly one root.

    A rule whose selectors are rooted at several classes (``.a, .b {}``) moves
    its declarations to a new common-content entry and is replaced by one
    clone per root.  Each clone keeps only the selectors rooted at its class,
    has empty inline content and points at the shared entry.  Single-root
    rules are kept as they are.
    """
    rules: list[Rule] = []
    common: list[Content] = list(ast.common_content)
    for rule in ast.rules:
        if len(rule.root_names) <= 1:
            rules.append(rule)
            continue

        common_content_id = len(common)
        common.append(rule.content)
        for name, count in rule.root_names.items():
            rules.append(
                Rule(
                    media=rule.media,
                    selectors=tuple(s for s in rule.selectors if s.root_name == name),
                    root_names={name: count},
                    dep_names={name: rule.dep_names.get(name, ())},
                    content={},
                    common_content_id=common_content_id,
                )
            )
        logger.debug(
            "Split rule rooted at %s into %d clones sharing content #%d",
            ", ".join(n or "<global>" for n in rule.root_names),
            len(rule.root_names),
            common_content_id,
        )

    return replace(ast, rules=tuple(rules), common_content=tuple(common))
