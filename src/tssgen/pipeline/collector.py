"""Stage 2: group normalized rules into one collection per root class."""

from __future__ import annotations

import logging

from tssgen.model.ast import Rule, StyleAst
from tssgen.model.collection import Collection

logger = logging.getLogger(__name__)


def collect(ast: StyleAst) -> dict[str, Collection]:
    """Group the rules of a normalized *ast* by their root class.

    Every class mentioned as a dependency gets a collection, even one that
    owns no rules, so that no dependency is left dangling.  A rule's
    dependencies are registered before its owner, which fixes the
    collections' insertion order.
    """
    rules: dict[str, list[Rule]] = {}
    dependencies: dict[str, dict[str, None]] = {}

    def ensure(name: str) -> None:
        if name not in rules:
            rules[name] = []
            dependencies[name] = {}

    for rule in ast.rules:
        name = rule.root_name
        for dep in rule.dependencies:
            ensure(dep)
        ensure(name)
        rules[name].append(rule)
        dependencies[name].update(dict.fromkeys(rule.dependencies))

    collections = {
        name: Collection(
            name=name,
            rules=tuple(owned),
            dependencies=tuple(dependencies[name]),
        )
        for name, owned in rules.items()
    }
    logger.debug("Built %d collection(s) from %d rule(s)", len(collections), len(ast.rules))
    return collections
