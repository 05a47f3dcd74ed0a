"""Compilation stages: normalize rules, build collections, order them."""

from __future__ import annotations

from tssgen.config import TranspilerConfig
from tssgen.model.ast import StyleAst
from tssgen.model.collection import Collection
from tssgen.pipeline.collector import collect
from tssgen.pipeline.normalizer import normalize_rules
from tssgen.pipeline.orderer import (
    DependencyCycleError,
    Ordering,
    cycle_members,
    cyclic_collections,
    dependant_counts,
    order_collections,
    starting_points,
    unreachable,
)

__all__ = [
    "DependencyCycleError",
    "Ordering",
    "collect",
    "cycle_members",
    "cyclic_collections",
    "dependant_counts",
    "normalize_rules",
    "order_collections",
    "run_pipeline",
    "starting_points",
    "unreachable",
]


def run_pipeline(
    ast: StyleAst, config: TranspilerConfig | None = None
) -> tuple[StyleAst, dict[str, Collection], Ordering]:
    """Run the three stages over *ast*; each consumes the previous stage's output."""
    config = config or TranspilerConfig()
    normalized = normalize_rules(ast)
    collections = collect(normalized)
    ordering = order_collections(collections, config.cycle_policy)
    return normalized, collections, ordering
