"""Stage 3: order collections so dependencies are emitted before dependants."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from tssgen.config import CyclePolicy
from tssgen.model.collection import Collection

logger = logging.getLogger(__name__)


class DependencyCycleError(Exception):
    """Raised when collections cannot be ordered because of a dependency cycle."""

    def __init__(self, names: list[str]) -> None:
        self.names = names
        super().__init__(
            f"{len(names)} class(es) cannot be ordered because of a dependency cycle: "
            + ", ".join(names)
        )


@dataclass(frozen=True)
class Ordering:
    """Result of ordering a collection graph.

    Attributes:
        collections: Collections in emission order.
        cyclic: Names on a dependency cycle or only reachable through one.
            Under ``BREAK`` they are part of ``collections``; under ``DROP``
            they are not, and neither is anything depending on them.
    """

    collections: tuple[Collection, ...]
    cyclic: tuple[str, ...] = ()

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.collections]


def dependant_counts(collections: Mapping[str, Collection]) -> dict[str, int]:
    """Count, for every collection, how many collections depend on it."""
    counts = dict.fromkeys(collections, 0)
    for collection in collections.values():
        for dep in collection.dependencies:
            counts[dep] += 1
    return counts


def starting_points(collections: Mapping[str, Collection]) -> list[str]:
    """Collections nothing depends on, in insertion order."""
    return [name for name, count in dependant_counts(collections).items() if not count]


def _post_order(
    collections: Mapping[str, Collection], start: str, visited: set[str]
) -> Iterator[str]:
    """Depth-first post-order walk from *start* using an explicit stack."""
    if start in visited:
        return
    visited.add(start)
    stack = [(start, iter(collections[start].dependencies))]
    while stack:
        name, deps = stack[-1]
        for dep in deps:
            if dep not in visited:
                visited.add(dep)
                stack.append((dep, iter(collections[dep].dependencies)))
                break
        else:
            stack.pop()
            yield name


def unreachable(collections: Mapping[str, Collection]) -> list[str]:
    """Names that no starting point reaches, in insertion order."""
    visited: set[str] = set()
    for start in starting_points(collections):
        for _ in _post_order(collections, start, visited):
            pass
    return [name for name in collections if name not in visited]


def cycle_members(collections: Mapping[str, Collection]) -> list[str]:
    """Names that lie on a dependency cycle, in insertion order.

    Tarjan's strongly connected components, walked with an explicit stack;
    every component with more than one member (or a self reference) is a
    cycle, whether or not a starting point reaches it.
    """
    index: dict[str, int] = {}
    low: dict[str, int] = {}
    component: list[str] = []
    on_component: set[str] = set()
    members: set[str] = set()

    def enter(name: str) -> tuple[str, Iterator[str]]:
        index[name] = low[name] = len(index)
        component.append(name)
        on_component.add(name)
        return name, iter(collections[name].dependencies)

    for root in collections:
        if root in index:
            continue
        work = [enter(root)]
        while work:
            name, deps = work[-1]
            for dep in deps:
                if dep not in index:
                    work.append(enter(dep))
                    break
                if dep in on_component:
                    low[name] = min(low[name], index[dep])
            else:
                work.pop()
                if work:
                    parent = work[-1][0]
                    low[parent] = min(low[parent], low[name])
                if low[name] != index[name]:
                    continue
                found: list[str] = []
                while True:
                    member = component.pop()
                    on_component.discard(member)
                    found.append(member)
                    if member == name:
                        break
                if len(found) > 1 or name in collections[name].dependencies:
                    members.update(found)
    return [name for name in collections if name in members]


def cyclic_collections(collections: Mapping[str, Collection]) -> list[str]:
    """Names on a cycle or only reachable through one, in insertion order."""
    affected = set(cycle_members(collections)) | set(unreachable(collections))
    return [name for name in collections if name in affected]


def order_collections(
    collections: Mapping[str, Collection],
    policy: CyclePolicy = CyclePolicy.ERROR,
) -> Ordering:
    """Topologically order *collections*, dependencies first.

    Traversal starts from every collection with no dependants, in insertion
    order, and visits dependencies in the order they were recorded, so equal
    input always yields equal output.  Collections on a cycle, or only
    reachable through one, are handled according to *policy*:

    - ``ERROR`` raises :class:`DependencyCycleError`.
    - ``BREAK`` keeps the traversal order, entering unreached collections in
      insertion order; the back edge of each cycle is a forward reference.
    - ``DROP`` omits them together with every collection depending on them.
    """
    cyclic = cyclic_collections(collections)
    if cyclic and policy is CyclePolicy.ERROR:
        raise DependencyCycleError(cyclic)

    visited: set[str] = set()
    order: list[str] = []
    for start in starting_points(collections):
        order.extend(_post_order(collections, start, visited))

    if cyclic and policy is CyclePolicy.BREAK:
        logger.warning("Breaking dependency cycle among: %s", ", ".join(cyclic))
        for name in cyclic:
            order.extend(_post_order(collections, name, visited))
    elif cyclic:
        dropped = set(cyclic)
        kept: list[str] = []
        for name in order:
            if any(dep in dropped for dep in collections[name].dependencies):
                dropped.add(name)
            elif name not in dropped:
                kept.append(name)
        logger.warning(
            "Dropping cyclic collections: %s",
            ", ".join(name for name in collections if name in dropped),
        )
        order = kept

    logger.debug("Ordered %d of %d collection(s)", len(order), len(collections))
    return Ordering(
        collections=tuple(collections[name] for name in order),
        cyclic=tuple(cyclic),
    )
