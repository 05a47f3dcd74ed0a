"""Collections: every rule owned by one root class."""

from __future__ import annotations

from dataclasses import dataclass

from tssgen.model.ast import Rule


def export_name(class_token: str) -> str:
    """Map a class token such as ``.nav-item`` to its export name ``nav_item``."""
    return class_token[1:].replace("-", "_")


@dataclass(frozen=True)
class Collection:
    """The rules owned by one root class and the classes they reference.

    The empty name is the bucket for rules without any class selector.
    """

    name: str
    rules: tuple[Rule, ...] = ()
    dependencies: tuple[str, ...] = ()

    @property
    def count(self) -> int:
        return len(self.rules)

    @property
    def is_anonymous(self) -> bool:
        return not self.name

    @property
    def export_name(self) -> str:
        return export_name(self.name) if self.name else ""
