"""Compilation settings shared by the library entry points and the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CyclePolicy(Enum):
    """What to do with collections on, or only reachable through, a dependency cycle."""

    ERROR = "error"  # raise DependencyCycleError
    BREAK = "break"  # enter each cycle at its first-seen collection
    DROP = "drop"  # omit them from the output


@dataclass(frozen=True)
class TranspilerConfig:
    runtime_module: str = "ts-mini/tss"
    media_prefix: str = "tssMedia__"
    common_prefix: str = "tssCommon__"
    max_pad_width: int = 24
    cycle_policy: CyclePolicy = CyclePolicy.ERROR
