"""tssgen - compile CSS stylesheets into dependency-ordered tss modules."""

__version__ = "0.1.0"

from tssgen.config import CyclePolicy, TranspilerConfig  # noqa: E402
from tssgen.transpiler import TranspileResult, compile_css, transpile  # noqa: E402

__all__ = [
    "__version__",
    "CyclePolicy",
    "TranspilerConfig",
    "TranspileResult",
    "compile_css",
    "transpile",
]
