from tssgen.analysis.builder import build_ast
from tssgen.analysis.content import build_content, property_name
from tssgen.analysis.selector import prepare_selector, resolve_roots, split_by_class_name

__all__ = [
    "build_ast",
    "build_content",
    "property_name",
    "prepare_selector",
    "resolve_roots",
    "split_by_class_name",
]
