"""tssgen model layer -- public type re-exports."""

from tssgen.model.ast import Content, FontFace, Keyframe, Rule, Selector, StyleAst
from tssgen.model.collection import Collection, export_name
from tssgen.model.diagnostic import Diagnostic, Severity
from tssgen.model.stylesheet import (
    AtRule,
    Declaration,
    FontFaceRule,
    KeyframeRule,
    KeyframesRule,
    MediaRule,
    StyleRule,
    Stylesheet,
)

__all__ = [
    # raw rule tree
    "Declaration",
    "StyleRule",
    "MediaRule",
    "KeyframesRule",
    "KeyframeRule",
    "FontFaceRule",
    "AtRule",
    "Stylesheet",
    # analysed ast
    "Content",
    "Selector",
    "Rule",
    "Keyframe",
    "FontFace",
    "StyleAst",
    # collections
    "Collection",
    "export_name",
    # diagnostic
    "Severity",
    "Diagnostic",
]
