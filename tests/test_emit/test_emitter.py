"""Tests for selector rendering and module emission."""

import pytest

from tssgen.analysis import build_ast, prepare_selector, resolve_roots
from tssgen.config import TranspilerConfig
from tssgen.emit import emit, format_expr, rule_selector, selector_pattern
from tssgen.emit.ir import ArrayLit, Call, Raw, Str
from tssgen.model.ast import Selector
from tssgen.parser import parse_css
from tssgen.pipeline import run_pipeline

HEADER = 'import { tss, tssFrames, tssFont, join, query } from "ts-mini/tss";\n\n'


def _selector(text: str) -> Selector:
    resolved, _, _ = resolve_roots([prepare_selector(text)])
    return resolved[0]


def _emit(source: str, config: TranspilerConfig | None = None) -> str:
    ast, _, ordering = run_pipeline(build_ast(parse_css(source)), config)
    return emit(ast, ordering.collections, config)


# ---------------------------------------------------------------------------
# Selector patterns
# ---------------------------------------------------------------------------


class TestSelectorPattern:
    def test_bare_class(self):
        assert selector_pattern(_selector(".a")) is None

    def test_descendant_shorthand(self):
        assert selector_pattern(_selector(".a span")) == Str("span")

    def test_child_shorthand(self):
        assert selector_pattern(_selector(".a > span")) == Str("> span")

    def test_ancestor_shorthand(self):
        assert selector_pattern(_selector("body .a")) == Str("<body")

    def test_pseudo_class(self):
        assert selector_pattern(_selector(".a:hover")) == Str("=@:hover")

    def test_element_prefix(self):
        assert selector_pattern(_selector("div.a")) == Str("=div@")

    def test_referenced_class(self):
        assert selector_pattern(_selector(".a .b")) == Call("query", (Str("@ %"), Raw("b")))

    def test_compound_classes(self):
        assert selector_pattern(_selector(".a.b")) == Call("query", (Str("@%"), Raw("b")))

    def test_root_repeated(self):
        rendered = format_expr(selector_pattern(_selector(".a .b .a")))
        assert rendered == "query(`@ % @`, b)"

    def test_hyphenated_reference(self):
        rendered = format_expr(selector_pattern(_selector(".a .nav-item")))
        assert rendered == "query(`@ %`, nav_item)"


class TestPatternRoundTrip:
    """Substituting the root and the query() arguments back reproduces the selector."""

    @staticmethod
    def _rebuild(selector: Selector) -> str:
        rendered = selector_pattern(selector)
        if isinstance(rendered, Call):
            pattern, *params = rendered.args
            text, names = pattern.value, [p.code for p in params]
        else:
            assert rendered.value.startswith("=")
            text, names = rendered.value[1:], []
        text = text.replace("@", selector.root_name)
        for name in names:
            text = text.replace("%", "." + name, 1)
        return text

    @pytest.mark.parametrize(
        "text",
        [
            ".a > .b.c",
            ".a:not(.b) .c",
            '.a[data-x=".q"] .b',
            ".a.b:hover .c .b",
            ".a .b .a",
            ".list > .row .cell:first-child span",
            "div.a:hover",
            "ul > li.item + .sep",
        ],
    )
    def test_same_root_and_dependencies(self, text):
        rebuilt = self._rebuild(_selector(text))
        assert rebuilt == text
        _, roots, deps = resolve_roots([prepare_selector(rebuilt)])
        _, expected_roots, expected_deps = resolve_roots([prepare_selector(text)])
        assert roots == expected_roots
        assert deps == expected_deps


class TestRuleSelector:
    def _rule(self, source: str):
        return build_ast(parse_css(source)).rules[0]

    def test_bare_class_has_no_selector(self):
        assert rule_selector(self._rule(".a {}")) is None

    def test_single_rendered_selector(self):
        assert rule_selector(self._rule(".a, .a:hover {}")) == Str("=@:hover")

    def test_several_rendered_selectors(self):
        result = rule_selector(self._rule(".a span, .a:hover {}"))
        assert result == ArrayLit((Str("span"), Str("=@:hover")))


# ---------------------------------------------------------------------------
# Modules
# ---------------------------------------------------------------------------


class TestCollections:
    def test_dependency_before_dependant(self):
        assert _emit(".a { color: red; } .a .b { color: blue; }") == HEADER + (
            "export const b = tss();\n"
            "\n"
            "export const a = tss({\n"
            "  color: `red`,\n"
            "}, {\n"
            "  SELECTOR: query(`@ %`, b),\n"
            "  color:    `blue`,\n"
            "});\n"
        )

    def test_global_rules(self):
        assert _emit("body { margin: 0; }") == HEADER + (
            "tss({\n"
            "  SELECTOR: `=body`,\n"
            "  margin:   `0`,\n"
            "});\n"
        )

    def test_global_selectors_joined(self):
        out = _emit("html, body { margin: 0; }")
        assert "SELECTOR: `=html,body`," in out

    def test_repeated_property(self):
        out = _emit(".a { display: -webkit-box; display: flex; }")
        assert "  display: [`-webkit-box`,`flex`],\n" in out

    def test_template_characters_escaped(self):
        out = _emit('.a { content: "$`"; }')
        assert 'content: `"\\$\\`"`,' in out


class TestMedia:
    def test_media_constant_and_reference(self):
        assert _emit("@media (min-width: 600px) { .a { color: red; } }") == HEADER + (
            "const tssMedia__0 = `(min-width: 600px)`;\n"
            "\n"
            "export const a = tss({\n"
            "  MEDIA: tssMedia__0,\n"
            "  color: `red`,\n"
            "});\n"
        )

    def test_unscoped_label_gets_no_constant(self):
        out = _emit(".a {} @media print { .a { color: red; } }")
        assert "tssMedia__0" not in out
        assert "const tssMedia__1 = `print`;" in out
        assert "MEDIA: tssMedia__1," in out


class TestSharedContent:
    def test_split_rule(self):
        assert _emit(".x, .y { margin: 0; }") == HEADER + (
            "const tssCommon__0 = {\n"
            "  margin: `0`,\n"
            "};\n"
            "\n"
            "export const x = tss(tssCommon__0);\n"
            "\n"
            "export const y = tss(tssCommon__0);\n"
        )

    def test_joined_with_media_and_selector(self):
        out = _emit("@media print { .a, .b:hover { color: red } }")
        assert "export const a = tss(join({ MEDIA: tssMedia__0 }, tssCommon__0));" in out
        assert (
            "export const b = tss(join({ MEDIA: tssMedia__0, SELECTOR: `=@:hover` }, tssCommon__0));"
            in out
        )


class TestKeyframesAndFonts:
    def test_keyframes(self):
        out = _emit(
            "@keyframes spin { from { transform: rotate(0deg); } to { transform: rotate(360deg); } }"
        )
        assert out == HEADER + (
            "tssFrames(`spin`, {\n"
            "  SELECTOR:  `from`,\n"
            "  transform: `rotate(0deg)`,\n"
            "}, {\n"
            "  SELECTOR:  `to`,\n"
            "  transform: `rotate(360deg)`,\n"
            "});\n"
        )

    def test_font_face(self):
        out = _emit("@font-face { font-family: Inter; }")
        assert out == HEADER + "tss(`@fontface`, {\n  font_family: `Inter`,\n});\n"

    def test_section_order(self):
        out = _emit(
            ".z, .w { color: red; }"
            " @font-face { font-family: Inter; }"
            " @media print { .a {} }"
            " @keyframes k { to { opacity: 1; } }"
        )
        positions = [
            out.index(marker)
            for marker in ("const tssMedia__", "tssFrames(", "tss(`@fontface`", "const tssCommon__0", "export const z")
        ]
        assert positions == sorted(positions)


class TestConfig:
    def test_runtime_module(self):
        out = _emit(".a {}", TranspilerConfig(runtime_module="@app/tss"))
        assert out.startswith('import { tss, tssFrames, tssFont, join, query } from "@app/tss";\n')

    def test_prefixes(self):
        config = TranspilerConfig(media_prefix="m", common_prefix="c")
        out = _emit("@media print { .a, .b { color: red; } }", config)
        assert "const m0 = `print`;" in out
        assert "const c0 = {" in out
        assert "join({ MEDIA: m0 }, c0)" in out

    def test_max_pad(self):
        out = _emit(".a { color: red; background-color: blue; }", TranspilerConfig(max_pad_width=5))
        assert "  color: `red`,\n" in out
        assert "  background_color: `blue`,\n" in out

    def test_default_pad_aligns_to_longest_key(self):
        out = _emit(".a { color: red; background-color: blue; }")
        assert "  color:            `red`,\n" in out
