"""Tests for locating function declarations and their leading comments."""

import textwrap

import pytest
import tree_sitter
import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts

from docmeta.parsers.locator import DeclarationLocator, NodeKind, classify
from docmeta.parsers.structure import DeclarationSite, SourceLocation

_JS = tree_sitter.Language(tsjs.language())
_TS = tree_sitter.Language(tsts.language_typescript())


def _locate(source: str, language: tree_sitter.Language = _JS) -> list[DeclarationSite]:
    source_bytes = source.encode("utf-8")
    tree = tree_sitter.Parser(language).parse(source_bytes)
    return DeclarationLocator().locate(tree.root_node, source_bytes)


class TestClassify:
    """Tests for the node classification used by the visitor."""

    def test_function_declaration(self) -> None:
        tree = tree_sitter.Parser(_JS).parse(b"function f() {}\n")
        assert classify(tree.root_node.children[0]) is NodeKind.FUNCTION_DECLARATION

    def test_program_is_other(self) -> None:
        tree = tree_sitter.Parser(_JS).parse(b"function f() {}\n")
        assert classify(tree.root_node) is NodeKind.OTHER

    def test_statement_is_other(self) -> None:
        tree = tree_sitter.Parser(_JS).parse(b"const a = 1;\n")
        assert classify(tree.root_node.children[0]) is NodeKind.OTHER


class TestDeclarationDiscovery:
    """Tests for which declarations are reported."""

    def test_empty_source(self) -> None:
        assert _locate("") == []

    def test_simple_function(self) -> None:
        sites = _locate("function hello() { return 42; }\n")
        assert len(sites) == 1
        assert sites[0].name == "hello"
        assert sites[0].raw_comment == ""

    def test_document_order(self) -> None:
        source = textwrap.dedent("""\
            function first() {}
            function second() {}
            function third() {}
        """)
        assert [s.name for s in _locate(source)] == ["first", "second", "third"]

    def test_nested_functions_follow_parent(self) -> None:
        source = textwrap.dedent("""\
            function outer() {
                function inner() {}
                if (true) {
                    function deeper() {}
                }
            }
            function after() {}
        """)
        names = [s.name for s in _locate(source)]
        assert names == ["outer", "inner", "deeper", "after"]

    def test_generator_function(self) -> None:
        sites = _locate("function* numbers() { yield 1; }\n")
        assert [s.name for s in sites] == ["numbers"]

    def test_async_function(self) -> None:
        sites = _locate("async function load() { await 1; }\n")
        assert [s.name for s in sites] == ["load"]

    def test_other_function_forms_ignored(self) -> None:
        source = textwrap.dedent("""\
            const arrow = () => 1;
            const expr = function named() {};
            class Service {
                run() {}
            }
        """)
        assert _locate(source) == []

    def test_unnamed_default_export_ignored(self) -> None:
        assert _locate("export default function () {}\n") == []

    def test_exported_function(self) -> None:
        sites = _locate("export function helper() {}\n")
        assert [s.name for s in sites] == ["helper"]

    def test_typescript_overloads(self) -> None:
        source = textwrap.dedent("""\
            function pick(a: string): string;
            function pick(a: number): number;
            function pick(a: any): any { return a; }
        """)
        sites = _locate(source, _TS)
        assert [s.name for s in sites] == ["pick", "pick", "pick"]

    def test_locate_is_repeatable(self) -> None:
        source = "/** @param a x */\nfunction f(a) {}\n"
        assert _locate(source) == _locate(source)


class TestLocation:
    """Tests for the reported name position."""

    def test_name_position(self) -> None:
        sites = _locate("function hello() {}\n")
        assert sites[0].location == SourceLocation(line=1, column=10)

    def test_line_after_comment(self) -> None:
        sites = _locate("// comment\nfunction hello() {}\n")
        assert sites[0].location.line == 2

    def test_exported_name_position(self) -> None:
        sites = _locate("/** doc */\nexport function helper() {}\n")
        assert sites[0].location == SourceLocation(line=2, column=17)

    def test_indented_name_position(self) -> None:
        source = "function outer() {\n    function inner() {}\n}\n"
        sites = _locate(source)
        assert sites[1].location == SourceLocation(line=2, column=14)

    def test_column_counts_characters(self) -> None:
        sites = _locate("/* é */ function f() {}\n")
        assert sites[0].location == SourceLocation(line=1, column=18)


class TestLeadingComment:
    """Tests for associating comments with declarations."""

    def test_jsdoc_block(self) -> None:
        source = textwrap.dedent("""\
            /**
             * Adds numbers.
             * @param a first
             */
            function add(a) { return a; }
        """)
        sites = _locate(source)
        assert sites[0].raw_comment == (
            "/**\n * Adds numbers.\n * @param a first\n */"
        )

    def test_adjacent_comments_joined(self) -> None:
        source = "// first\n/** second */\nfunction f() {}\n"
        sites = _locate(source)
        assert sites[0].raw_comment == "// first\n/** second */"

    def test_blank_line_between_comment_and_function(self) -> None:
        source = "/** doc */\n\nfunction f() {}\n"
        assert _locate(source)[0].raw_comment == "/** doc */"

    def test_comment_separated_by_statement(self) -> None:
        source = "/** doc */\nconst x = 1;\nfunction f() {}\n"
        assert _locate(source)[0].raw_comment == ""

    def test_trailing_comment_of_previous_statement(self) -> None:
        source = "const x = 1; // about x\nfunction f() {}\n"
        assert _locate(source)[0].raw_comment == ""

    def test_trailing_comment_dropped_but_next_kept(self) -> None:
        source = "const x = 1; // about x\n/** about f */\nfunction f() {}\n"
        assert _locate(source)[0].raw_comment == "/** about f */"

    def test_exported_function_comment(self) -> None:
        source = "/** @returns value */\nexport function get() { return 1; }\n"
        assert _locate(source)[0].raw_comment == "/** @returns value */"

    def test_ambient_declaration_comment(self) -> None:
        source = "/** @returns nothing */\ndeclare function ping(): void;\n"
        sites = _locate(source, _TS)
        assert [s.name for s in sites] == ["ping"]
        assert sites[0].raw_comment == "/** @returns nothing */"

    def test_nested_function_comment(self) -> None:
        source = textwrap.dedent("""\
            /** outer doc */
            function outer() {
                /** inner doc */
                function inner() {}
            }
        """)
        sites = _locate(source)
        assert sites[0].raw_comment == "/** outer doc */"
        assert sites[1].raw_comment == "/** inner doc */"

    def test_comment_belongs_to_nearest_declaration(self) -> None:
        source = "/** a doc */\nfunction a() {}\nfunction b() {}\n"
        sites = _locate(source)
        assert sites[0].raw_comment == "/** a doc */"
        assert sites[1].raw_comment == ""

    @pytest.mark.parametrize(
        "source",
        [
            "function f() {}\n",
            "const a = 1;\nfunction f() {}\n",
        ],
    )
    def test_undocumented(self, source: str) -> None:
        assert _locate(source)[0].raw_comment == ""
