# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from wgsl_oil.errors import MalformedDirective
from wgsl_oil.parser import Located, parse


def test_no_directives_body_is_verbatim() -> None:
	src = "struct S { x: f32, };\n\nfn f() -> f32 { return 1.0; }\n"
	parsed = parse(src)
	assert parsed.imports == []
	assert parsed.exports == []
	assert parsed.body == src
	assert parsed.line_map == [1, 2, 3]


def test_named_import() -> None:
	parsed = parse('#import "lib" { foo, bar }\n')
	assert len(parsed.imports) == 1
	imp = parsed.imports[0]
	assert imp.reference == "lib"
	assert imp.symbols == ("foo", "bar")
	assert imp.wildcard is False
	assert imp.loc == Located(line=1, column=1)


@pytest.mark.parametrize(
	"line",
	[
		'#import "lib" *',
		'#import "lib" { * }',
		'#import "lib"',
	],
)
def test_wildcard_import_spellings(line: str) -> None:
	imp = parse(line + "\n").imports[0]
	assert imp.reference == "lib"
	assert imp.wildcard is True
	assert imp.symbols == ()


def test_angle_bracket_reference() -> None:
	imp = parse("#import <common/noise.wgsl> { noise }\n").imports[0]
	assert imp.reference == "common/noise.wgsl"
	assert imp.symbols == ("noise",)


def test_export_list() -> None:
	parsed = parse("#export { a, b }\n#export { c }\n")
	assert [e.symbols for e in parsed.exports] == [("a", "b"), ("c",)]
	assert parsed.exported == frozenset({"a", "b", "c"})
	assert parsed.body == ""


def test_trailing_comma_and_comment_allowed() -> None:
	parsed = parse("#export { a, } // public api\n")
	assert parsed.exports[0].symbols == ("a",)


def test_repeated_names_collapse() -> None:
	imp = parse('#import "lib" { foo, foo, bar }\n').imports[0]
	assert imp.symbols == ("foo", "bar")


def test_directive_lines_are_stripped_from_body() -> None:
	src = '#import "lib" { f }\nfn main() { f(); }\n#export { main }\n// done\n'
	parsed = parse(src)
	assert parsed.body == "fn main() { f(); }\n// done\n"
	assert parsed.line_map == [2, 4]
	assert parsed.references == ["lib"]


def test_indented_directive_location() -> None:
	parsed = parse("fn a() {}\n  #export { a }\n")
	assert parsed.exports[0].loc == Located(line=2, column=3)


def test_unknown_keyword_is_malformed() -> None:
	with pytest.raises(MalformedDirective) as info:
		parse('fn x() {}\n#include "foo"\n', path=Path("/shaders/main.wgsl"))
	err = info.value
	assert err.code == "MalformedDirective"
	assert err.span.file == "/shaders/main.wgsl"
	assert err.span.line == 2
	assert err.span.column is not None and err.span.column >= 2
	assert "#include" in str(err)


@pytest.mark.parametrize(
	"line",
	[
		"#export { * }",
		"#export { }",
		"#export a",
		'#import ""',
		"#import lib",
		'#import "lib" { a b }',
		"#",
	],
)
def test_malformed_directives_rejected(line: str) -> None:
	with pytest.raises(MalformedDirective):
		parse(line + "\n")


def test_custom_marker() -> None:
	src = '//! import "lib" { f }\n// ordinary comment\nfn g() { f(); }\n'
	parsed = parse(src, marker="//!")
	assert parsed.references == ["lib"]
	assert parsed.body == "// ordinary comment\nfn g() { f(); }\n"


def test_crlf_line_endings() -> None:
	parsed = parse('#import "lib" { f }\r\nfn g() {}\r\n')
	assert parsed.imports[0].symbols == ("f",)
	assert parsed.body == "fn g() {}\r\n"


def test_line_numbers_count_newlines_only() -> None:
	src = "// page\x0cbreak\rstill line one\n#export { a }\n"
	parsed = parse(src)
	assert parsed.exports[0].loc == Located(line=2, column=1)
	assert parsed.body == "// page\x0cbreak\rstill line one\n"
	assert parsed.line_map == [1]
