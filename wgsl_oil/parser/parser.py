# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Line-oriented directive parser.

Only lines that start with the directive marker are parsed (by the lark
grammar in `grammar.lark`); every other line passes through untouched. The
shader language itself is never parsed here.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from ..core.span import Span
from ..errors import MalformedDirective
from .ast import ExportDirective, ImportDirective, Located, ParsedModule

DEFAULT_MARKER = "#"

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	start="start",
	maybe_placeholders=False,
)

_WILDCARD = object()


class _DirectiveBuilder(Transformer):
	"""Turn a directive parse tree into `(kind, payload)` pairs."""

	def quoted_ref(self, children: List[Token]) -> str:
		return children[0].value[1:-1]

	def angle_ref(self, children: List[Token]) -> str:
		return children[0].value[1:-1]

	def name_list(self, children: List[Token]) -> tuple[str, ...]:
		# Repeated names collapse; first spelling wins the order.
		return tuple(dict.fromkeys(str(tok) for tok in children))

	def named_imports(self, children: list) -> tuple[str, ...]:
		return children[0]

	def wildcard_import(self, _children: list) -> object:
		return _WILDCARD

	def import_directive(self, children: list) -> tuple:
		reference = children[0].strip()
		symbols = children[1] if len(children) > 1 else _WILDCARD
		return ("import", reference, symbols)

	def export_directive(self, children: list) -> tuple:
		return ("export", children[0])


_BUILDER = _DirectiveBuilder()


def split_lines(text: str) -> List[str]:
	"""
	Split on newlines only, keeping terminators.

	Line numbers must agree with external checkers, which count newlines alone;
	`str.splitlines` also breaks on form feeds, lone carriage returns and
	Unicode separators.
	"""
	lines = text.split("\n")
	out = [line + "\n" for line in lines[:-1]]
	if lines[-1]:
		out.append(lines[-1])
	return out


def _error_detail(err: UnexpectedInput) -> str:
	if isinstance(err, UnexpectedToken):
		if err.token.type == "$END":
			return "unexpected end of directive"
		return f"unexpected token '{err.token}'"
	if isinstance(err, UnexpectedCharacters):
		return f"unexpected character '{err.char}'"
	if isinstance(err, UnexpectedEOF):
		return "unexpected end of directive"
	return "invalid syntax"


def _error_column(err: UnexpectedInput, text: str) -> int:
	col = getattr(err, "column", None)
	if isinstance(col, int) and col >= 1:
		return col
	# End-of-input errors carry no usable position; point past the last token.
	return len(text.rstrip()) + 1


def parse_directive(text: str, *, loc: Located, marker: str = DEFAULT_MARKER, path: Path | None = None):
	"""
	Parse one directive given the text after the marker.

	`loc` is the position of the marker in the file. Returns an
	`ImportDirective` or an `ExportDirective`.
	"""
	try:
		kind, *payload = _BUILDER.transform(_PARSER.parse(text))
	except UnexpectedInput as err:
		column = loc.column + len(marker) + _error_column(err, text) - 1
		raise MalformedDirective(
			f"malformed directive '{marker}{text.strip()}': {_error_detail(err)}",
			span=Span(file=str(path) if path is not None else None, line=loc.line, column=column),
		) from err
	if kind == "import":
		reference, symbols = payload
		if symbols is _WILDCARD:
			return ImportDirective(reference=reference, symbols=(), wildcard=True, loc=loc)
		return ImportDirective(reference=reference, symbols=symbols, wildcard=False, loc=loc)
	return ExportDirective(symbols=payload[0], loc=loc)


def parse(source: str, *, marker: str = DEFAULT_MARKER, path: Optional[Path] = None) -> ParsedModule:
	"""
	Split module text into directives and body.

	Raises `MalformedDirective` for a marker line that is not a valid
	import/export directive. `path` is only used to anchor error spans.
	"""
	parsed = ParsedModule()
	body: list[str] = []
	for lineno, line in enumerate(split_lines(source), start=1):
		stripped = line.lstrip()
		if not stripped.startswith(marker):
			body.append(line)
			parsed.line_map.append(lineno)
			continue
		indent = len(line) - len(stripped)
		text = stripped[len(marker):].rstrip("\r\n")
		directive = parse_directive(
			text,
			loc=Located(line=lineno, column=indent + 1),
			marker=marker,
			path=path,
		)
		if isinstance(directive, ImportDirective):
			parsed.imports.append(directive)
		else:
			parsed.exports.append(directive)
	parsed.body = "".join(body)
	return parsed


__all__ = ["DEFAULT_MARKER", "parse", "parse_directive", "split_lines"]
