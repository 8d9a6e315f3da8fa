# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declarations handed back to the host.

The one required declaration is `SOURCE`, the merged shader text verbatim.
With reflection enabled, entry points and resource bindings found in the text
are exposed as well, so host code can refer to them by constant instead of by
string. Reflection only pattern-matches attribute lines; it is not a parser.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List

from .validate import ValidationResult

logger = logging.getLogger(__name__)

SOURCE_NAME = "SOURCE"
BINDING_PREFIX = "BINDING_"

_ENTRY_RE = re.compile(r"@(?P<stage>vertex|fragment|compute)\b[^;{]*?\bfn\s+(?P<name>[A-Za-z_][A-Za-z0-9_]*)")
_BINDING_RE = re.compile(
	r"@group\(\s*(?P<group>\d+)\s*\)\s*@binding\(\s*(?P<binding>\d+)\s*\)"
	r"\s*var(?:\s*<[^>]*>)?\s+(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
)


@dataclass(frozen=True)
class Declaration:
	kind: str  # "source" | "entry_point" | "binding"
	name: str
	value: Any


def blank_comments(text: str) -> str:
	"""
	Replace `//` and (nestable) `/* */` comments with spaces.

	Newlines are kept, so offsets and line numbers are unchanged.
	"""
	out = list(text)
	i, n, depth = 0, len(text), 0
	while i < n:
		pair = text[i:i + 2]
		if depth == 0 and pair == "//":
			while i < n and text[i] != "\n":
				out[i] = " "
				i += 1
			continue
		if pair == "/*":
			depth += 1
			out[i] = out[i + 1] = " "
			i += 2
			continue
		if depth and pair == "*/":
			depth -= 1
			out[i] = out[i + 1] = " "
			i += 2
			continue
		if depth and text[i] != "\n":
			out[i] = " "
		i += 1
	return "".join(out)


def reflect(text: str) -> List[Declaration]:
	"""
	Entry points as `<STAGE>_<FN>` and bindings as `BINDING_<VAR>`, upper-cased.
	Commented-out code is ignored.
	"""
	code = blank_comments(text)
	decls: List[Declaration] = []
	for m in _ENTRY_RE.finditer(code):
		name = m.group("name")
		decls.append(Declaration("entry_point", f"{m.group('stage')}_{name}".upper(), name))
	for m in _BINDING_RE.finditer(code):
		decls.append(
			Declaration(
				"binding",
				BINDING_PREFIX + m.group("name").upper(),
				(int(m.group("group")), int(m.group("binding"))),
			)
		)
	return decls


def emit(result: ValidationResult, *, with_reflection: bool = True) -> List[Declaration]:
	"""
	Declarations for a validated unit; empty when validation failed.

	`SOURCE` is always first and never shadowed: a reflected declaration whose
	name is already taken is dropped.
	"""
	if not result.ok or result.unit is None:
		return []
	text = result.unit.text
	decls = [Declaration("source", SOURCE_NAME, text)]
	if with_reflection:
		taken = {SOURCE_NAME}
		for decl in reflect(text):
			if decl.name in taken:
				logger.warning("dropping reflected %s '%s': name already declared", decl.kind, decl.name)
				continue
			taken.add(decl.name)
			decls.append(decl)
	return decls


def as_namespace(declarations: List[Declaration]) -> Dict[str, Any]:
	return {d.name: d.value for d in declarations}


def render_python(declarations: List[Declaration]) -> str:
	"""Render declarations as assignments for a generated Python module."""
	lines = ["# Generated by wgsl_oil; do not edit.", ""]
	for d in declarations:
		lines.append(f"{d.name} = {d.value!r}")
	return "\n".join(lines) + "\n"


__all__ = [
	"Declaration",
	"SOURCE_NAME",
	"BINDING_PREFIX",
	"as_namespace",
	"blank_comments",
	"emit",
	"reflect",
	"render_python",
]
