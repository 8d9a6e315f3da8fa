# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class Located:
	line: int
	column: int


@dataclass(frozen=True)
class ImportDirective:
	"""
	Module import:

	  #import "lib" { foo, bar }
	  #import "lib" *

	`symbols` is empty when `wildcard` is set.
	"""

	reference: str
	symbols: Tuple[str, ...]
	wildcard: bool
	loc: Located


@dataclass(frozen=True)
class ExportDirective:
	"""
	Module export:

	  #export { foo, bar }
	"""

	symbols: Tuple[str, ...]
	loc: Located


@dataclass
class ParsedModule:
	"""
	Directives of one module plus its directive-stripped body.

	`line_map[i]` is the 1-based line in the original text of body line `i`.
	"""

	imports: List[ImportDirective] = field(default_factory=list)
	exports: List[ExportDirective] = field(default_factory=list)
	body: str = ""
	line_map: List[int] = field(default_factory=list)

	@property
	def references(self) -> List[str]:
		return [imp.reference for imp in self.imports]

	@property
	def exported(self) -> frozenset[str]:
		return frozenset(name for exp in self.exports for name in exp.symbols)
