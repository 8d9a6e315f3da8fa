# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Merge a module graph into one unit of shader text.

Modules are emitted dependencies-first (post-order from the root, following
imports in source order) and each module body appears exactly once. The
shader's global namespace is left untouched: nothing is renamed or scoped, so
cross-module name clashes stay the author's responsibility. Alongside the
text, the unit records where every merged line came from and which symbols
each import can see; the validator uses both for diagnostics.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from .core.span import Span
from .graph import ModuleGraph, ModuleNode
from .parser import split_lines
from .paths import ModuleId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportBinding:
	"""
	What one import directive asked for and what its target exports.

	`visible` is the requested subset the target actually exports (the target's
	whole export set for a wildcard import).
	"""

	importer: ModuleId
	target: ModuleId
	requested: Tuple[str, ...]
	visible: frozenset[str]
	wildcard: bool
	span: Span

	@property
	def missing(self) -> Tuple[str, ...]:
		return tuple(name for name in self.requested if name not in self.visible)


@dataclass
class FlattenedUnit:
	text: str
	modules: Tuple[ModuleNode, ...]
	origins: Dict[str, ModuleId] = field(default_factory=dict)
	exporters: Dict[str, List[ModuleId]] = field(default_factory=dict)
	bindings: List[ImportBinding] = field(default_factory=list)
	# Per merged line: start offset in `text` and (module, original line).
	line_starts: List[int] = field(default_factory=list)
	line_origins: List[Tuple[ModuleId, int]] = field(default_factory=list)

	@property
	def root(self) -> ModuleId:
		return self.modules[-1].id

	def module(self, mid: ModuleId) -> ModuleNode:
		for node in self.modules:
			if node.id == mid:
				return node
		raise KeyError(mid)

	def locate_line(self, line: int, column: int | None = None) -> Span:
		"""Map a 1-based line (and column) of `text` back to its module."""
		if not 1 <= line <= len(self.line_origins):
			return Span()
		mid, original = self.line_origins[line - 1]
		return Span(file=str(mid), line=original, column=column)

	def locate(self, offset: int) -> Span:
		"""Map a character offset into `text` back to its module, line and column."""
		if not self.line_starts or not 0 <= offset <= len(self.text):
			return Span()
		idx = bisect.bisect_right(self.line_starts, offset) - 1
		if idx < 0:
			return Span()
		return self.locate_line(idx + 1, offset - self.line_starts[idx] + 1)


def topological_order(graph: ModuleGraph) -> List[ModuleId]:
	"""Dependencies before dependents; the root comes last."""
	order: List[ModuleId] = []
	seen: set[ModuleId] = {graph.root}
	frames: List[Tuple[ModuleId, Iterator[ModuleId]]] = [(graph.root, iter(graph.edges(graph.root)))]
	while frames:
		mid, deps = frames[-1]
		dep = next(deps, None)
		if dep is None:
			frames.pop()
			order.append(mid)
		elif dep not in seen:
			seen.add(dep)
			frames.append((dep, iter(graph.edges(dep))))
	return order


def flatten(graph: ModuleGraph) -> FlattenedUnit:
	order = topological_order(graph)
	logger.debug("flatten order: %s", ", ".join(str(m) for m in order))
	unit = FlattenedUnit(text="", modules=tuple(graph[mid] for mid in order))

	parts: List[str] = []
	offset = 0
	for node in unit.modules:
		body = node.body
		if body and not body.endswith("\n"):
			body += "\n"
		parts.append(body)
		for idx, line in enumerate(split_lines(body)):
			unit.line_starts.append(offset)
			unit.line_origins.append((node.id, node.line_map[idx]))
			offset += len(line)

		for name in sorted(node.exports):
			unit.exporters.setdefault(name, []).append(node.id)
			unit.origins.setdefault(name, node.id)

		for imp in node.import_directives:
			target = graph[node.target_of(imp)]
			exported = target.exports
			if imp.wildcard:
				visible = exported
			else:
				visible = frozenset(name for name in imp.symbols if name in exported)
			unit.bindings.append(
				ImportBinding(
					importer=node.id,
					target=target.id,
					requested=imp.symbols,
					visible=visible,
					wildcard=imp.wildcard,
					span=node.span_at(imp.loc),
				)
			)

	unit.text = "".join(parts)
	return unit


__all__ = ["FlattenedUnit", "ImportBinding", "flatten", "topological_order"]
