# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Module graph construction.

Starting from the root module, every reachable module is read, parsed and its
imports resolved relative to its own location. Each module id is processed
exactly once no matter how many modules import it, so diamond dependencies
produce a single node. The active import path is tracked while descending; an
import that leads back onto it is an import cycle and aborts the build.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from .config import LoaderConfig
from .core.span import Span
from .errors import ImportCycle, UnresolvedPath
from .parser import ExportDirective, ImportDirective, parse
from .paths import ModuleId, module_id, resolve
from .source import ModuleSource, SourceReader, read_source

logger = logging.getLogger(__name__)


@dataclass
class ModuleNode:
	"""
	One loaded module.

	`imports` keeps the references in source order; `resolved` is filled in by
	the builder once each reference has been mapped to a module id.
	"""

	id: ModuleId
	source: ModuleSource
	import_directives: List[ImportDirective]
	export_directives: List[ExportDirective]
	body: str
	line_map: List[int]
	resolved: Dict[str, ModuleId] = field(default_factory=dict)

	@property
	def imports(self) -> List[str]:
		return [imp.reference for imp in self.import_directives]

	@property
	def exports(self) -> frozenset[str]:
		return frozenset(name for exp in self.export_directives for name in exp.symbols)

	def target_of(self, directive: ImportDirective) -> ModuleId:
		return self.resolved[directive.reference]

	def span_at(self, loc) -> Span:
		return Span.in_file(self.id, loc)


@dataclass
class ModuleGraph:
	"""Acyclic import graph rooted at `root`; read-only once built."""

	root: ModuleId
	nodes: Dict[ModuleId, ModuleNode] = field(default_factory=dict)

	def __contains__(self, mid: object) -> bool:
		return mid in self.nodes

	def __getitem__(self, mid: ModuleId) -> ModuleNode:
		return self.nodes[mid]

	def __iter__(self) -> Iterator[ModuleNode]:
		return iter(self.nodes.values())

	def __len__(self) -> int:
		return len(self.nodes)

	def edges(self, mid: ModuleId) -> List[ModuleId]:
		"""Import targets of `mid` in source order, each listed once."""
		node = self.nodes[mid]
		return list(dict.fromkeys(node.target_of(imp) for imp in node.import_directives))


class _GraphBuilder:
	"""
	Depth-first loader with an explicit frame stack.

	Each frame is a module on the active import path plus an iterator over its
	remaining imports, so deep import chains never hit the recursion limit.
	"""

	def __init__(
		self,
		*,
		project_root: Optional[Path],
		reader: SourceReader,
		extension: str,
		marker: str,
	) -> None:
		self.project_root = project_root
		self.reader = reader
		self.extension = extension
		self.marker = marker
		self.nodes: Dict[ModuleId, ModuleNode] = {}
		self.frames: List[Tuple[ModuleNode, Iterator[ImportDirective]]] = []
		self.on_stack: set[ModuleId] = set()

	def load(self, mid: ModuleId) -> ModuleNode:
		source = self.reader(mid)
		parsed = parse(source.text, marker=self.marker, path=mid)
		node = ModuleNode(
			id=mid,
			source=source,
			import_directives=parsed.imports,
			export_directives=parsed.exports,
			body=parsed.body,
			line_map=parsed.line_map,
		)
		logger.debug(
			"loaded %s: %d import(s), exports %s",
			mid,
			len(node.import_directives),
			sorted(node.exports) or "nothing",
		)
		return node

	def enter(self, mid: ModuleId) -> None:
		node = self.load(mid)
		self.nodes[mid] = node
		self.frames.append((node, iter(node.import_directives)))
		self.on_stack.add(mid)

	def target_of(self, node: ModuleNode, imp: ImportDirective) -> ModuleId:
		if imp.reference in node.resolved:
			return node.resolved[imp.reference]
		try:
			target = resolve(node.id, imp.reference, project_root=self.project_root, extension=self.extension)
		except UnresolvedPath as err:
			raise err.at(node.span_at(imp.loc)) from err
		node.resolved[imp.reference] = target
		return target

	def run(self, root: ModuleId) -> None:
		self.enter(root)
		while self.frames:
			node, pending = self.frames[-1]
			imp = next(pending, None)
			if imp is None:
				self.frames.pop()
				self.on_stack.remove(node.id)
				continue
			target = self.target_of(node, imp)
			if target in self.on_stack:
				path = [frame[0].id for frame in self.frames]
				start = path.index(target)
				raise ImportCycle(path[start:] + [target], span=node.span_at(imp.loc))
			if target not in self.nodes:
				self.enter(target)


def build(
	root: Path,
	*,
	project_root: Optional[Path] = None,
	reader: Optional[SourceReader] = None,
	config: Optional[LoaderConfig] = None,
) -> ModuleGraph:
	"""
	Load `root` and everything it transitively imports.

	`config` supplies the project root, default extension and directive
	marker; an explicit `project_root` takes precedence over the config's.
	Raises `UnresolvedPath`, `MalformedDirective` or `ImportCycle`; no partial
	graph is returned on failure.
	"""
	cfg = config or LoaderConfig()
	root_id = module_id(root)
	if not root_id.is_file():
		raise UnresolvedPath(f"root module {root_id} does not exist", reference=str(root), span=Span(file=str(root_id)))
	builder = _GraphBuilder(
		project_root=project_root if project_root is not None else cfg.project_root,
		reader=reader if reader is not None else read_source,
		extension=cfg.extension,
		marker=cfg.marker,
	)
	builder.run(root_id)
	logger.debug("module graph for %s has %d module(s)", root_id, len(builder.nodes))
	return ModuleGraph(root=root_id, nodes=builder.nodes)


__all__ = ["ModuleNode", "ModuleGraph", "build"]
