# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Loader entry points.

`resolve_and_emit` runs the whole pipeline for one request:

  resolve -> build graph (parse directives) -> flatten -> validate -> emit

and returns either declarations or diagnostics, never both. The caller's own
location is passed in explicitly as `entry_path`; requested module paths are
relative to it, or rooted at the configured project root.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import LoaderConfig
from .core.diagnostics import Diagnostic
from .core.span import Span
from .emit import Declaration, as_namespace, emit
from .errors import ShaderLoadError, WgslOilError
from .flatten import flatten
from .graph import build
from .paths import module_id, resolve
from .source import SourceReader
from .validate import validate

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
	declarations: List[Declaration] = field(default_factory=list)
	diagnostics: List[Diagnostic] = field(default_factory=list)

	@property
	def ok(self) -> bool:
		return bool(self.declarations) and not self.diagnostics


def resolve_and_emit(
	entry_path: Path | str,
	requested_path: str,
	*,
	config: Optional[LoaderConfig] = None,
	reader: Optional[SourceReader] = None,
) -> LoadResult:
	"""
	Load the module `requested_path` as seen from `entry_path`.

	Graph-phase failures (missing files, malformed directives, cycles) arrive
	as a single diagnostic; validation failures as the full collected set.
	"""
	cfg = config or LoaderConfig()
	entry = module_id(entry_path)
	try:
		root = resolve(entry, requested_path, project_root=cfg.project_root, extension=cfg.extension)
		graph = build(root, reader=reader, config=cfg)
	except WgslOilError as err:
		if err.span.file is None:
			err.span = Span(file=str(entry))
		logger.debug("loading '%s' from %s failed: %s", requested_path, entry, err)
		return LoadResult(diagnostics=[err.to_diagnostic()])

	unit = flatten(graph)
	result = validate(unit, checker=cfg.checker, wildcard_policy=cfg.wildcard_policy)
	if not result.ok:
		return LoadResult(diagnostics=result.diagnostics)
	declarations = emit(result, with_reflection=cfg.reflect)
	logger.info(
		"loaded shader '%s' from %s: %d module(s), %d declaration(s)",
		requested_path,
		entry,
		len(graph),
		len(declarations),
	)
	return LoadResult(declarations=declarations)


def include_shader(
	entry_path: Path | str,
	requested_path: str,
	*,
	config: Optional[LoaderConfig] = None,
	reader: Optional[SourceReader] = None,
) -> Dict[str, Any]:
	"""
	Load a shader and return its declarations as a name -> value mapping.

	Raises `ShaderLoadError` listing every diagnostic when loading fails.
	"""
	result = resolve_and_emit(entry_path, requested_path, config=config, reader=reader)
	if not result.ok:
		raise ShaderLoadError(result.diagnostics)
	return as_namespace(result.declarations)


__all__ = ["LoadResult", "resolve_and_emit", "include_shader"]
