# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
wgsl_oil: build-time WGSL module loader.

Shader source split across files with `#import` / `#export` directives is
resolved into one validated unit and handed back as declarations. The entry
point for hosts is `resolve_and_emit` (or `include_shader`, which raises on
failure); the pipeline stages live in their own modules:

  paths     module reference -> module id
  parser    directive lines -> imports/exports + stripped body
  graph     recursive import graph with cycle detection
  flatten   dependency-ordered, deduplicated merged text
  validate  visibility checks and optional external checker
  emit      declarations for the host
"""

from .config import LoaderConfig, WildcardPolicy
from .core import Diagnostic, Span
from .emit import Declaration, render_python
from .errors import (
	CheckerUnavailable,
	ImportCycle,
	MalformedDirective,
	ShaderLoadError,
	UnresolvedPath,
	WgslOilError,
)
from .loader import LoadResult, include_shader, resolve_and_emit

__all__ = [
	"CheckerUnavailable",
	"Declaration",
	"Diagnostic",
	"ImportCycle",
	"LoadResult",
	"LoaderConfig",
	"MalformedDirective",
	"ShaderLoadError",
	"Span",
	"UnresolvedPath",
	"WgslOilError",
	"WildcardPolicy",
	"include_shader",
	"render_python",
	"resolve_and_emit",
]
