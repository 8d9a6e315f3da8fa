# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Loader exceptions.

Graph construction is fatal on the first error: a missing file, a malformed
directive or an import cycle aborts the invocation. These exceptions carry a
best-effort span so the loader facade can convert them into structured
diagnostics instead of crashing the host build.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .core import diagnostics as codes
from .core.diagnostics import Diagnostic
from .core.span import Span


class WgslOilError(ValueError):
	"""Base class for every error raised by the loader."""

	code: str | None = None

	def __init__(self, message: str, *, span: Span | None = None) -> None:
		super().__init__(message)
		self.message = message
		self.span = span or Span()

	def to_diagnostic(self) -> Diagnostic:
		return Diagnostic(message=self.message, code=self.code, severity="error", span=self.span)


class UnresolvedPath(WgslOilError):
	"""
	A module reference that names no readable file, or a file outside the
	permitted project root.
	"""

	code = codes.UNRESOLVED_PATH

	def __init__(self, message: str, *, reference: str, span: Span | None = None) -> None:
		super().__init__(message, span=span)
		self.reference = reference

	def at(self, span: Span) -> "UnresolvedPath":
		"""Return a copy pinned to the import site that triggered the lookup."""
		return UnresolvedPath(self.message, reference=self.reference, span=span)


class MalformedDirective(WgslOilError):
	"""A marker line that does not follow the import/export grammar."""

	code = codes.MALFORMED_DIRECTIVE


class ImportCycle(WgslOilError):
	"""
	An import chain that leads back to a module still being loaded.

	`cycle` lists module ids along the chain with the first element repeated at
	the end (`[a, b, a]`; a self-import is `[a, a]`).
	"""

	code = codes.IMPORT_CYCLE

	def __init__(self, cycle: Sequence[Path], *, span: Span | None = None) -> None:
		self.cycle = list(cycle)
		super().__init__(
			f"import cycle detected: {' -> '.join(str(p) for p in self.cycle)}",
			span=span,
		)

	def to_diagnostic(self) -> Diagnostic:
		diag = super().to_diagnostic()
		diag.notes = [f"{a} imports {b}" for a, b in zip(self.cycle, self.cycle[1:])]
		return diag


class CheckerUnavailable(WgslOilError):
	"""The external shading-language checker could not be run."""

	code = codes.UNDERLYING_LANGUAGE_ERROR


class ShaderLoadError(WgslOilError):
	"""Raised by `include_shader` when an invocation produced diagnostics."""

	def __init__(self, diagnostics: list[Diagnostic]) -> None:
		self.diagnostics = list(diagnostics)
		lines = [d.format() for d in self.diagnostics]
		super().__init__("shader module failed to load:\n" + "\n".join(lines))


__all__ = [
	"WgslOilError",
	"UnresolvedPath",
	"MalformedDirective",
	"ImportCycle",
	"CheckerUnavailable",
	"ShaderLoadError",
]
