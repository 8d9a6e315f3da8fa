# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the loader pipeline.

Every failure the loader detects ends up as one of these, whether it was raised
while building the module graph or collected by the validator.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .span import Span

UNRESOLVED_PATH = "UnresolvedPath"
MALFORMED_DIRECTIVE = "MalformedDirective"
IMPORT_CYCLE = "ImportCycle"
DUPLICATE_EXPORT = "DuplicateExport"
UNDECLARED_IMPORT = "UndeclaredImport"
UNDERLYING_LANGUAGE_ERROR = "UnderlyingLanguageError"


@dataclass
class Diagnostic:
	"""Represents a loader diagnostic (error or note)."""

	message: str
	code: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	@property
	def is_error(self) -> bool:
		return self.severity == "error"

	def format(self) -> str:
		"""Human-readable one-liner (`file:line:column: severity[code]: message`)."""
		label = self.severity if self.code is None else f"{self.severity}[{self.code}]"
		text = f"{self.span.short()}: {label}: {self.message}"
		for note in self.notes:
			text += f"\n  note: {note}"
		return text

	def to_json(self) -> dict:
		"""Render to a structured JSON-friendly dict."""
		return {
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}


def has_errors(diagnostics: list[Diagnostic]) -> bool:
	return any(d.is_error for d in diagnostics)


__all__ = [
	"Diagnostic",
	"has_errors",
	"UNRESOLVED_PATH",
	"MALFORMED_DIRECTIVE",
	"IMPORT_CYCLE",
	"DUPLICATE_EXPORT",
	"UNDECLARED_IMPORT",
	"UNDERLYING_LANGUAGE_ERROR",
]
