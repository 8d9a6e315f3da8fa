# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source span representation used by diagnostics.

A span points into one shader module on disk. Columns and lines are 1-based;
`None` means the location is unknown (for example a checker failure that
reported no position).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source location (best-effort file/line/column)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None

	@classmethod
	def in_file(cls, path: Path | str | None, loc: Any = None) -> "Span":
		"""
		Anchor a parser location object to a specific module file.

		Directive locations do not carry a filename; for multi-module builds
		the file has to be explicit so diagnostics point at the right origin.
		"""
		file = str(path) if path is not None else None
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			return loc if loc.file is not None else cls(file=file, line=loc.line, column=loc.column)
		return cls(
			file=file,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
		)

	def short(self) -> str:
		"""Format as `file:line:column`, with `?` for unknown parts."""
		f = self.file or "<unknown>"
		l = self.line if self.line is not None else "?"
		c = self.column if self.column is not None else "?"
		return f"{f}:{l}:{c}"


__all__ = ["Span"]
