# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Validation of a flattened unit.

All checks run and every finding is collected; a unit is valid only when no
error diagnostic was produced:

- DuplicateExport: one identifier exported by two different modules.
- UndeclaredImport: a named import the target module does not export.
- UnderlyingLanguageError: a failure reported by the optional external
  checker, mapped back to the module/line it came from.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .checkers import Checker
from .config import WildcardPolicy
from .core import diagnostics as codes
from .core.diagnostics import Diagnostic, has_errors
from .core.span import Span
from .errors import CheckerUnavailable
from .flatten import FlattenedUnit

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
	unit: Optional[FlattenedUnit] = None
	diagnostics: List[Diagnostic] = field(default_factory=list)

	@property
	def ok(self) -> bool:
		return self.unit is not None and not has_errors(self.diagnostics)


def _export_span(unit: FlattenedUnit, mid, name: str) -> Span:
	node = unit.module(mid)
	for exp in node.export_directives:
		if name in exp.symbols:
			return node.span_at(exp.loc)
	return Span(file=str(mid))


def check_duplicate_exports(unit: FlattenedUnit) -> List[Diagnostic]:
	"""
	One error per extra exporter, pinned to the later export (in flatten
	order), plus a note pinned to the first.
	"""
	diagnostics: List[Diagnostic] = []
	for name in sorted(unit.exporters):
		mids = unit.exporters[name]
		if len(mids) < 2:
			continue
		first = _export_span(unit, mids[0], name)
		for other in mids[1:]:
			span = _export_span(unit, other, name)
			diagnostics.append(
				Diagnostic(
					message=f"'{name}' is exported by both {mids[0]} and {other}",
					code=codes.DUPLICATE_EXPORT,
					span=span,
					notes=[f"first exported at {first.short()}", f"exported again at {span.short()}"],
				)
			)
			diagnostics.append(
				Diagnostic(
					message=f"previous export of '{name}' is here",
					code=codes.DUPLICATE_EXPORT,
					severity="note",
					span=first,
				)
			)
	return diagnostics


def check_imports(unit: FlattenedUnit, policy: WildcardPolicy = WildcardPolicy.SUPPRESS) -> List[Diagnostic]:
	diagnostics: List[Diagnostic] = []
	for binding in unit.bindings:
		if binding.wildcard:
			if policy is WildcardPolicy.STRICT and not binding.visible:
				diagnostics.append(
					Diagnostic(
						message=f"wildcard import from {binding.target} matches nothing: module exports no symbols",
						code=codes.UNDECLARED_IMPORT,
						span=binding.span,
					)
				)
			continue
		for name in binding.missing:
			target = unit.module(binding.target)
			exported = ", ".join(sorted(target.exports)) or "nothing"
			diagnostics.append(
				Diagnostic(
					message=f"'{name}' is not exported by {binding.target}",
					code=codes.UNDECLARED_IMPORT,
					span=binding.span,
					notes=[f"{binding.target} exports: {exported}"],
				)
			)
	return diagnostics


def check_language(unit: FlattenedUnit, checker: Checker) -> List[Diagnostic]:
	try:
		errors = checker(unit.text)
	except CheckerUnavailable as err:
		return [err.to_diagnostic()]
	diagnostics: List[Diagnostic] = []
	for error in errors:
		span = unit.locate(error.offset) if error.offset is not None else Span()
		diagnostics.append(
			Diagnostic(message=error.message, code=codes.UNDERLYING_LANGUAGE_ERROR, span=span)
		)
	return diagnostics


def validate(
	unit: FlattenedUnit,
	*,
	checker: Optional[Checker] = None,
	wildcard_policy: WildcardPolicy = WildcardPolicy.SUPPRESS,
) -> ValidationResult:
	diagnostics: List[Diagnostic] = []
	diagnostics.extend(check_duplicate_exports(unit))
	diagnostics.extend(check_imports(unit, wildcard_policy))
	if checker is not None:
		diagnostics.extend(check_language(unit, checker))
	if has_errors(diagnostics):
		logger.debug("validation of %s failed with %d diagnostic(s)", unit.root, len(diagnostics))
		return ValidationResult(unit=None, diagnostics=diagnostics)
	return ValidationResult(unit=unit, diagnostics=diagnostics)


__all__ = [
	"ValidationResult",
	"validate",
	"check_duplicate_exports",
	"check_imports",
	"check_language",
]
