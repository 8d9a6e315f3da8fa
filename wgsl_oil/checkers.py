# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
External shading-language checkers.

A checker is any callable that takes the merged shader text and returns a list
of `CheckerError`s (empty when the text is valid). Offsets refer to the merged
text; the validator maps them back to the originating module.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from typing import Callable, List, Optional

from .errors import CheckerUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckerError:
	message: str
	offset: Optional[int] = None


Checker = Callable[[str], List[CheckerError]]


def offset_of(text: str, line: int, column: int) -> Optional[int]:
	"""Convert a 1-based line/column of `text` to a character offset."""
	if line < 1:
		return None
	start = 0
	for _ in range(line - 1):
		nl = text.find("\n", start)
		if nl < 0:
			return None
		start = nl + 1
	return min(start + max(column, 1) - 1, len(text))


_ERROR_RE = re.compile(r"^\s*error:\s*(?P<message>.*)$")
_LOCATION_RE = re.compile(r":(?P<line>\d+):(?P<column>\d+)\s*$")


def parse_naga_output(output: str, text: str) -> List[CheckerError]:
	"""
	Extract errors from naga's report.

	naga prints an `error: ...` header followed by a `┌─ file:line:column`
	pointer; the first pointer after a header locates that error.
	"""
	errors: List[CheckerError] = []
	message: Optional[str] = None
	offset: Optional[int] = None
	for raw in output.splitlines():
		m = _ERROR_RE.match(raw)
		if m:
			if message is not None:
				errors.append(CheckerError(message, offset))
			message, offset = m.group("message").strip(), None
			continue
		if message is None or offset is not None or "┌─" not in raw:
			continue
		loc = _LOCATION_RE.search(raw)
		if loc:
			offset = offset_of(text, int(loc.group("line")), int(loc.group("column")))
	if message is not None:
		errors.append(CheckerError(message, offset))
	return errors


class NagaChecker:
	"""Validate WGSL by running the `naga` command-line tool."""

	def __init__(self, executable: str = "naga", *, timeout: float = 60.0) -> None:
		self.executable = executable
		self.timeout = timeout

	def __call__(self, text: str) -> List[CheckerError]:
		exe = shutil.which(self.executable)
		if exe is None:
			raise CheckerUnavailable(f"shader checker '{self.executable}' not found")
		with tempfile.NamedTemporaryFile(suffix=".wgsl", mode="w", encoding="utf-8", delete=True) as f:
			f.write(text)
			f.flush()
			logger.debug("running %s on %s", exe, f.name)
			try:
				result = subprocess.run(
					[exe, f.name],
					capture_output=True,
					text=True,
					timeout=self.timeout,
				)
			except (OSError, subprocess.TimeoutExpired) as err:
				raise CheckerUnavailable(f"shader checker '{self.executable}' failed to run: {err}") from err
		if result.returncode == 0:
			return []
		output = (result.stderr or "") + (result.stdout or "")
		errors = parse_naga_output(output, text)
		if not errors:
			errors = [CheckerError(output.strip() or f"naga exited with status {result.returncode}")]
		return errors


__all__ = ["Checker", "CheckerError", "NagaChecker", "offset_of", "parse_naga_output"]
