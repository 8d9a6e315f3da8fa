# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Reading module text from disk.

The graph builder reads through a `SourceReader` callable. The default reads
the file every time; a host that runs many invocations in one process can pass
a `CachedSourceReader`, which it owns, to skip re-reading unchanged files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Tuple

from .errors import UnresolvedPath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModuleSource:
	"""Raw text of one module as read at load time."""

	id: Path
	text: str


SourceReader = Callable[[Path], ModuleSource]


def read_source(module_id: Path) -> ModuleSource:
	"""Read a module as UTF-8 text."""
	try:
		text = module_id.read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as err:
		raise UnresolvedPath(f"cannot read module {module_id}: {err}", reference=str(module_id)) from err
	logger.debug("read %s (%d bytes)", module_id, len(text))
	return ModuleSource(id=module_id, text=text)


class CachedSourceReader:
	"""
	Read cache keyed by module id and modification time.

	A file whose `st_mtime_ns` changed since it was cached is read again.
	"""

	def __init__(self, reader: SourceReader = read_source) -> None:
		self._reader = reader
		self._entries: Dict[Path, Tuple[int, ModuleSource]] = {}
		self.hits = 0
		self.misses = 0

	def __call__(self, module_id: Path) -> ModuleSource:
		try:
			mtime = module_id.stat().st_mtime_ns
		except OSError as err:
			raise UnresolvedPath(f"cannot stat module {module_id}: {err}", reference=str(module_id)) from err
		entry = self._entries.get(module_id)
		if entry is not None and entry[0] == mtime:
			self.hits += 1
			return entry[1]
		self.misses += 1
		source = self._reader(module_id)
		self._entries[module_id] = (mtime, source)
		return source

	def clear(self) -> None:
		self._entries.clear()

	def __len__(self) -> int:
		return len(self._entries)


__all__ = ["ModuleSource", "SourceReader", "read_source", "CachedSourceReader"]
