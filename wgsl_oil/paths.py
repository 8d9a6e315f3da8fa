# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Module reference resolution.

A module reference is the string written in an import directive. Relative
references (`lib`, `./lib.wgsl`, `../common/noise`) resolve against the
directory of the importing module; rooted references (`/shaders/lib`) resolve
against the project root. The result is the canonical absolute path of the
file, which is the module's identity in the graph.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import UnresolvedPath

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".wgsl"

ModuleId = Path


def module_id(path: Path | str) -> ModuleId:
	"""Canonical identity of a file (absolute, symlinks followed)."""
	return Path(path).expanduser().resolve()


def _is_within(path: Path, root: Path) -> bool:
	try:
		path.relative_to(root)
	except ValueError:
		return False
	return True


def resolve(
	base: ModuleId,
	reference: str,
	*,
	project_root: Path | None = None,
	extension: str = DEFAULT_EXTENSION,
) -> ModuleId:
	"""
	Resolve `reference` as written in module `base` to a module id.

	Raises `UnresolvedPath` if no such file exists, if a rooted reference is
	used without a project root, or if the target escapes the project root.
	"""
	if not reference:
		raise UnresolvedPath("empty module reference", reference=reference)
	root = module_id(project_root) if project_root is not None else None

	if reference.startswith("/"):
		if root is None:
			raise UnresolvedPath(
				f"rooted module reference '{reference}' requires a project root",
				reference=reference,
			)
		candidate = root / reference.lstrip("/")
	else:
		candidate = Path(base).parent / reference

	candidates = [candidate]
	if not candidate.suffix and extension:
		candidates.append(candidate.with_name(candidate.name + extension))

	for cand in candidates:
		if not cand.is_file():
			continue
		resolved = module_id(cand)
		if root is not None and not _is_within(resolved, root):
			raise UnresolvedPath(
				f"module reference '{reference}' escapes the project root {root}",
				reference=reference,
			)
		logger.debug("resolved '%s' from %s to %s", reference, base, resolved)
		return resolved

	tried = ", ".join(str(c) for c in candidates)
	raise UnresolvedPath(
		f"cannot resolve module reference '{reference}' (tried {tried})",
		reference=reference,
	)


__all__ = ["ModuleId", "DEFAULT_EXTENSION", "module_id", "resolve"]
