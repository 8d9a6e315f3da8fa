# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Loader configuration.

Hosts normally build a `LoaderConfig` directly. Build scripts that cannot pass
arguments through can use `LoaderConfig.from_env()`, which reads:

  WGSL_OIL_PROJECT_ROOT     root for `/rooted` references (and the boundary
                            no reference may escape)
  WGSL_OIL_EXTENSION        default module extension (`.wgsl`)
  WGSL_OIL_WILDCARD_POLICY  `suppress` (default) or `strict`
  WGSL_OIL_NAGA             path to a naga executable, or `1` for `naga` on
                            PATH; enables the external checker
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .checkers import Checker, NagaChecker
from .parser import DEFAULT_MARKER
from .paths import DEFAULT_EXTENSION


class WildcardPolicy(enum.Enum):
	"""
	How wildcard imports interact with the undeclared-import check.

	SUPPRESS: a wildcard import is never diagnosed.
	STRICT: a wildcard import from a module that exports nothing is diagnosed.
	"""

	SUPPRESS = "suppress"
	STRICT = "strict"


@dataclass(frozen=True)
class LoaderConfig:
	project_root: Optional[Path] = None
	extension: str = DEFAULT_EXTENSION
	marker: str = DEFAULT_MARKER
	wildcard_policy: WildcardPolicy = WildcardPolicy.SUPPRESS
	checker: Optional[Checker] = None
	reflect: bool = True

	def __post_init__(self) -> None:
		if not self.marker or self.marker.isspace():
			raise ValueError("directive marker must be a non-blank string")
		if self.extension and not self.extension.startswith("."):
			raise ValueError(f"extension must start with '.': {self.extension!r}")

	@classmethod
	def from_env(cls, environ: Mapping[str, str] | None = None) -> "LoaderConfig":
		env = os.environ if environ is None else environ
		root = env.get("WGSL_OIL_PROJECT_ROOT") or None
		policy = env.get("WGSL_OIL_WILDCARD_POLICY", WildcardPolicy.SUPPRESS.value).strip().lower()
		try:
			wildcard_policy = WildcardPolicy(policy)
		except ValueError:
			raise ValueError(
				f"WGSL_OIL_WILDCARD_POLICY must be one of "
				f"{', '.join(p.value for p in WildcardPolicy)}; got {policy!r}"
			) from None
		naga = env.get("WGSL_OIL_NAGA", "").strip()
		checker: Optional[Checker] = None
		if naga:
			checker = NagaChecker() if naga == "1" else NagaChecker(executable=naga)
		return cls(
			project_root=Path(root) if root else None,
			extension=env.get("WGSL_OIL_EXTENSION", DEFAULT_EXTENSION),
			wildcard_policy=wildcard_policy,
			checker=checker,
		)


__all__ = ["LoaderConfig", "WildcardPolicy"]
