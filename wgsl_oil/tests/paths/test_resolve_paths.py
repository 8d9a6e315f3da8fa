# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from wgsl_oil.errors import UnresolvedPath
from wgsl_oil.paths import module_id, resolve


def _touch(root: Path, rel: str) -> Path:
	path = root / rel
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text("")
	return path


def test_relative_reference_adds_default_extension(tmp_path: Path) -> None:
	base = _touch(tmp_path, "main.wgsl")
	lib = _touch(tmp_path, "lib.wgsl")
	assert resolve(module_id(base), "lib") == module_id(lib)


def test_relative_reference_with_suffix(tmp_path: Path) -> None:
	base = _touch(tmp_path, "main.wgsl")
	lib = _touch(tmp_path, "sub/lib.wgsl")
	assert resolve(module_id(base), "./sub/lib.wgsl") == module_id(lib)


def test_parent_directory_reference(tmp_path: Path) -> None:
	base = _touch(tmp_path, "a/b/main.wgsl")
	noise = _touch(tmp_path, "a/common/noise.wgsl")
	assert resolve(module_id(base), "../common/noise") == module_id(noise)


def test_two_spellings_yield_same_id(tmp_path: Path) -> None:
	base = _touch(tmp_path, "main.wgsl")
	_touch(tmp_path, "lib.wgsl")
	(tmp_path / "sub").mkdir()
	assert resolve(module_id(base), "lib") == resolve(module_id(base), "./sub/../lib.wgsl")


def test_directory_is_not_a_module(tmp_path: Path) -> None:
	base = _touch(tmp_path, "main.wgsl")
	(tmp_path / "lib").mkdir()
	lib = _touch(tmp_path, "lib.wgsl")
	assert resolve(module_id(base), "lib") == module_id(lib)


def test_missing_reference(tmp_path: Path) -> None:
	base = _touch(tmp_path, "main.wgsl")
	with pytest.raises(UnresolvedPath) as info:
		resolve(module_id(base), "nope")
	assert info.value.reference == "nope"
	assert "nope" in str(info.value)


def test_empty_reference(tmp_path: Path) -> None:
	base = _touch(tmp_path, "main.wgsl")
	with pytest.raises(UnresolvedPath):
		resolve(module_id(base), "")


def test_rooted_reference_uses_project_root(tmp_path: Path) -> None:
	base = _touch(tmp_path, "proj/deep/dir/main.wgsl")
	lib = _touch(tmp_path, "proj/shaders/lib.wgsl")
	got = resolve(module_id(base), "/shaders/lib", project_root=tmp_path / "proj")
	assert got == module_id(lib)


def test_rooted_reference_without_project_root(tmp_path: Path) -> None:
	base = _touch(tmp_path, "main.wgsl")
	with pytest.raises(UnresolvedPath, match="requires a project root"):
		resolve(module_id(base), "/lib")


def test_reference_escaping_project_root(tmp_path: Path) -> None:
	base = _touch(tmp_path, "proj/main.wgsl")
	_touch(tmp_path, "outside.wgsl")
	with pytest.raises(UnresolvedPath, match="escapes the project root"):
		resolve(module_id(base), "../outside", project_root=tmp_path / "proj")
	# Without a root the same reference is fine.
	assert resolve(module_id(base), "../outside") == module_id(tmp_path / "outside.wgsl")
