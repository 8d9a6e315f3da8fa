# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from wgsl_oil.config import LoaderConfig
from wgsl_oil.errors import ImportCycle, MalformedDirective, UnresolvedPath
from wgsl_oil.graph import build
from wgsl_oil.paths import module_id
from wgsl_oil.source import CachedSourceReader, read_source


def _write_module(root: Path, rel: str, src: str) -> Path:
	path = root / rel
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(src)
	return path


def _diamond(root: Path) -> dict[str, Path]:
	return {
		"a": _write_module(root, "a.wgsl", '#import "b"\n#import "c"\nfn a() {}\n'),
		"b": _write_module(root, "b.wgsl", '#import "d" { d }\nfn b() {}\n'),
		"c": _write_module(root, "c.wgsl", '#import "d" { d }\nfn c() {}\n'),
		"d": _write_module(root, "d.wgsl", "#export { d }\nfn d() {}\n"),
	}


def test_diamond_builds_each_module_once(tmp_path: Path) -> None:
	mods = _diamond(tmp_path)
	reads: list[Path] = []

	def counting_reader(mid: Path):
		reads.append(mid)
		return read_source(mid)

	graph = build(mods["a"], reader=counting_reader)
	assert len(graph) == 4
	assert reads.count(module_id(mods["d"])) == 1
	assert graph.root == module_id(mods["a"])
	assert graph.edges(graph.root) == [module_id(mods["b"]), module_id(mods["c"])]


def test_node_records_directives_and_resolution(tmp_path: Path) -> None:
	mods = _diamond(tmp_path)
	graph = build(mods["a"])
	b = graph[module_id(mods["b"])]
	assert b.imports == ["d"]
	assert b.resolved == {"d": module_id(mods["d"])}
	assert b.body == "fn b() {}\n"
	assert graph[module_id(mods["d"])].exports == frozenset({"d"})


def test_repeated_import_of_same_module_is_one_edge(tmp_path: Path) -> None:
	a = _write_module(tmp_path, "a.wgsl", '#import "lib" { x }\n#import "lib.wgsl" { y }\n')
	lib = _write_module(tmp_path, "lib.wgsl", "#export { x, y }\n")
	graph = build(a)
	assert graph.edges(graph.root) == [module_id(lib)]


def test_two_node_cycle(tmp_path: Path) -> None:
	a = _write_module(tmp_path, "a.wgsl", '#import "b"\n')
	b = _write_module(tmp_path, "b.wgsl", 'fn b() {}\n#import "a"\n')
	with pytest.raises(ImportCycle) as info:
		build(a)
	err = info.value
	assert err.cycle == [module_id(a), module_id(b), module_id(a)]
	assert err.span.file == str(module_id(b))
	assert err.span.line == 2


def test_self_import_is_a_cycle(tmp_path: Path) -> None:
	a = _write_module(tmp_path, "a.wgsl", '#import "a"\n')
	with pytest.raises(ImportCycle) as info:
		build(a)
	assert info.value.cycle == [module_id(a), module_id(a)]


def test_cycle_below_root_reports_only_the_cycle(tmp_path: Path) -> None:
	a = _write_module(tmp_path, "a.wgsl", '#import "b"\n')
	b = _write_module(tmp_path, "b.wgsl", '#import "c"\n')
	c = _write_module(tmp_path, "c.wgsl", '#import "b"\n')
	with pytest.raises(ImportCycle) as info:
		build(a)
	assert info.value.cycle == [module_id(b), module_id(c), module_id(b)]
	assert module_id(a) not in info.value.cycle


def test_unresolved_import_points_at_directive(tmp_path: Path) -> None:
	a = _write_module(tmp_path, "a.wgsl", 'fn a() {}\n\n#import "missing" { m }\n')
	with pytest.raises(UnresolvedPath) as info:
		build(a)
	err = info.value
	assert err.reference == "missing"
	assert err.span.file == str(module_id(a))
	assert err.span.line == 3


def test_malformed_directive_in_imported_module(tmp_path: Path) -> None:
	a = _write_module(tmp_path, "a.wgsl", '#import "b"\n')
	b = _write_module(tmp_path, "b.wgsl", "fn b() {}\n#export b\n")
	with pytest.raises(MalformedDirective) as info:
		build(a)
	assert info.value.span.file == str(module_id(b))
	assert info.value.span.line == 2


def test_missing_root(tmp_path: Path) -> None:
	with pytest.raises(UnresolvedPath):
		build(tmp_path / "nope.wgsl")


def test_rooted_import_in_nested_module(tmp_path: Path) -> None:
	proj = tmp_path / "proj"
	a = _write_module(proj, "deep/a.wgsl", '#import "/common/util" { u }\n')
	util = _write_module(proj, "common/util.wgsl", "#export { u }\nfn u() {}\n")
	graph = build(a, project_root=proj)
	assert module_id(util) in graph


def test_cached_reader_is_filled_and_reused(tmp_path: Path) -> None:
	mods = _diamond(tmp_path)
	cache = CachedSourceReader()
	build(mods["a"], reader=cache)
	assert len(cache) == 4
	assert (cache.hits, cache.misses) == (0, 4)
	build(mods["a"], reader=cache)
	assert (cache.hits, cache.misses) == (4, 4)


def test_cycle_at_end_of_deep_chain(tmp_path: Path) -> None:
	depth = 1500
	for i in range(depth):
		_write_module(tmp_path, f"m{i}.wgsl", f'#import "m{i + 1}"\n')
	_write_module(tmp_path, f"m{depth}.wgsl", f'#import "m{depth - 1}"\n')
	with pytest.raises(ImportCycle) as info:
		build(tmp_path / "m0.wgsl")
	assert info.value.cycle == [
		module_id(tmp_path / f"m{depth - 1}.wgsl"),
		module_id(tmp_path / f"m{depth}.wgsl"),
		module_id(tmp_path / f"m{depth - 1}.wgsl"),
	]


def test_config_supplies_marker_extension_and_root(tmp_path: Path) -> None:
	proj = tmp_path / "proj"
	a = _write_module(proj, "a.shader", '//! import "/lib" { u }\nfn a() {}\n')
	lib = _write_module(proj, "lib.shader", "//! export { u }\nfn u() {}\n")
	config = LoaderConfig(project_root=proj, extension=".shader", marker="//!")
	graph = build(a, config=config)
	assert graph.edges(graph.root) == [module_id(lib)]
	assert graph[module_id(lib)].exports == frozenset({"u"})


def test_explicit_project_root_overrides_config(tmp_path: Path) -> None:
	proj = tmp_path / "proj"
	a = _write_module(proj, "a.wgsl", '#import "/lib"\n')
	_write_module(proj, "lib.wgsl", "fn u() {}\n")
	config = LoaderConfig(project_root=tmp_path / "elsewhere")
	graph = build(a, project_root=proj, config=config)
	assert len(graph) == 2
