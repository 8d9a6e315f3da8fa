# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Directive parser for shader modules (`#import` / `#export` lines).
"""

from .ast import ExportDirective, ImportDirective, Located, ParsedModule
from .parser import DEFAULT_MARKER, parse, parse_directive, split_lines

__all__ = [
	"DEFAULT_MARKER",
	"ExportDirective",
	"ImportDirective",
	"Located",
	"ParsedModule",
	"parse",
	"parse_directive",
	"split_lines",
]
