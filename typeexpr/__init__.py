# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
typeexpr: parse type expression strings into type values without running code.

Pipeline:
  parser     text -> expression tree (lark grammar)
  evaluator  expression tree -> type value (names, `where`, `<:X`, constants)
  core       the type model, builtin modules and namespaces values resolve into
"""

from typeexpr.errors import (
	MalformedBoundError,
	MalformedQualifiedTypeError,
	NestingDepthError,
	ResultKindError,
	TypeParseError,
	TypeSyntaxError,
	UnresolvedNameError,
	UnsupportedConstructorTargetError,
)
from typeexpr.parse_type import ExpectedKind, ParseOptions, parse
from typeexpr.parser import parse_type_expr

__all__ = [
	"ExpectedKind",
	"MalformedBoundError",
	"MalformedQualifiedTypeError",
	"NestingDepthError",
	"ParseOptions",
	"ResultKindError",
	"TypeParseError",
	"TypeSyntaxError",
	"UnresolvedNameError",
	"UnsupportedConstructorTargetError",
	"parse",
	"parse_type_expr",
]
