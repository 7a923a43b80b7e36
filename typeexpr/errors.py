# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Errors raised while turning a type expression into a type value.

Every error aborts the whole parse: there are no partial results and nothing
is retried. All of them are `ValueError` subclasses carrying a best-effort
location (`loc`, anything with `line`/`column`) and, once the public entry
point has seen them, the `source` text, so front-ends can turn them into a
`Diagnostic` instead of printing a traceback.
"""

from __future__ import annotations

from typing import Any, Optional

from typeexpr.core.diagnostics import Diagnostic
from typeexpr.core.span import Span


class TypeParseError(ValueError):
	"""Base class for type expression failures."""

	code = "E-TYPE"
	phase = "typeparse"

	def __init__(self, message: str, *, loc: Any = None, source: Optional[str] = None) -> None:
		super().__init__(message)
		self.message = message
		self.loc = loc
		self.source = source

	def to_diagnostic(self) -> Diagnostic:
		notes = [f"in type expression: {self.source}"] if self.source is not None else []
		return Diagnostic(
			message=self.message,
			code=self.code,
			phase=self.phase,
			span=Span.from_loc(self.loc, self.source),
			notes=notes,
		)


class TypeSyntaxError(TypeParseError):
	"""The text is not a well-formed type expression."""

	code = "E-TYPE-SYNTAX"
	phase = "parser"


class UnresolvedNameError(TypeParseError):
	"""A name is bound neither in the type-variable scope nor globally."""

	code = "E-TYPE-UNRESOLVED"

	def __init__(self, message: str, *, name: str, loc: Any = None, source: Optional[str] = None) -> None:
		super().__init__(message, loc=loc, source=source)
		self.name = name


class MalformedQualifiedTypeError(TypeParseError):
	"""A node in name position is neither a name nor a dotted access."""

	code = "E-TYPE-QUALIFIED"


class MalformedBoundError(TypeParseError):
	"""A `where` declaration uses an unsupported or mismatched bound form."""

	code = "E-TYPE-BOUND"


class UnsupportedConstructorTargetError(TypeParseError):
	"""A constructor call in type position does not build a fixed-layout constant."""

	code = "E-TYPE-ISBITS"


class ResultKindError(TypeParseError):
	"""The parsed value is not of the kind the caller asked for."""

	code = "E-TYPE-KIND"
	phase = "result"


class NestingDepthError(TypeParseError):
	"""The expression nests deeper than the configured limit."""

	code = "E-TYPE-DEPTH"


__all__ = [
	"MalformedBoundError",
	"MalformedQualifiedTypeError",
	"NestingDepthError",
	"ResultKindError",
	"TypeParseError",
	"TypeSyntaxError",
	"UnresolvedNameError",
	"UnsupportedConstructorTargetError",
]
