# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Public entry point: text in, type value out.

	parse(ExpectedKind.ANY, "Array{Int,2}")        -> Array{Int64, 2}
	parse(UnionAll, "Vector{<:Number}")            -> Array{<:Number, 1}
	parse(None, "Val{10}()")                       -> Val{10}()

`expected` constrains what may come back: `None`/`ExpectedKind.ANY` accepts
any value (types, constants, literals, modules), `ExpectedKind.TYPE` requires
a type, and a type-model class (`DataType`, `UnionAll`, `TypeVar`, ...)
requires an instance of it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from typeexpr.core.namespace import Namespace, default_namespace
from typeexpr.core.types_core import is_type, show_value
from typeexpr.errors import ResultKindError, TypeParseError
from typeexpr.evaluator import TypeEvaluator
from typeexpr.parser import parse_type_expr

logger = logging.getLogger(__name__)


class ExpectedKind(Enum):
	ANY = "any"
	TYPE = "type"


@dataclass(frozen=True)
class ParseOptions:
	"""Per-call knobs. `max_depth=None` leaves nesting unlimited."""

	max_depth: Optional[int] = None


def _check_expected(expected: Any, value: Any) -> None:
	if expected is None or expected is ExpectedKind.ANY:
		return
	if expected is ExpectedKind.TYPE:
		if not is_type(value):
			raise ResultKindError(f"expected a type, got `{show_value(value)}`")
		return
	if isinstance(expected, type):
		if not isinstance(value, expected):
			raise ResultKindError(
				f"expected a {expected.__name__}, got `{show_value(value)}` ({type(value).__name__})"
			)
		return
	raise TypeError(f"unsupported expected kind: {expected!r}")


def parse(
	expected: Any,
	source: str,
	*,
	namespace: Optional[Namespace] = None,
	options: Optional[ParseOptions] = None,
) -> Any:
	"""
	Parse `source` into a type value.

	Raises a TypeParseError subclass (with `source` filled in) for syntax,
	resolution, bound, constructor and result-kind failures; errors from the
	type model itself (TypeSystemError) propagate unchanged.
	"""
	options = options or ParseOptions()
	namespace = namespace if namespace is not None else default_namespace()
	try:
		tree = parse_type_expr(source)
		value = TypeEvaluator(namespace, max_depth=options.max_depth).evaluate(tree)
		_check_expected(expected, value)
	except TypeParseError as exc:
		if exc.source is None:
			exc.source = source
		logger.debug("failed to parse `%s`: %s", source, exc)
		raise
	logger.debug("parsed `%s` -> %s", source, show_value(value))
	return value


__all__ = ["ExpectedKind", "ParseOptions", "parse"]
