# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type-variable declarations: `where` clause entries and anonymous `<:X`
parameters.

Accepted declaration forms:

	T                 no bounds
	T <: U            upper bound
	L >: T            lower bound
	L <: T <: U       both bounds
	U >: T >: L       both bounds, written the other way round

Bounds are evaluated in the scope *enclosing* the declaration, so a variable
never appears in its own bounds; earlier variables of the same `where` are
visible because the caller extends the scope between declarations.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import TYPE_CHECKING

from typeexpr.core.types_core import TypeVar
from typeexpr.errors import MalformedBoundError
from typeexpr.parser.ast import Comparison, Expr, Name, Restriction, unparse
from typeexpr.scope import TypeVarScope

if TYPE_CHECKING:
	from typeexpr.evaluator import TypeEvaluator

logger = logging.getLogger(__name__)

# Anonymous variables are named `#s<n>`; the counter is shared by every parse
# in the process so no two anonymous variables ever share a name.
_ANON_IDS = itertools.count(1)
_ANON_LOCK = threading.Lock()


def anonymous_type_var_name() -> str:
	with _ANON_LOCK:
		return f"#s{next(_ANON_IDS)}"


def implicit_type_var(node: Restriction, scope: TypeVarScope, evaluator: "TypeEvaluator") -> TypeVar:
	"""Anonymous variable for a bare `<:X` (upper bound) or `>:X` (lower bound) parameter."""
	bound = evaluator.evaluate(node.bound, scope)
	name = anonymous_type_var_name()
	logger.debug("synthesized anonymous type variable %s from `%s`", name, unparse(node))
	if node.op == "<:":
		return TypeVar(name, ub=bound)
	return TypeVar(name, lb=bound)


def _var_name(node: Expr, decl: Expr) -> str:
	if not isinstance(node, Name):
		raise MalformedBoundError(
			f'invalid bounds in "where": `{unparse(decl)}` (expected a variable name, got `{unparse(node)}`)',
			loc=decl.loc,
		)
	return node.ident


def parse_type_var(node: Expr, scope: TypeVarScope, evaluator: "TypeEvaluator") -> TypeVar:
	"""Build the TypeVar declared by one `where` entry."""
	if isinstance(node, Name):
		return TypeVar(node.ident)
	if isinstance(node, Comparison) and len(node.ops) == 1:
		left, right = node.operands
		if node.ops[0] == "<:":
			name = _var_name(left, node)
			return TypeVar(name, ub=evaluator.evaluate(right, scope))
		name = _var_name(right, node)
		return TypeVar(name, lb=evaluator.evaluate(left, scope))
	if isinstance(node, Comparison) and len(node.ops) == 2:
		first, middle, last = node.operands
		if node.ops[0] != node.ops[1]:
			raise MalformedBoundError(
				f'invalid bounds in "where": `{unparse(node)}` (mixed `<:` and `>:`)',
				loc=node.loc,
			)
		name = _var_name(middle, node)
		outer = evaluator.evaluate(first, scope)
		inner = evaluator.evaluate(last, scope)
		if node.ops[0] == "<:":
			return TypeVar(name, lb=outer, ub=inner)
		return TypeVar(name, lb=inner, ub=outer)
	raise MalformedBoundError(f'invalid bounds in "where": `{unparse(node)}`', loc=node.loc)


__all__ = ["anonymous_type_var_name", "implicit_type_var", "parse_type_var"]
