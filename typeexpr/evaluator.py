# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Recursive evaluator from expression trees to type values.

One method per node shape:

	Curly        base{P1, ..., Pn}      apply the base to evaluated parameters
	Where        body where V1, ..., Vn  declare variables, wrap in UnionAlls
	Call         typeof(x) / T(args...)  dynamic type, or a fixed-layout constant
	everything else                      qualified name resolution / literals

Nothing in the text is ever executed: names are looked up, types are built
through the type model, and constructor calls are turned into constants
byte-wise (see `typeexpr.isbits`). The expression tree is only read.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from typeexpr.core.namespace import Namespace
from typeexpr.core.types_core import TypeVar, UnionAll, apply_type, typeof
from typeexpr.errors import NestingDepthError
from typeexpr.isbits import construct_isbits
from typeexpr.parser.ast import Call, Curly, Expr, Name, Restriction, Where, unparse
from typeexpr.resolve import resolve_qualified
from typeexpr.scope import EMPTY_SCOPE, TypeVarScope
from typeexpr.type_vars import implicit_type_var, parse_type_var

logger = logging.getLogger(__name__)


class TypeEvaluator:
	"""
	Evaluates one expression tree against an injected namespace.

	An evaluator holds only its recursion depth; create one per parse.
	`max_depth` (None = unlimited) bounds the nesting depth for callers that
	feed untrusted text.
	"""

	def __init__(self, namespace: Namespace, *, max_depth: Optional[int] = None) -> None:
		self.namespace = namespace
		self.max_depth = max_depth
		self._depth = 0

	def evaluate(self, node: Expr, scope: Optional[TypeVarScope] = None) -> Any:
		scope = scope if scope is not None else EMPTY_SCOPE
		self._depth += 1
		try:
			if self.max_depth is not None and self._depth > self.max_depth:
				raise NestingDepthError(
					f"type expression nests deeper than {self.max_depth} levels",
					loc=node.loc,
				)
			return self._dispatch(node, scope)
		finally:
			self._depth -= 1

	def _dispatch(self, node: Expr, scope: TypeVarScope) -> Any:
		if isinstance(node, Curly):
			return self._eval_curly(node, scope)
		if isinstance(node, Where):
			return self._eval_where(node, scope)
		if isinstance(node, Call):
			if isinstance(node.func, Name) and node.func.ident == "typeof" and len(node.args) == 1:
				return typeof(self.evaluate(node.args[0], scope))
			return construct_isbits(node, scope, self)
		return resolve_qualified(node, scope, self.namespace)

	def _eval_curly(self, node: Curly, scope: TypeVarScope) -> Any:
		base = resolve_qualified(node.base, scope, self.namespace)
		params: List[Any] = []
		implicit: List[TypeVar] = []
		for raw in node.params:
			if isinstance(raw, Restriction):
				var = implicit_type_var(raw, scope, self)
				implicit.append(var)
				params.append(var)
			else:
				params.append(self.evaluate(raw, scope))
		body = apply_type(base, params)
		# The last synthesized variable is the innermost wrapper.
		for var in reversed(implicit):
			body = UnionAll(var, body)
		return body

	def _eval_where(self, node: Where, scope: TypeVarScope) -> Any:
		declared: List[TypeVar] = []
		inner = scope
		for decl in node.vars:
			var = parse_type_var(decl, inner, self)
			inner = inner.extend(var)
			declared.append(var)
		body = self.evaluate(node.body, inner)
		for var in reversed(declared):
			body = UnionAll(var, body)
		logger.debug("`%s` binds %s", unparse(node), ", ".join(v.name for v in declared))
		return body


__all__ = ["TypeEvaluator"]
