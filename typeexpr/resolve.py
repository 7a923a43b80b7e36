# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Name resolution for type expressions.

A bare name is looked up in the active type-variable scope first and only
then in the global namespace; a scope binding always wins, even when a
global of the same name exists. Dotted names (`Base.Dict`, `A.B.C`) resolve
their parent the same way and then ask the namespace for the member.
"""

from __future__ import annotations

from typing import Any, Optional

from typeexpr.core.namespace import Namespace, NotANamespaceError
from typeexpr.errors import MalformedQualifiedTypeError, UnresolvedNameError
from typeexpr.parser.ast import Attr, Expr, Literal, Located, Name, unparse
from typeexpr.scope import EMPTY_SCOPE, TypeVarScope


def resolve_name(
	ident: str,
	scope: TypeVarScope,
	namespace: Namespace,
	*,
	loc: Optional[Located] = None,
) -> Any:
	"""Resolve a bare identifier; UnresolvedNameError when nothing binds it."""
	if ident in scope:
		return scope[ident]
	try:
		return namespace.lookup(ident)
	except KeyError:
		raise UnresolvedNameError(f"`{ident}` is not defined", name=ident, loc=loc) from None


def resolve_qualified(node: Expr, scope: TypeVarScope, namespace: Namespace) -> Any:
	"""
	Resolve a name-position node.

	Accepts `Name`, `Attr` chains and literals (returned verbatim). Any other
	shape is a MalformedQualifiedTypeError naming the offending text.
	"""
	scope = scope if scope is not None else EMPTY_SCOPE
	if isinstance(node, Name):
		return resolve_name(node.ident, scope, namespace, loc=node.loc)
	if isinstance(node, Literal):
		return node.value
	if isinstance(node, Attr):
		container = resolve_qualified(node.value, scope, namespace)
		try:
			return namespace.lookup_member(container, node.attr)
		except NotANamespaceError:
			raise UnresolvedNameError(
				f"cannot resolve `{node.attr}` in `{unparse(node.value)}`: not a module",
				name=node.attr,
				loc=node.loc,
			) from None
		except KeyError:
			raise UnresolvedNameError(f"`{unparse(node)}` is not defined", name=node.attr, loc=node.loc) from None
	raise MalformedQualifiedTypeError(
		f"failed to parse type expression: expected a qualified type, e.g. `Base.Dict`, got: `{unparse(node)}`",
		loc=node.loc,
	)


__all__ = ["resolve_name", "resolve_qualified"]
