# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Lexical scope of type variables introduced by `where` clauses."""

from __future__ import annotations

from typing import Iterator, Mapping, Optional

from typeexpr.core.types_core import TypeVar


class TypeVarScope(Mapping[str, TypeVar]):
	"""
	Immutable chain of type-variable bindings.

	`extend` returns a new scope; the receiver is never modified, so a scope
	can be shared by every recursive evaluation below the `where` that built
	it. Inner bindings shadow outer ones with the same name.
	"""

	__slots__ = ("_var", "_parent")

	def __init__(self, var: Optional[TypeVar] = None, parent: Optional["TypeVarScope"] = None) -> None:
		self._var = var
		self._parent = parent

	def extend(self, var: TypeVar) -> "TypeVarScope":
		return TypeVarScope(var, self)

	def _chain(self) -> Iterator[TypeVar]:
		scope: Optional[TypeVarScope] = self
		while scope is not None:
			if scope._var is not None:
				yield scope._var
			scope = scope._parent

	def __getitem__(self, name: str) -> TypeVar:
		for var in self._chain():
			if var.name == name:
				return var
		raise KeyError(name)

	def __iter__(self) -> Iterator[str]:
		seen = set()
		for var in self._chain():
			if var.name not in seen:
				seen.add(var.name)
				yield var.name

	def __len__(self) -> int:
		return sum(1 for _ in self)

	def __repr__(self) -> str:
		return f"TypeVarScope({', '.join(self)})"


EMPTY_SCOPE = TypeVarScope()

__all__ = ["EMPTY_SCOPE", "TypeVarScope"]
