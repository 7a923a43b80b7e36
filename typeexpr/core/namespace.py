# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Read-only global namespace capability handed to the type evaluator.

The evaluator never reaches for process-wide state: whatever implements
`Namespace` decides what a bare name or a dotted member means. Production
code uses `ModuleNamespace` over a `Main` module; tests can pass a
`MappingNamespace` built from a plain dict.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .builtins import main_module
from .types_core import Module


class NotANamespaceError(LookupError):
	"""Member lookup on a value that has no members."""


class Namespace(Protocol):
	"""Protocol for resolving global names and dotted members."""

	def lookup(self, name: str) -> Any:
		"""Return the global binding for `name`; raise KeyError when unbound."""
		...

	def lookup_member(self, container: Any, name: str) -> Any:
		"""
		Return member `name` of `container`.

		Raise KeyError when the member is missing and NotANamespaceError when
		`container` is not namespace-like.
		"""
		...


def _member(container: Any, name: str) -> Any:
	if isinstance(container, Module):
		return container.lookup(name, imported=False)
	if isinstance(container, Mapping):
		return container[name]
	raise NotANamespaceError(f"{container!r} is not a namespace")


class ModuleNamespace:
	"""Namespace rooted at a module (usually `Main`)."""

	def __init__(self, root: Optional[Module] = None) -> None:
		self.root = root if root is not None else main_module()

	def lookup(self, name: str) -> Any:
		return self.root.lookup(name)

	def lookup_member(self, container: Any, name: str) -> Any:
		return _member(container, name)


class MappingNamespace:
	"""
	Namespace over a plain mapping of globals.

	Nested mappings (or `Module`s) act as sub-namespaces, so
	`{"A": {"B": Int}}` resolves `A.B`.
	"""

	def __init__(self, bindings: Mapping[str, Any]) -> None:
		self._bindings = dict(bindings)

	def lookup(self, name: str) -> Any:
		return self._bindings[name]

	def lookup_member(self, container: Any, name: str) -> Any:
		return _member(container, name)


def default_namespace() -> ModuleNamespace:
	return ModuleNamespace(main_module())


__all__ = [
	"MappingNamespace",
	"ModuleNamespace",
	"Namespace",
	"NotANamespaceError",
	"default_namespace",
]
