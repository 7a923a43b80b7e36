# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Constant construction for calls in type position (`Val{10}()`, `Point(0, 0)`).

The constructor is never run. The target type and the arguments are
evaluated like any other type expression, the arguments are laid out as an
immutable tuple, and those bytes become the constant's representation. This
only works when the target is a concrete fixed-layout type of exactly the
tuple's size; everything else is rejected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from typeexpr.core.layout import is_fixed_layout, layout_of, pack_values
from typeexpr.core.types_core import ConstValue, DataType, TypeSystemError, show_value
from typeexpr.errors import UnsupportedConstructorTargetError
from typeexpr.parser.ast import Call, unparse
from typeexpr.scope import TypeVarScope

if TYPE_CHECKING:
	from typeexpr.evaluator import TypeEvaluator


def construct_isbits(node: Call, scope: TypeVarScope, evaluator: "TypeEvaluator") -> ConstValue:
	target = evaluator.evaluate(node.func, scope)
	args = tuple(evaluator.evaluate(arg, scope) for arg in node.args)
	if not isinstance(target, DataType) or not is_fixed_layout(target):
		raise UnsupportedConstructorTargetError(
			f"cannot construct `{unparse(node)}`: `{show_value(target)}` is not a concrete fixed-layout type",
			loc=node.loc,
		)
	try:
		arg_layout, data = pack_values(args)
	except TypeSystemError as exc:
		raise UnsupportedConstructorTargetError(f"cannot construct `{unparse(node)}`: {exc}", loc=node.loc) from exc
	target_layout = layout_of(target)
	if arg_layout.size != target_layout.size:
		raise UnsupportedConstructorTargetError(
			f"cannot construct `{unparse(node)}`: arguments occupy {arg_layout.size} bytes, "
			f"`{show_value(target)}` needs {target_layout.size}",
			loc=node.loc,
		)
	return ConstValue(target, data)


__all__ = ["construct_isbits"]
