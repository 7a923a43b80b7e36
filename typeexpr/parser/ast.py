from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from typeexpr.core.types_core import Char, Symbol


@dataclass(frozen=True)
class Located:
	line: int
	column: int


class Expr:
	loc: Optional[Located]


@dataclass(frozen=True)
class Name(Expr):
	loc: Optional[Located]
	ident: str


@dataclass(frozen=True)
class Literal(Expr):
	loc: Optional[Located]
	value: object


@dataclass(frozen=True)
class Attr(Expr):
	"""Dotted access `value.attr`."""

	loc: Optional[Located]
	value: Expr
	attr: str


@dataclass(frozen=True)
class Curly(Expr):
	"""Parametric application `base{params...}`."""

	loc: Optional[Located]
	base: Expr
	params: Tuple[Expr, ...]


@dataclass(frozen=True)
class Where(Expr):
	"""`body where vars` (one declaration, or a `{...}` list)."""

	loc: Optional[Located]
	body: Expr
	vars: Tuple[Expr, ...]


@dataclass(frozen=True)
class Restriction(Expr):
	"""Bare `<:bound` / `>:bound` with no variable name."""

	loc: Optional[Located]
	op: str
	bound: Expr


@dataclass(frozen=True)
class Comparison(Expr):
	"""
	Relation chain: `a <: b` has two operands and one op, `a <: b <: c`
	three operands and two ops.
	"""

	loc: Optional[Located]
	operands: Tuple[Expr, ...]
	ops: Tuple[str, ...]


@dataclass(frozen=True)
class Call(Expr):
	loc: Optional[Located]
	func: Expr
	args: Tuple[Expr, ...]


@dataclass(frozen=True)
class TupleExpr(Expr):
	loc: Optional[Located]
	elements: Tuple[Expr, ...]


def _literal_text(value: object) -> str:
	if isinstance(value, (Symbol, Char)):
		return repr(value)
	if isinstance(value, bool):
		return "true" if value else "false"
	if isinstance(value, str):
		return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
	return repr(value)


def unparse(expr: Expr) -> str:
	"""Render an expression back to surface syntax (used in error messages)."""
	if isinstance(expr, Name):
		return expr.ident
	if isinstance(expr, Literal):
		return _literal_text(expr.value)
	if isinstance(expr, Attr):
		return f"{unparse(expr.value)}.{expr.attr}"
	if isinstance(expr, Curly):
		return f"{unparse(expr.base)}{{{', '.join(unparse(p) for p in expr.params)}}}"
	if isinstance(expr, Call):
		return f"{unparse(expr.func)}({', '.join(unparse(a) for a in expr.args)})"
	if isinstance(expr, Where):
		if len(expr.vars) == 1:
			return f"{unparse(expr.body)} where {unparse(expr.vars[0])}"
		return f"{unparse(expr.body)} where {{{', '.join(unparse(v) for v in expr.vars)}}}"
	if isinstance(expr, Restriction):
		return f"{expr.op}{unparse(expr.bound)}"
	if isinstance(expr, Comparison):
		parts = [unparse(expr.operands[0])]
		for op, operand in zip(expr.ops, expr.operands[1:]):
			parts.append(op)
			parts.append(unparse(operand))
		return " ".join(parts)
	if isinstance(expr, TupleExpr):
		inner = ", ".join(unparse(e) for e in expr.elements)
		return f"({inner},)" if len(expr.elements) == 1 else f"({inner})"
	raise TypeError(f"Unexpected expression node: {type(expr).__name__}")
