from __future__ import annotations

import codecs
from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput

from typeexpr.core.types_core import Char, Symbol
from typeexpr.errors import TypeSyntaxError

from .ast import (
	Attr,
	Call,
	Comparison,
	Curly,
	Expr,
	Literal,
	Located,
	Name,
	Restriction,
	TupleExpr,
	Where,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
)


def _decode_quoted(raw: str) -> str:
	"""
	Decode the inside of a quoted token. Escapes are interpreted Python-style
	(unicode_escape), then the code points are reinterpreted as latin-1 bytes
	and decoded as UTF-8 so `\\xHH` sequences spell out UTF-8 byte strings.
	"""
	unescaped = codecs.decode(raw, "unicode_escape")
	try:
		return unescaped.encode("latin-1").decode("utf-8")
	except (UnicodeEncodeError, UnicodeDecodeError):
		return unescaped


def parse_type_expr(source: str) -> Expr:
	"""Parse a type expression string into an expression tree."""
	try:
		tree = _PARSER.parse(source)
	except UnexpectedInput as exc:
		raise _syntax_error(exc, source) from None
	return _build_expr(tree)


def _syntax_error(exc: UnexpectedInput, source: str) -> TypeSyntaxError:
	line = getattr(exc, "line", None)
	column = getattr(exc, "column", None)
	loc = Located(line=line, column=column) if isinstance(line, int) and line > 0 else None
	token = getattr(exc, "token", None)
	if isinstance(exc, UnexpectedEOF) or getattr(token, "type", None) == "$END":
		message = "unexpected end of type expression"
	elif isinstance(exc, UnexpectedCharacters):
		message = f"unexpected character {source[exc.pos_in_stream]!r}"
	elif token is not None:
		message = f"unexpected token {str(token)!r}"
	else:
		message = "invalid type expression"
	return TypeSyntaxError(message, loc=loc, source=source)


def _build_expr(node: Tree | Token) -> Expr:
	if not isinstance(node, Tree):
		raise TypeError(f"Unexpected node type: {type(node)}")
	name = _name(node)
	loc = _loc(node)
	if name == "name":
		return Name(loc=loc, ident=node.children[0].value)
	if name == "int_lit":
		return Literal(loc=loc, value=int(node.children[0].value))
	if name == "float_lit":
		return Literal(loc=loc, value=float(node.children[0].value))
	if name == "str_lit":
		return Literal(loc=loc, value=_decode_quoted(node.children[0].value[1:-1]))
	if name == "char_lit":
		return Literal(loc=loc, value=_build_char(node.children[0], loc))
	if name == "symbol_lit":
		return Literal(loc=loc, value=Symbol(node.children[0].value))
	if name == "true_lit":
		return Literal(loc=loc, value=True)
	if name == "false_lit":
		return Literal(loc=loc, value=False)
	if name == "tuple_lit":
		return TupleExpr(loc=loc, elements=tuple(_build_expr(c) for c in _subtrees(node)))
	if name == "attr":
		base, attr_token = node.children
		return Attr(loc=loc, value=_build_expr(base), attr=attr_token.value)
	if name == "curly":
		base, args = _split_args(node)
		return Curly(loc=loc, base=base, params=args)
	if name == "call":
		func, args = _split_args(node)
		return Call(loc=loc, func=func, args=args)
	if name == "restriction":
		op_token, bound = node.children
		return Restriction(loc=loc, op=op_token.value, bound=_build_expr(bound))
	if name == "relation":
		return _build_relation(node)
	if name == "where":
		body, vars_node = node.children
		decls = tuple(_build_expr(c) for c in _subtrees(vars_node))
		return Where(loc=loc, body=_build_expr(body), vars=decls)
	raise ValueError(f"Unsupported expression node: {name}")


def _build_char(token: Token, loc: Optional[Located]) -> Char:
	text = _decode_quoted(token.value[1:-1])
	if len(text) != 1:
		raise TypeSyntaxError(f"character literal must contain exactly one character: {token.value}", loc=loc)
	return Char(text)


def _build_relation(tree: Tree) -> Comparison:
	operands: List[Expr] = []
	ops: List[str] = []
	for child in tree.children:
		if isinstance(child, Token) and child.type == "REL_OP":
			ops.append(child.value)
		else:
			operands.append(_build_expr(child))
	return Comparison(loc=_loc(tree), operands=tuple(operands), ops=tuple(ops))


def _split_args(tree: Tree) -> tuple[Expr, tuple[Expr, ...]]:
	head = _build_expr(tree.children[0])
	args: tuple[Expr, ...] = ()
	if len(tree.children) > 1:
		args_node = tree.children[1]
		args = tuple(_build_expr(c) for c in _subtrees(args_node))
	return head, args


def _subtrees(tree: Tree) -> List[Tree]:
	return [c for c in tree.children if isinstance(c, Tree)]


def _loc(tree: Tree) -> Optional[Located]:
	meta = tree.meta
	if getattr(meta, "empty", True):
		return None
	return Located(line=meta.line, column=meta.column)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


__all__ = ["parse_type_expr"]
