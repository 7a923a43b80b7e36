# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from typeexpr.core.types_core import Char, Symbol
from typeexpr.errors import TypeSyntaxError
from typeexpr.parser import parse_type_expr
from typeexpr.parser.ast import (
	Attr,
	Call,
	Comparison,
	Curly,
	Literal,
	Name,
	Restriction,
	TupleExpr,
	Where,
	unparse,
)


def test_parse_bare_name() -> None:
	expr = parse_type_expr("Int32")
	assert isinstance(expr, Name)
	assert expr.ident == "Int32"
	assert expr.loc is not None
	assert (expr.loc.line, expr.loc.column) == (1, 1)


def test_parse_curly_params() -> None:
	expr = parse_type_expr("Array{Int, 2}")
	assert isinstance(expr, Curly)
	assert isinstance(expr.base, Name) and expr.base.ident == "Array"
	assert len(expr.params) == 2
	assert isinstance(expr.params[0], Name)
	assert isinstance(expr.params[1], Literal) and expr.params[1].value == 2


def test_parse_empty_curly() -> None:
	expr = parse_type_expr("Union{}")
	assert isinstance(expr, Curly)
	assert expr.params == ()


def test_parse_restriction_param() -> None:
	expr = parse_type_expr("Vector{<:Number}")
	assert isinstance(expr, Curly)
	param = expr.params[0]
	assert isinstance(param, Restriction)
	assert param.op == "<:"
	assert isinstance(param.bound, Name) and param.bound.ident == "Number"


def test_parse_supertype_restriction_param() -> None:
	expr = parse_type_expr("Ref{>:Int}")
	param = expr.params[0]
	assert isinstance(param, Restriction)
	assert param.op == ">:"


def test_parse_where_single_var() -> None:
	expr = parse_type_expr("T where T<:Int")
	assert isinstance(expr, Where)
	assert isinstance(expr.body, Name)
	(decl,) = expr.vars
	assert isinstance(decl, Comparison)
	assert decl.ops == ("<:",)
	assert [unparse(o) for o in decl.operands] == ["T", "Int"]


def test_parse_where_braced_list() -> None:
	expr = parse_type_expr("Dict{K, V} where {K, V<:K}")
	assert isinstance(expr, Where)
	assert len(expr.vars) == 2
	assert isinstance(expr.vars[0], Name)
	assert isinstance(expr.vars[1], Comparison)


def test_where_chains_left_to_right() -> None:
	expr = parse_type_expr("Pair{A, B} where A where B")
	assert isinstance(expr, Where)
	assert unparse(expr.vars[0]) == "B"
	assert isinstance(expr.body, Where)
	assert unparse(expr.body.vars[0]) == "A"


def test_parse_two_sided_bound() -> None:
	expr = parse_type_expr("T where Int <: T <: Number")
	decl = expr.vars[0]
	assert isinstance(decl, Comparison)
	assert decl.ops == ("<:", "<:")
	assert len(decl.operands) == 3


def test_parse_qualified_chain() -> None:
	expr = parse_type_expr("A.B.C")
	assert isinstance(expr, Attr)
	assert expr.attr == "C"
	assert isinstance(expr.value, Attr)
	assert expr.value.attr == "B"
	assert isinstance(expr.value.value, Name)


def test_parse_call_after_curly() -> None:
	expr = parse_type_expr("Val{10}()")
	assert isinstance(expr, Call)
	assert isinstance(expr.func, Curly)
	assert expr.args == ()


def test_parse_literals() -> None:
	expr = parse_type_expr("X{-1, 2.5, 1e3, \"s\", 'c', :sym, true, false}")
	values = [p.value for p in expr.params]
	assert values == [-1, 2.5, 1000.0, "s", Char("c"), Symbol("sym"), True, False]
	assert type(values[0]) is int
	assert type(values[2]) is float
	assert isinstance(values[5], Symbol)


def test_symbol_is_not_a_string() -> None:
	expr = parse_type_expr("X{:a, \"a\"}")
	sym, text = (p.value for p in expr.params)
	assert sym != text


def test_parse_parenthesized_and_tuples() -> None:
	assert isinstance(parse_type_expr("(Int)"), Name)
	tup = parse_type_expr("(Int, 2)")
	assert isinstance(tup, TupleExpr)
	assert len(tup.elements) == 2
	single = parse_type_expr("(Int,)")
	assert isinstance(single, TupleExpr)
	assert len(single.elements) == 1


def test_parse_where_in_param_position() -> None:
	expr = parse_type_expr("Vector{Vector{T} where T}")
	assert isinstance(expr, Curly)
	assert isinstance(expr.params[0], Where)


def test_unparse_round_trips_shape() -> None:
	src = "Dict{K, Vector{<:K}} where {K, V <: K}"
	assert unparse(parse_type_expr(src)) == "Dict{K, Vector{<:K}} where {K, V <: K}"
	assert unparse(parse_type_expr("Val{:x}")) == "Val{:x}"
	assert unparse(parse_type_expr("Val{'c'}()")) == "Val{'c'}()"


@pytest.mark.parametrize(
	"src",
	[
		"",
		"Array{Int",
		"Array{Int,,}",
		"T where",
		"Int $ 2",
		"A..B",
	],
)
def test_syntax_errors_are_wrapped(src: str) -> None:
	with pytest.raises(TypeSyntaxError) as excinfo:
		parse_type_expr(src)
	assert excinfo.value.source == src


def test_char_literal_must_be_single_character() -> None:
	with pytest.raises(TypeSyntaxError):
		parse_type_expr("Val{'ab'}")


def test_parse_does_not_share_nodes_between_calls() -> None:
	first = parse_type_expr("Array{Int, 2}")
	second = parse_type_expr("Array{Int, 2}")
	assert first == second
	assert first is not second
