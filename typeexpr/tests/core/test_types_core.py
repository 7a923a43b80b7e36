# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from typeexpr.core import types_core as tc
from typeexpr.core.builtins import ABSTRACT_ARRAY, ARRAY, COMPLEX, VAL, VECTOR
from typeexpr.core.types_core import (
	ANY,
	BOTTOM,
	Char,
	DataType,
	Symbol,
	TypeApplicationError,
	TypeVar,
	UnionAll,
	UnionType,
	apply_type,
	has_free_vars,
	issubtype,
	make_union,
	show_value,
	substitute,
	typeof,
	unwrap_unionall,
)


def test_apply_full_parameters_gives_datatype() -> None:
	arr = apply_type(ARRAY, (tc.INT64, 2))
	assert isinstance(arr, DataType)
	assert arr.parameters == (tc.INT64, 2)
	assert show_value(arr) == "Array{Int64, 2}"


def test_partial_application_leaves_unionall() -> None:
	partial = apply_type(ARRAY, (tc.INT64,))
	assert isinstance(partial, UnionAll)
	assert partial.var.name == "N"
	assert show_value(partial) == "Array{Int64, N} where N"


def test_applied_types_compare_structurally() -> None:
	assert apply_type(ARRAY, (tc.INT64, 2)) == apply_type(ARRAY, (tc.INT64, 2))
	assert hash(apply_type(ARRAY, (tc.INT64, 2))) == hash(apply_type(ARRAY, (tc.INT64, 2)))
	assert apply_type(ARRAY, (tc.INT64, 2)) != apply_type(ARRAY, (tc.INT64, 3))


def test_value_parameters_are_type_sensitive() -> None:
	assert apply_type(VAL, (1,)) != apply_type(VAL, (1.0,))
	assert apply_type(VAL, (1,)) != apply_type(VAL, (True,))
	assert apply_type(VAL, (Symbol("a"),)) == apply_type(VAL, (Symbol("a"),))


def test_too_many_parameters() -> None:
	with pytest.raises(TypeApplicationError, match="too many parameters"):
		apply_type(ARRAY, (tc.INT64, 2, 3))
	with pytest.raises(TypeApplicationError, match="too many parameters"):
		apply_type(tc.INT64, (tc.INT64,))


def test_bound_violation_is_rejected() -> None:
	with pytest.raises(TypeApplicationError, match="does not satisfy"):
		apply_type(COMPLEX, (tc.STRING,))
	assert isinstance(apply_type(COMPLEX, (tc.INT64,)), DataType)


def test_invalid_parameter_value() -> None:
	with pytest.raises(TypeApplicationError, match="invalid type parameter"):
		apply_type(VAL, ("text",))


def test_union_flattens_and_collapses() -> None:
	assert apply_type(tc.UNION, ()) is BOTTOM
	assert apply_type(tc.UNION, (tc.INT64,)) == tc.INT64
	u = apply_type(tc.UNION, (tc.INT64, apply_type(tc.UNION, (tc.FLOAT64, tc.INT64))))
	assert isinstance(u, UnionType)
	assert u.types == frozenset({tc.INT64, tc.FLOAT64})
	assert show_value(u) == "Union{Float64, Int64}"


def test_union_rejects_values() -> None:
	with pytest.raises(TypeApplicationError):
		make_union([tc.INT64, 3])


def test_tuple_type() -> None:
	tup = apply_type(tc.TUPLE, (tc.INT64, tc.FLOAT64))
	assert show_value(tup) == "Tuple{Int64, Float64}"
	assert tup.fieldtypes == (tc.INT64, tc.FLOAT64)
	assert show_value(apply_type(tc.TUPLE, ())) == "Tuple{}"


def test_issubtype_walks_supertypes() -> None:
	assert issubtype(tc.INT64, tc.INTEGER)
	assert issubtype(tc.INT64, tc.NUMBER)
	assert issubtype(tc.INT64, ANY)
	assert issubtype(BOTTOM, tc.INT64)
	assert not issubtype(tc.FLOAT64, tc.INTEGER)


def test_issubtype_parametric_supertype() -> None:
	arr = apply_type(ARRAY, (tc.INT64, 1))
	assert issubtype(arr, apply_type(ABSTRACT_ARRAY, (tc.INT64, 1)))
	assert issubtype(arr, ABSTRACT_ARRAY)
	assert issubtype(arr, VECTOR)
	assert not issubtype(apply_type(ARRAY, (tc.INT64, 2)), VECTOR)


def test_issubtype_is_invariant_in_parameters() -> None:
	assert not issubtype(apply_type(ARRAY, (tc.INT64, 1)), apply_type(ARRAY, (tc.NUMBER, 1)))


def test_typevars_compare_by_identity() -> None:
	a = TypeVar("T")
	b = TypeVar("T")
	assert a != b
	assert show_value(a) == show_value(b)
	assert apply_type(VECTOR, (a,)) != apply_type(VECTOR, (b,))


def test_typevar_default_bounds() -> None:
	t = TypeVar("T")
	assert t.lb is BOTTOM
	assert t.ub == ANY
	assert not t.anonymous
	assert TypeVar("#s1").anonymous


def test_substitute_and_free_vars() -> None:
	t = TypeVar("T")
	body = apply_type(ARRAY, (t, 1))
	assert has_free_vars(body)
	assert not has_free_vars(UnionAll(t, body))
	assert substitute(body, {t: tc.INT64}) == apply_type(ARRAY, (tc.INT64, 1))


def test_substitute_renames_bound_var_when_bounds_change() -> None:
	s = TypeVar("S")
	t = TypeVar("T", ub=s)
	wrapped = UnionAll(t, apply_type(VECTOR, (t,)))
	result = substitute(wrapped, {s: tc.NUMBER})
	assert isinstance(result, UnionAll)
	assert result.var is not t
	assert result.var.ub == tc.NUMBER
	assert show_value(result) == "Array{T, 1} where T<:Number"


def test_unwrap_unionall_order() -> None:
	body, vars_ = unwrap_unionall(ARRAY)
	assert isinstance(body, DataType)
	assert [v.name for v in vars_] == ["T", "N"]


def test_show_value_anonymous_and_named_vars() -> None:
	anon = TypeVar("#s7", ub=tc.NUMBER)
	assert show_value(UnionAll(anon, apply_type(VECTOR, (anon,)))) == "Array{<:Number, 1}"
	lower = TypeVar("#s8", lb=tc.INT64)
	assert show_value(UnionAll(lower, apply_type(VECTOR, (lower,)))) == "Array{>:Int64, 1}"
	t = TypeVar("T", lb=tc.INT64, ub=tc.NUMBER)
	assert show_value(UnionAll(t, t)) == "T where Int64<:T<:Number"
	k, v = TypeVar("K"), TypeVar("V")
	assert show_value(UnionAll(k, UnionAll(v, apply_type(VAL, (k,))))) == "Val{K} where {K, V}"


def test_show_value_literals() -> None:
	assert show_value(True) == "true"
	assert show_value(Symbol("x")) == ":x"
	assert show_value(Char("c")) == "'c'"
	assert show_value("hi") == '"hi"'
	assert show_value((1, 2)) == "(1, 2)"
	assert show_value((1,)) == "(1,)"
	assert show_value(BOTTOM) == "Union{}"


def test_symbol_and_char_are_not_plain_strings() -> None:
	assert Symbol("a") != "a"
	assert Char("a") != "a"
	assert Symbol("a") != Char("a")
	assert len({Symbol("a"), "a", Char("a")}) == 3


@pytest.mark.parametrize(
	"value, expected",
	[
		(1, tc.INT64),
		(2**64, tc.INT128),
		(2**200, tc.BIGINT),
		(True, tc.BOOL),
		(1.5, tc.FLOAT64),
		("s", tc.STRING),
		(Symbol("s"), tc.SYMBOL),
		(Char("s"), tc.CHAR),
		(tc.INT64, tc.DATATYPE),
		(VECTOR, tc.UNIONALL),
		(BOTTOM, tc.TYPEOF_BOTTOM),
	],
)
def test_typeof(value: object, expected: object) -> None:
	assert typeof(value) == expected


def test_typeof_tuple() -> None:
	assert typeof((1, 2.0)) == apply_type(tc.TUPLE, (tc.INT64, tc.FLOAT64))
