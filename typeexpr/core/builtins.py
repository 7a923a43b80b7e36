# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Builtin modules: `Core`, `Base` and a fresh `Main` per namespace.

`Core` and `Base` are assembled once at import and only read afterwards.
`main_module()` returns a new `Main` (using `Base` and `Core`) so callers can
install their own types without touching anyone else's namespace.
"""

from __future__ import annotations

from typing import Any

from . import types_core as tc
from .types_core import Builtin, Module, TypeVar, apply_type, new_abstract_type, new_struct_type


def _params(*names: str) -> tuple[TypeVar, ...]:
	return tuple(TypeVar(n) for n in names)


T, N = _params("T", "N")
ABSTRACT_ARRAY = new_abstract_type("AbstractArray", params=(T, N))

T, N = _params("T", "N")
ARRAY = new_struct_type(
	"Array",
	params=(T, N),
	supertype=apply_type(ABSTRACT_ARRAY, (T, N)),
	mutable=True,
	opaque=True,
	module="Core",
)

(T,) = _params("T")
VECTOR = tc.UnionAll(T, apply_type(ARRAY, (T, 1)))
(T,) = _params("T")
MATRIX = tc.UnionAll(T, apply_type(ARRAY, (T, 2)))
(T,) = _params("T")
ABSTRACT_VECTOR = tc.UnionAll(T, apply_type(ABSTRACT_ARRAY, (T, 1)))
(T,) = _params("T")
ABSTRACT_MATRIX = tc.UnionAll(T, apply_type(ABSTRACT_ARRAY, (T, 2)))

(X,) = _params("x")
VAL = new_struct_type("Val", params=(X,), module="Base")

A, B = _params("A", "B")
PAIR = new_struct_type("Pair", [("first", A), ("second", B)], params=(A, B), module="Base")

(T,) = _params("T")
REF = new_abstract_type("Ref", params=(T,))

T = TypeVar("T", ub=tc.REAL)
COMPLEX = new_struct_type(
	"Complex",
	[("re", T), ("im", T)],
	params=(T,),
	supertype=tc.NUMBER,
	module="Base",
)

T = TypeVar("T", ub=tc.INTEGER)
RATIONAL = new_struct_type(
	"Rational",
	[("num", T), ("den", T)],
	params=(T,),
	supertype=tc.REAL,
	module="Base",
)

K, V = _params("K", "V")
ABSTRACT_DICT = new_abstract_type("AbstractDict", params=(K, V), module="Base")
K, V = _params("K", "V")
DICT = new_struct_type(
	"Dict",
	params=(K, V),
	supertype=apply_type(ABSTRACT_DICT, (K, V)),
	mutable=True,
	opaque=True,
	module="Base",
)

TYPEOF = Builtin("typeof")

_CORE_BINDINGS: dict[str, Any] = {
	"Any": tc.ANY,
	"Union": tc.UNION,
	"Tuple": tc.TUPLE,
	"Nothing": tc.NOTHING,
	"nothing": tc.NOTHING_VALUE,
	"Number": tc.NUMBER,
	"Real": tc.REAL,
	"Integer": tc.INTEGER,
	"Signed": tc.SIGNED,
	"Unsigned": tc.UNSIGNED,
	"AbstractFloat": tc.ABSTRACT_FLOAT,
	"AbstractChar": tc.ABSTRACT_CHAR,
	"AbstractString": tc.ABSTRACT_STRING,
	"Function": tc.FUNCTION,
	"Bool": tc.BOOL,
	"Int8": tc.INT8,
	"Int16": tc.INT16,
	"Int32": tc.INT32,
	"Int64": tc.INT64,
	"Int128": tc.INT128,
	"UInt8": tc.UINT8,
	"UInt16": tc.UINT16,
	"UInt32": tc.UINT32,
	"UInt64": tc.UINT64,
	"UInt128": tc.UINT128,
	"Float16": tc.FLOAT16,
	"Float32": tc.FLOAT32,
	"Float64": tc.FLOAT64,
	"Char": tc.CHAR,
	"String": tc.STRING,
	"Symbol": tc.SYMBOL,
	"DataType": tc.DATATYPE,
	"UnionAll": tc.UNIONALL,
	"TypeVar": tc.TYPEVAR,
	"Module": tc.MODULE,
	"AbstractArray": ABSTRACT_ARRAY,
	"Array": ARRAY,
	"Ref": REF,
	"typeof": TYPEOF,
	# Host word size is fixed at 64 bits.
	"Int": tc.INT64,
	"UInt": tc.UINT64,
}

_BASE_BINDINGS: dict[str, Any] = {
	"Vector": VECTOR,
	"Matrix": MATRIX,
	"AbstractVector": ABSTRACT_VECTOR,
	"AbstractMatrix": ABSTRACT_MATRIX,
	"Val": VAL,
	"Pair": PAIR,
	"Complex": COMPLEX,
	"Rational": RATIONAL,
	"BigInt": tc.BIGINT,
	"AbstractDict": ABSTRACT_DICT,
	"Dict": DICT,
}


def _build_core() -> Module:
	core = Module("Core")
	for name, value in _CORE_BINDINGS.items():
		core.define(name, value)
	core.define("Core", core)
	return core


def _build_base(core: Module) -> Module:
	base = Module("Base")
	base.using(core)
	for name, value in _CORE_BINDINGS.items():
		base.define(name, value)
	for name, value in _BASE_BINDINGS.items():
		base.define(name, value)
	base.define("Base", base)
	base.define("Core", core)
	return base


CORE = _build_core()
BASE = _build_base(CORE)


def main_module() -> Module:
	"""Return a new, empty `Main` module that sees `Core` and `Base`."""
	main = Module("Main")
	main.using(BASE)
	main.using(CORE)
	main.define("Main", main)
	main.define("Core", CORE)
	main.define("Base", BASE)
	return main


__all__ = ["BASE", "CORE", "main_module"]
