# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Reference model of the runtime type system that parsed type expressions are
evaluated into.

The evaluator never decides what a type *is*; it only asks this module to
build one. The model is nominal and deliberately small:

- `TypeName` is a type family (`Array`, `Int64`, `Point`): parameter
  variables plus supertype/field templates written in terms of them.
- `DataType` is a `TypeName` applied to concrete parameters.
- `TypeVar` is a bounded type variable; `UnionAll` binds one over a body.
- `UnionType` / `BOTTOM` cover `Union{...}` and `Union{}`.
- `ConstValue` is an opaque fixed-layout constant (type + bytes).

Equality is structural for `DataType`/`UnionAll`/`UnionType`, and identity
for `TypeVar`: two variables that print the same are still different
variables.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple


class TypeSystemError(ValueError):
	"""A requested type or value cannot exist in the type system."""


class TypeApplicationError(TypeSystemError):
	"""Parameters applied to a type do not fit its parameter list or bounds."""


class Symbol(str):
	"""Symbol value (`:name`). Never equal to a plain string of the same text."""

	def __eq__(self, other: object) -> bool:
		return type(other) is Symbol and str.__eq__(self, other)

	def __ne__(self, other: object) -> bool:
		return not self.__eq__(other)

	def __hash__(self) -> int:
		return hash(("Symbol", str(self)))

	def __repr__(self) -> str:
		return f":{str.__str__(self)}"


class Char(str):
	"""Single character value (`'c'`)."""

	def __eq__(self, other: object) -> bool:
		return type(other) is Char and str.__eq__(self, other)

	def __ne__(self, other: object) -> bool:
		return not self.__eq__(other)

	def __hash__(self) -> int:
		return hash(("Char", str(self)))

	def __repr__(self) -> str:
		return f"'{str.__str__(self)}'"


@dataclass(frozen=True)
class BottomType:
	"""The empty type `Union{}`; a subtype of every type."""

	def __str__(self) -> str:
		return "Union{}"


BOTTOM = BottomType()


@dataclass(eq=False)
class TypeName:
	"""
	A type family.

	`params` are the family's own type variables; `supertype` and the field
	types in `fields` are templates that may reference them and are
	instantiated per `DataType`. `prim` names the bit representation of
	primitive types ("int", "uint", "float", "bool", "char") with `size` in
	bytes. `opaque` marks types whose values have no inspectable layout
	(strings, arrays, modules, ...).
	"""

	name: str
	module: str = "Core"
	params: Tuple["TypeVar", ...] = ()
	supertype: Any = None
	fields: Tuple[Tuple[str, Any], ...] = ()
	abstract: bool = False
	mutable: bool = False
	opaque: bool = False
	prim: Optional[str] = None
	size: Optional[int] = None
	wrapper: Any = field(default=None, repr=False)

	def __repr__(self) -> str:
		return f"TypeName({self.module}.{self.name})"


def _same_param(a: Any, b: Any) -> bool:
	# `Val{1}` and `Val{1.0}` / `Val{true}` are distinct types.
	return type(a) is type(b) and a == b


def _param_hash(p: Any) -> int:
	return hash((type(p).__name__, p))


@dataclass(frozen=True, eq=False)
class DataType:
	name: TypeName
	parameters: Tuple[Any, ...] = ()

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, DataType):
			return NotImplemented
		if self.name is not other.name or len(self.parameters) != len(other.parameters):
			return False
		return all(_same_param(a, b) for a, b in zip(self.parameters, other.parameters))

	def __hash__(self) -> int:
		return hash((id(self.name), tuple(_param_hash(p) for p in self.parameters)))

	def _bindings(self) -> Dict["TypeVar", Any]:
		return dict(zip(self.name.params, self.parameters))

	@property
	def supertype(self) -> Optional["DataType"]:
		"""Instantiated supertype, or None for `Any`."""
		if self.name.supertype is None:
			return None
		return substitute(self.name.supertype, self._bindings())

	@property
	def fieldnames(self) -> Tuple[str, ...]:
		if self.name is TUPLE_NAME:
			return tuple(str(i + 1) for i in range(len(self.parameters)))
		return tuple(name for name, _ in self.name.fields)

	@property
	def fieldtypes(self) -> Tuple[Any, ...]:
		if self.name is TUPLE_NAME:
			return self.parameters
		bindings = self._bindings()
		return tuple(substitute(ty, bindings) for _, ty in self.name.fields)

	@property
	def isconcrete(self) -> bool:
		return not self.name.abstract and not has_free_vars(self)

	def __str__(self) -> str:
		return show_value(self)


@dataclass(frozen=True, eq=False)
class TypeVar:
	"""
	Bounded type variable `lb <: name <: ub`.

	Compared by identity. Names starting with `#s` are anonymous variables
	synthesized for `<:X` parameters.
	"""

	name: str
	lb: Any = BOTTOM
	ub: Any = None

	def __post_init__(self) -> None:
		if self.ub is None:
			object.__setattr__(self, "ub", ANY)
		for which, bound in (("lower", self.lb), ("upper", self.ub)):
			if not (is_type(bound) or isinstance(bound, TypeVar)):
				raise TypeSystemError(
					f"TypeVar: {which} bound of `{self.name}` must be a type, got `{show_value(bound)}`"
				)
		# Bounds that mention free variables are checked once those are known.
		if has_free_vars(self.lb) or has_free_vars(self.ub):
			return
		if not issubtype(self.lb, self.ub):
			raise TypeSystemError(
				f"TypeVar: lower bound `{show_value(self.lb)}` of `{self.name}` "
				f"is not a subtype of its upper bound `{show_value(self.ub)}`"
			)

	@property
	def anonymous(self) -> bool:
		return self.name.startswith("#s")

	def __repr__(self) -> str:
		return f"TypeVar({self.name!r}, lb={show_value(self.lb)}, ub={show_value(self.ub)})"

	def __str__(self) -> str:
		return self.name


@dataclass(frozen=True)
class UnionAll:
	"""`body where var`: body for every instantiation of `var` within its bounds."""

	var: TypeVar
	body: Any

	def __str__(self) -> str:
		return show_value(self)


@dataclass(frozen=True)
class UnionType:
	types: frozenset

	def __str__(self) -> str:
		return show_value(self)


@dataclass(frozen=True)
class SpecialForm:
	"""Type constructors with custom application rules (`Union`, `Tuple`)."""

	name: str

	def __str__(self) -> str:
		return self.name


@dataclass(frozen=True)
class Builtin:
	"""Builtin function bound in a module (only `typeof` is interpreted)."""

	name: str

	def __str__(self) -> str:
		return self.name


@dataclass(frozen=True)
class ConstValue:
	"""Fixed-layout constant: a concrete type and its byte representation."""

	type: DataType
	data: bytes = b""

	def __str__(self) -> str:
		from .layout import describe_const

		return describe_const(self)


class Module:
	"""
	Named namespace of global bindings.

	Lookups fall through to modules brought in with `using`. Bindings are
	installed while a namespace is being assembled; type parsing only reads.
	"""

	def __init__(self, name: str, parent: Optional["Module"] = None) -> None:
		self.name = name
		self.parent = parent
		self._bindings: Dict[str, Any] = {}
		self._usings: List["Module"] = []

	def define(self, name: str, value: Any) -> Any:
		self._bindings[name] = value
		return value

	def using(self, module: "Module") -> None:
		if module not in self._usings:
			self._usings.append(module)

	def lookup(self, name: str, *, imported: bool = True) -> Any:
		"""Return the binding for `name`; raise KeyError when unbound."""
		if name in self._bindings:
			return self._bindings[name]
		if imported:
			for mod in self._usings:
				try:
					return mod.lookup(name, imported=False)
				except KeyError:
					continue
		raise KeyError(name)

	def names(self) -> List[str]:
		return sorted(self._bindings)

	@property
	def fullname(self) -> str:
		if self.parent is None or self.parent is self:
			return self.name
		return f"{self.parent.fullname}.{self.name}"

	def __repr__(self) -> str:
		return f"Module({self.fullname})"

	def __str__(self) -> str:
		return self.fullname


# --- type family construction -------------------------------------------------


def _declare(tn: TypeName) -> Any:
	body: Any = DataType(tn, tuple(tn.params))
	for var in reversed(tn.params):
		body = UnionAll(var, body)
	tn.wrapper = body
	return body


def _coerce_params(params: Iterable[Any]) -> Tuple[TypeVar, ...]:
	return tuple(p if isinstance(p, TypeVar) else TypeVar(str(p)) for p in params)


def new_abstract_type(
	name: str,
	*,
	params: Sequence[Any] = (),
	supertype: Any = None,
	module: str = "Core",
) -> Any:
	"""Declare an abstract type family; returns its (possibly UnionAll) wrapper."""
	tn = TypeName(
		name=name,
		module=module,
		params=_coerce_params(params),
		supertype=ANY if supertype is None else supertype,
		abstract=True,
	)
	return _declare(tn)


def new_primitive_type(
	name: str,
	size: int,
	prim: str,
	*,
	supertype: Any = None,
	module: str = "Core",
) -> DataType:
	"""Declare a primitive bits type of `size` bytes."""
	tn = TypeName(
		name=name,
		module=module,
		supertype=ANY if supertype is None else supertype,
		prim=prim,
		size=size,
	)
	return _declare(tn)


def new_struct_type(
	name: str,
	fields: Sequence[Tuple[str, Any]] = (),
	*,
	params: Sequence[Any] = (),
	supertype: Any = None,
	mutable: bool = False,
	opaque: bool = False,
	module: str = "Main",
) -> Any:
	"""
	Declare a composite type family.

	Field types may reference the TypeVars passed in `params`:

		T = TypeVar("T")
		Point = new_struct_type("Point", [("x", T), ("y", T)], params=[T])
	"""
	tn = TypeName(
		name=name,
		module=module,
		params=_coerce_params(params),
		supertype=ANY if supertype is None else supertype,
		fields=tuple((str(n), t) for n, t in fields),
		mutable=mutable,
		opaque=opaque,
	)
	return _declare(tn)


# --- queries -------------------------------------------------------------------


def is_type(value: Any) -> bool:
	return isinstance(value, (DataType, UnionAll, UnionType, BottomType))


def _valid_param(p: Any) -> bool:
	if is_type(p) or isinstance(p, (TypeVar, ConstValue, Symbol, Char)):
		return True
	if isinstance(p, (bool, int, float)):
		return True
	if isinstance(p, tuple):
		return all(_valid_param(x) for x in p)
	return False


def has_free_vars(t: Any, bound: frozenset = frozenset()) -> bool:
	if isinstance(t, TypeVar):
		return t not in bound
	if isinstance(t, DataType):
		return any(has_free_vars(p, bound) for p in t.parameters)
	if isinstance(t, UnionAll):
		if has_free_vars(t.var.lb, bound) or has_free_vars(t.var.ub, bound):
			return True
		return has_free_vars(t.body, bound | {t.var})
	if isinstance(t, UnionType):
		return any(has_free_vars(x, bound) for x in t.types)
	return False


def substitute(t: Any, mapping: Mapping[TypeVar, Any]) -> Any:
	"""Replace free occurrences of the mapped variables in `t`."""
	if not mapping:
		return t
	if isinstance(t, TypeVar):
		return mapping.get(t, t)
	if isinstance(t, DataType):
		if not t.parameters:
			return t
		return DataType(t.name, tuple(substitute(p, mapping) for p in t.parameters))
	if isinstance(t, UnionAll):
		var = t.var
		lb = substitute(var.lb, mapping)
		ub = substitute(var.ub, mapping)
		inner = {k: v for k, v in mapping.items() if k is not var}
		if lb != var.lb or ub != var.ub:
			fresh = TypeVar(var.name, lb, ub)
			inner[var] = fresh
			var = fresh
		return UnionAll(var, substitute(t.body, inner))
	if isinstance(t, UnionType):
		return make_union(substitute(x, mapping) for x in t.types)
	return t


def unwrap_unionall(t: Any) -> Tuple[Any, Tuple[TypeVar, ...]]:
	vars_: List[TypeVar] = []
	while isinstance(t, UnionAll):
		vars_.append(t.var)
		t = t.body
	return t, tuple(vars_)


def _param_matches(a: Any, b: Any, bound: frozenset) -> bool:
	if isinstance(b, TypeVar) and b in bound:
		if is_type(a):
			return issubtype(a, b.ub) and issubtype(b.lb, a)
		return True
	if isinstance(a, TypeVar) or isinstance(b, TypeVar):
		return a is b
	if is_type(a) and is_type(b):
		return a == b
	return _same_param(a, b)


def issubtype(a: Any, b: Any) -> bool:
	"""
	Nominal subtype check with invariant parameters.

	Parameters of `b` bound by an enclosing UnionAll match anything inside the
	variable's bounds. This is only used to validate bounds when types are
	applied; it is not a general subtyping algorithm.
	"""
	if b == ANY or a == BOTTOM or a == b:
		return True
	if isinstance(a, TypeVar):
		return issubtype(a.ub, b)
	if isinstance(b, TypeVar):
		return issubtype(a, b.lb) if b.lb != BOTTOM else False
	if isinstance(a, UnionType):
		return all(issubtype(x, b) for x in a.types)
	if isinstance(b, UnionType):
		return any(issubtype(a, x) for x in b.types)
	if isinstance(a, UnionAll):
		return issubtype(unwrap_unionall(a)[0], b)
	target, bound_vars = unwrap_unionall(b)
	if not isinstance(a, DataType) or not isinstance(target, DataType):
		return False
	bound = frozenset(bound_vars)
	t: Optional[DataType] = a
	while t is not None:
		if t.name is target.name:
			if len(t.parameters) != len(target.parameters):
				return False
			return all(_param_matches(x, y, bound) for x, y in zip(t.parameters, target.parameters))
		t = t.supertype
	return False


def make_union(types: Iterable[Any]) -> Any:
	members: List[Any] = []
	for t in types:
		if not (is_type(t) or isinstance(t, TypeVar)):
			raise TypeApplicationError(f"Union member `{show_value(t)}` is not a type")
		if isinstance(t, UnionType):
			candidates = list(t.types)
		elif isinstance(t, BottomType):
			candidates = []
		else:
			candidates = [t]
		for c in candidates:
			if c not in members:
				members.append(c)
	if not members:
		return BOTTOM
	if len(members) == 1:
		return members[0]
	return UnionType(frozenset(members))


def _check_bounds(var: TypeVar, param: Any, base: Any) -> None:
	if isinstance(param, TypeVar):
		return
	if not is_type(param):
		if var.ub != ANY or var.lb != BOTTOM:
			raise TypeApplicationError(
				f"parameter `{show_value(param)}` of `{show_value(base)}` must be a type "
				f"satisfying {show_bounds(var)}"
			)
		return
	# Bounds still mentioning free variables are checked once those are known.
	upper_ok = has_free_vars(var.ub) or issubtype(param, var.ub)
	lower_ok = has_free_vars(var.lb) or issubtype(var.lb, param)
	if not (upper_ok and lower_ok):
		raise TypeApplicationError(
			f"parameter `{show_value(param)}` of `{show_value(base)}` does not satisfy {show_bounds(var)}"
		)


def apply_type(base: Any, params: Sequence[Any]) -> Any:
	"""
	Apply `base` to `params` (`base{params...}`).

	UnionAll wrappers are instantiated outermost variable first; fewer
	parameters than variables leaves a partially applied UnionAll.
	"""
	params = tuple(params)
	for p in params:
		if not _valid_param(p):
			raise TypeApplicationError(f"invalid type parameter `{show_value(p)}` (a value of type {show_value(typeof(p))})")
	if base is UNION:
		return make_union(params)
	if base is TUPLE:
		for p in params:
			if not (is_type(p) or isinstance(p, TypeVar)):
				raise TypeApplicationError(f"Tuple parameter `{show_value(p)}` is not a type")
		return DataType(TUPLE_NAME, params)
	if isinstance(base, DataType):
		if params:
			raise TypeApplicationError(f"too many parameters for type `{show_value(base)}`")
		return base
	if not isinstance(base, UnionAll):
		raise TypeApplicationError(f"`{show_value(base)}` is not a parametric type")
	result: Any = base
	for p in params:
		if not isinstance(result, UnionAll):
			raise TypeApplicationError(f"too many parameters for type `{show_value(base)}`")
		_check_bounds(result.var, p, base)
		result = substitute(result.body, {result.var: p})
	return result


# --- display -------------------------------------------------------------------


def show_bounds(var: TypeVar, anon: Optional[Dict[TypeVar, str]] = None) -> str:
	lb = "" if var.lb == BOTTOM else f"{show_value(var.lb, anon)}<:"
	ub = "" if var.ub == ANY else f"<:{show_value(var.ub, anon)}"
	if lb and not ub:
		return f"{var.name}>:{show_value(var.lb, anon)}"
	return f"{lb}{var.name}{ub}"


def _restriction_text(var: TypeVar, anon: Dict[TypeVar, str]) -> str:
	if var.lb != BOTTOM and var.ub == ANY:
		return f">:{show_value(var.lb, anon)}"
	return f"<:{show_value(var.ub, anon)}"


def show_value(value: Any, anon: Optional[Dict[TypeVar, str]] = None) -> str:
	"""Render a type or type parameter the way the surface syntax writes it."""
	anon = anon if anon is not None else {}
	if isinstance(value, TypeVar):
		return anon.get(value, value.name)
	if isinstance(value, DataType):
		name = value.name.name
		if value.name is TUPLE_NAME or value.parameters:
			inner = ", ".join(show_value(p, anon) for p in value.parameters)
			return f"{name}{{{inner}}}"
		return name
	if isinstance(value, UnionAll):
		body, vars_ = unwrap_unionall(value)
		inner_anon = dict(anon)
		named: List[TypeVar] = []
		for var in vars_:
			if var.anonymous:
				inner_anon[var] = _restriction_text(var, inner_anon)
			else:
				named.append(var)
		text = show_value(body, inner_anon)
		if not named:
			return text
		decls = [show_bounds(v, inner_anon) for v in named]
		if len(decls) == 1:
			return f"{text} where {decls[0]}"
		return f"{text} where {{{', '.join(decls)}}}"
	if isinstance(value, UnionType):
		inner = ", ".join(sorted(show_value(t, anon) for t in value.types))
		return f"Union{{{inner}}}"
	if isinstance(value, (BottomType, SpecialForm, Builtin, Module, ConstValue)):
		return str(value)
	if isinstance(value, (Symbol, Char)):
		return repr(value)
	if isinstance(value, bool):
		return "true" if value else "false"
	if isinstance(value, str):
		return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
	if isinstance(value, tuple):
		inner = ", ".join(show_value(v, anon) for v in value)
		return f"({inner},)" if len(value) == 1 else f"({inner})"
	return repr(value)


# --- builtin types needed by `typeof` ---------------------------------------------


_ANY_NAME = TypeName(name="Any", abstract=True)
ANY = _declare(_ANY_NAME)

UNION = SpecialForm("Union")
TUPLE = SpecialForm("Tuple")
TUPLE_NAME = TypeName(name="Tuple", supertype=ANY)

NUMBER = new_abstract_type("Number")
REAL = new_abstract_type("Real", supertype=NUMBER)
INTEGER = new_abstract_type("Integer", supertype=REAL)
SIGNED = new_abstract_type("Signed", supertype=INTEGER)
UNSIGNED = new_abstract_type("Unsigned", supertype=INTEGER)
ABSTRACT_FLOAT = new_abstract_type("AbstractFloat", supertype=REAL)
ABSTRACT_CHAR = new_abstract_type("AbstractChar")
ABSTRACT_STRING = new_abstract_type("AbstractString")
FUNCTION = new_abstract_type("Function")

BOOL = new_primitive_type("Bool", 1, "bool", supertype=INTEGER)
INT8 = new_primitive_type("Int8", 1, "int", supertype=SIGNED)
INT16 = new_primitive_type("Int16", 2, "int", supertype=SIGNED)
INT32 = new_primitive_type("Int32", 4, "int", supertype=SIGNED)
INT64 = new_primitive_type("Int64", 8, "int", supertype=SIGNED)
INT128 = new_primitive_type("Int128", 16, "int", supertype=SIGNED)
UINT8 = new_primitive_type("UInt8", 1, "uint", supertype=UNSIGNED)
UINT16 = new_primitive_type("UInt16", 2, "uint", supertype=UNSIGNED)
UINT32 = new_primitive_type("UInt32", 4, "uint", supertype=UNSIGNED)
UINT64 = new_primitive_type("UInt64", 8, "uint", supertype=UNSIGNED)
UINT128 = new_primitive_type("UInt128", 16, "uint", supertype=UNSIGNED)
FLOAT16 = new_primitive_type("Float16", 2, "float", supertype=ABSTRACT_FLOAT)
FLOAT32 = new_primitive_type("Float32", 4, "float", supertype=ABSTRACT_FLOAT)
FLOAT64 = new_primitive_type("Float64", 8, "float", supertype=ABSTRACT_FLOAT)
CHAR = new_primitive_type("Char", 4, "char", supertype=ABSTRACT_CHAR)

BIGINT = new_struct_type("BigInt", supertype=SIGNED, mutable=True, opaque=True, module="Base")
STRING = new_struct_type("String", supertype=ABSTRACT_STRING, opaque=True, module="Core")
SYMBOL = new_struct_type("Symbol", opaque=True, module="Core")
NOTHING = new_struct_type("Nothing", module="Core")
DATATYPE = new_struct_type("DataType", opaque=True, module="Core")
UNIONALL = new_struct_type("UnionAll", opaque=True, module="Core")
UNION_TYPE = new_struct_type("Union", opaque=True, module="Core")
TYPEOF_BOTTOM = new_struct_type("TypeofBottom", opaque=True, module="Core")
TYPEVAR = new_struct_type("TypeVar", opaque=True, module="Core")
MODULE = new_struct_type("Module", opaque=True, module="Core")
BUILTIN = new_struct_type("Builtin", supertype=FUNCTION, opaque=True, module="Core")
SPECIAL_FORM = new_struct_type("SpecialForm", opaque=True, module="Core")

NOTHING_VALUE = ConstValue(NOTHING, b"")

_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1
_INT128_MIN, _INT128_MAX = -(2**127), 2**127 - 1


def typeof(value: Any) -> Any:
	"""Dynamic type of any value the evaluator can produce."""
	if isinstance(value, ConstValue):
		return value.type
	if isinstance(value, bool):
		return BOOL
	if isinstance(value, int):
		if _INT64_MIN <= value <= _INT64_MAX:
			return INT64
		if _INT128_MIN <= value <= _INT128_MAX:
			return INT128
		return BIGINT
	if isinstance(value, float):
		return FLOAT64
	if isinstance(value, Symbol):
		return SYMBOL
	if isinstance(value, Char):
		return CHAR
	if isinstance(value, str):
		return STRING
	if isinstance(value, DataType):
		return DATATYPE
	if isinstance(value, UnionAll):
		return UNIONALL
	if isinstance(value, UnionType):
		return UNION_TYPE
	if isinstance(value, BottomType):
		return TYPEOF_BOTTOM
	if isinstance(value, TypeVar):
		return TYPEVAR
	if isinstance(value, Module):
		return MODULE
	if isinstance(value, Builtin):
		return BUILTIN
	if isinstance(value, SpecialForm):
		return SPECIAL_FORM
	if isinstance(value, tuple):
		return DataType(TUPLE_NAME, tuple(typeof(v) for v in value))
	raise TypeSystemError(f"no type for value {value!r}")


__all__ = [
	"ANY",
	"BOTTOM",
	"BottomType",
	"Builtin",
	"Char",
	"ConstValue",
	"DataType",
	"Module",
	"SpecialForm",
	"Symbol",
	"TypeApplicationError",
	"TypeName",
	"TypeSystemError",
	"TypeVar",
	"UnionAll",
	"UnionType",
	"apply_type",
	"has_free_vars",
	"is_type",
	"issubtype",
	"make_union",
	"new_abstract_type",
	"new_primitive_type",
	"new_struct_type",
	"show_bounds",
	"show_value",
	"substitute",
	"typeof",
	"unwrap_unionall",
]
