# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Byte layout of fixed-layout ("plain old data") types.

A type has a fixed layout when it is a concrete, immutable, non-opaque
`DataType` whose fields all have fixed layouts (primitive bits types are the
leaves). Layout follows natural alignment: every field starts at a multiple
of its own alignment and the total size is rounded up to the largest field
alignment. Primitive values are stored little-endian; `Char` stores the code
point in 4 bytes.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

from .types_core import (
	TUPLE_NAME,
	Char,
	ConstValue,
	DataType,
	TypeSystemError,
	has_free_vars,
	show_value,
	typeof,
)


@dataclass(frozen=True)
class Layout:
	size: int
	align: int
	offsets: Tuple[int, ...] = ()


_FLOAT_FORMATS = {2: "<e", 4: "<f", 8: "<d"}


def is_fixed_layout(t: Any) -> bool:
	if not isinstance(t, DataType):
		return False
	tn = t.name
	if tn.abstract or tn.mutable or tn.opaque or has_free_vars(t):
		return False
	if tn.prim is not None:
		return True
	return all(is_fixed_layout(ft) for ft in t.fieldtypes)


def _round_up(n: int, align: int) -> int:
	return (n + align - 1) // align * align


def _aggregate(field_layouts: Sequence[Layout]) -> Layout:
	offset = 0
	align = 1
	offsets: List[int] = []
	for fl in field_layouts:
		offset = _round_up(offset, fl.align)
		offsets.append(offset)
		offset += fl.size
		align = max(align, fl.align)
	return Layout(size=_round_up(offset, align), align=align, offsets=tuple(offsets))


def layout_of(t: Any) -> Layout:
	"""Layout of a fixed-layout type; TypeSystemError for anything else."""
	if not is_fixed_layout(t):
		raise TypeSystemError(f"`{show_value(t)}` does not have a fixed layout")
	if t.name.prim is not None:
		size = t.name.size or 0
		return Layout(size=size, align=max(1, size))
	return _aggregate([layout_of(ft) for ft in t.fieldtypes])


def pack_value(value: Any) -> Tuple[DataType, bytes]:
	"""Type and byte representation of a single fixed-layout value."""
	if isinstance(value, ConstValue):
		return value.type, value.data
	ty = typeof(value)
	if not is_fixed_layout(ty):
		raise TypeSystemError(f"`{show_value(value)}` of type `{show_value(ty)}` does not have a fixed layout")
	return ty, _pack_primitive(ty, value)


def _pack_primitive(ty: DataType, value: Any) -> bytes:
	prim, size = ty.name.prim, ty.name.size or 0
	if prim == "bool":
		return b"\x01" if value else b"\x00"
	if prim == "char":
		return ord(value).to_bytes(size, "little")
	if prim == "float":
		return struct.pack(_FLOAT_FORMATS[size], float(value))
	return int(value).to_bytes(size, "little", signed=(prim == "int"))


def pack_values(values: Sequence[Any]) -> Tuple[Layout, bytes]:
	"""Lay out `values` as an immutable tuple and return its layout and bytes."""
	packed = [pack_value(v) for v in values]
	layout = _aggregate([layout_of(ty) for ty, _ in packed])
	buf = bytearray(layout.size)
	for offset, (_, data) in zip(layout.offsets, packed):
		buf[offset : offset + len(data)] = data
	return layout, bytes(buf)


def _decode(ty: DataType, data: bytes) -> Any:
	tn = ty.name
	if tn.prim == "bool":
		return data[0] != 0
	if tn.prim == "char":
		return Char(chr(int.from_bytes(data, "little")))
	if tn.prim == "float":
		return struct.unpack(_FLOAT_FORMATS[len(data)], data)[0]
	if tn.prim is not None:
		return int.from_bytes(data, "little", signed=(tn.prim == "int"))
	layout = layout_of(ty)
	out = []
	for offset, ft in zip(layout.offsets, ty.fieldtypes):
		size = layout_of(ft).size
		out.append(ConstValue(ft, data[offset : offset + size]))
	return tuple(out)


def const_fields(value: ConstValue) -> Tuple[Any, ...]:
	"""Decoded field values of a struct constant (nested structs stay ConstValues)."""
	decoded = _decode(value.type, value.data)
	return decoded if isinstance(decoded, tuple) else (decoded,)


def describe_const(value: ConstValue) -> str:
	ty = value.type
	if ty.name.prim is not None:
		return f"{show_value(ty)}({show_value(_decode(ty, value.data))})"
	parts = []
	for field_value in const_fields(value):
		if field_value.type.name.prim is not None:
			parts.append(show_value(_decode(field_value.type, field_value.data)))
		else:
			parts.append(describe_const(field_value))
	prefix = "" if ty.name is TUPLE_NAME else show_value(ty)
	if ty.name is TUPLE_NAME and len(parts) == 1:
		return f"({parts[0]},)"
	return f"{prefix}({', '.join(parts)})"


__all__ = [
	"Layout",
	"const_fields",
	"describe_const",
	"is_fixed_layout",
	"layout_of",
	"pack_value",
	"pack_values",
]
