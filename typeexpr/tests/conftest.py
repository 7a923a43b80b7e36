# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import pytest

from typeexpr.core import types_core as tc
from typeexpr.core.builtins import main_module
from typeexpr.core.namespace import ModuleNamespace
from typeexpr.core.types_core import Module, TypeVar, new_struct_type


@pytest.fixture
def main() -> Module:
	"""
	A `Main` module with a few user types:

	- `Point` (two Int64 fields, fixed layout)
	- `Pt{T}` (parametric point)
	- `Geo.Shapes.Circle` (nested modules)
	- `Boxed` (mutable, so not fixed layout)
	"""
	mod = main_module()
	mod.define("Point", new_struct_type("Point", [("x", tc.INT64), ("y", tc.INT64)]))
	T = TypeVar("T")
	mod.define("Pt", new_struct_type("Pt", [("x", T), ("y", T)], params=[T]))
	mod.define("Boxed", new_struct_type("Boxed", [("v", tc.INT64)], mutable=True))
	geo = Module("Geo", parent=mod)
	shapes = Module("Shapes", parent=geo)
	shapes.define("Circle", new_struct_type("Circle", [("r", tc.FLOAT64)]))
	geo.define("Shapes", shapes)
	mod.define("Geo", geo)
	return mod


@pytest.fixture
def ns(main: Module) -> ModuleNamespace:
	return ModuleNamespace(main)
