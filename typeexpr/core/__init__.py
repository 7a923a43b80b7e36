"""
typeexpr.core: the type-system model and namespaces type expressions resolve into.

Modules:
  - types_core: TypeName/DataType/TypeVar/UnionAll/ConstValue and type application
  - layout: fixed-layout sizes and byte packing for constants
  - builtins: Core/Base modules and `main_module()`
  - namespace: the injected read-only Namespace capability
  - diagnostics, span: structured error reporting
"""

__all__ = [
	"builtins",
	"diagnostics",
	"layout",
	"namespace",
	"span",
	"types_core",
]
