"""
Surface parser for type expressions.

Turns text such as `Dict{K, V} where {K, V<:K}` into the immutable expression
tree defined in `typeexpr.parser.ast`. The parser only builds syntax; names are
not resolved and nothing is evaluated here.
"""

from .parser import parse_type_expr

__all__ = ["parse_type_expr"]
